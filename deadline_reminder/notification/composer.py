import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from deadline_reminder.logging.logger import Log
from deadline_reminder.notification.dates import days_between, format_date
from deadline_reminder.notification.exceptions import TemplateError
from deadline_reminder.notification.mentions import resolve_mention
from deadline_reminder.notification.messages import (
    MESSAGES,
    STATUS_EMOJI,
    DeadlineStatus,
    Messages,
)
from deadline_reminder.notification.models import (
    DisplayBlock,
    NotificationMessage,
    divider,
    fields,
    header,
    section,
)
from deadline_reminder.notification.template import MessageTemplate
from deadline_reminder.scanner.models import AnnotationRecord

DEFAULT_MAX_BLOCKS = 30
_EMOJI_SHORTCODE = re.compile(r":[^:\s]+:")


@dataclass(frozen=True)
class ComposerConfig:
    """Settings consumed by the notification composer."""

    repository: str
    language: str = "en"
    default_branch: str = "main"
    server_url: str = "https://github.com"
    mention_map: dict[str, str] = field(default_factory=dict)
    channel: str | None = None
    custom_template: str | None = None
    max_blocks: int = DEFAULT_MAX_BLOCKS


def source_url(
    repository: str,
    branch: str,
    path: str,
    line_number: int,
    server_url: str = "https://github.com",
) -> str:
    """Link to a line of a file on the repository's default branch."""
    clean_path = path[2:] if path.startswith("./") else path
    return f"{server_url.rstrip('/')}/{repository}/blob/{branch}/{clean_path}#L{line_number}"


class NotificationComposer:
    """Builds Slack messages for annotation records."""

    def __init__(self, config: ComposerConfig) -> None:
        if config.language not in MESSAGES:
            raise ValueError(
                f"Unsupported language '{config.language}'. Choose from: {sorted(MESSAGES)}"
            )
        self._config = config
        self._msg: Messages = MESSAGES[config.language]

    def compose_notification(
        self, records: Sequence[AnnotationRecord], reference_date: date
    ) -> NotificationMessage:
        """Use the custom template when one is configured, else the default layout."""
        if self._config.custom_template:
            return self.compose_from_template(records, reference_date)
        return self.compose(records, reference_date)

    def compose(
        self, records: Sequence[AnnotationRecord], reference_date: date
    ) -> NotificationMessage:
        """Default block layout, bounded to ``max_blocks`` blocks."""
        msg = self._msg
        if not records:
            return NotificationMessage(
                summary_text=msg.no_deadlines,
                blocks=[section(f":white_check_mark: {msg.no_deadlines}")],
                channel=self._config.channel,
            )

        summary = msg.summary.format(count=len(records))
        blocks: list[DisplayBlock] = [
            header(_EMOJI_SHORTCODE.sub("", msg.title).strip()),
            section(summary),
            divider(),
        ]
        shown = 0
        for index, record in enumerate(records):
            group = self._record_blocks(record, reference_date)
            reserved = 1 if index < len(records) - 1 else 0
            if len(blocks) + len(group) + reserved > self._config.max_blocks:
                break
            blocks.extend(group)
            shown += 1

        hidden = len(records) - shown
        if hidden:
            blocks.append(section(msg.more.format(count=hidden)))
            Log.info(f"Message block budget reached: {hidden} deadline(s) summarized")

        return NotificationMessage(
            summary_text=f"{msg.title} - {summary}",
            blocks=blocks,
            channel=self._config.channel,
        )

    def compose_from_template(
        self, records: Sequence[AnnotationRecord], reference_date: date
    ) -> NotificationMessage:
        """Render the custom template once per record.

        Falls back to :meth:`compose` when the template cannot be rendered.
        """
        if not records:
            return self.compose(records, reference_date)
        try:
            template = MessageTemplate(self._config.custom_template or "")
            rendered = template.render(
                {"count": str(len(records)), "date": format_date(reference_date)},
                [self._placeholders(record, reference_date) for record in records],
            )
        except TemplateError as exc:
            Log.warning(f"Failed to render custom template, falling back to default: {exc}")
            return self.compose(records, reference_date)
        return NotificationMessage(summary_text=rendered, channel=self._config.channel)

    def _record_blocks(
        self, record: AnnotationRecord, reference_date: date
    ) -> list[DisplayBlock]:
        msg = self._msg
        days_diff = days_between(record.deadline.calendar_date, reference_date)
        emoji = STATUS_EMOJI[DeadlineStatus.from_days(days_diff)]
        mention = resolve_mention(record, self._config.mention_map)
        status_line = f"{emoji} *{msg.status_text(days_diff)}*"
        if mention:
            status_line += f" {mention}"

        url = self._url(record)
        element_field = f"*{msg.element}:*\n`{record.element_name}`"
        deadline_field = f"*{msg.deadline}:*\n{record.deadline.formatted}"
        file_field = (
            f"*{msg.file}:*\n<{url}|{record.source_path}> ({msg.line}: {record.line_number})"
        )

        blocks: list[DisplayBlock] = [section(status_line)]
        if record.attribution is not None:
            author_field = f"*{msg.author}:*\n{record.attribution.author_name}"
            blocks.append(fields(element_field, deadline_field))
            blocks.append(fields(file_field, author_field))
        else:
            blocks.append(fields(element_field, deadline_field, file_field))
        if record.description:
            blocks.append(section(f"*{msg.description}:* {record.description}"))
        blocks.append(divider())
        return blocks

    def _placeholders(self, record: AnnotationRecord, reference_date: date) -> dict[str, str]:
        mention = resolve_mention(record, self._config.mention_map)
        return {
            "elementName": record.element_name,
            "filePath": record.source_path,
            "lineNumber": str(record.line_number),
            "deadline": record.deadline.formatted,
            "author": record.attribution.author_name if record.attribution else "Unknown",
            "description": record.description or "",
            "codeBlock": record.code_excerpt,
            "githubUrl": self._url(record),
            "daysDiff": str(days_between(record.deadline.calendar_date, reference_date)),
            "mention": mention or "",
            "slackMention": record.mention_directive or "",
        }

    def _url(self, record: AnnotationRecord) -> str:
        return source_url(
            self._config.repository,
            self._config.default_branch,
            record.source_path,
            record.line_number,
            self._config.server_url,
        )
