from datetime import date

import pytest

from deadline_reminder.notification.composer import (
    ComposerConfig,
    NotificationComposer,
    source_url,
)
from deadline_reminder.notification.models import DividerBlock, FieldsBlock, HeaderBlock

TODAY = date(2025, 1, 1)


def _composer(**overrides) -> NotificationComposer:
    return NotificationComposer(ComposerConfig(repository="acme/app", **overrides))


class TestSourceUrl:
    def test_builds_line_link(self) -> None:
        url = source_url("acme/app", "main", "lib/a.dart", 12)
        assert url == "https://github.com/acme/app/blob/main/lib/a.dart#L12"

    def test_strips_leading_dot_slash_and_custom_server(self) -> None:
        url = source_url("acme/app", "dev", "./lib/a.dart", 1, "https://ghe.example.com/")
        assert url == "https://ghe.example.com/acme/app/blob/dev/lib/a.dart#L1"


class TestCompose:
    def test_unknown_language(self) -> None:
        with pytest.raises(ValueError):
            _composer(language="fr")

    def test_no_records_gives_acknowledgement(self) -> None:
        message = _composer().compose([], TODAY)

        assert message.summary_text == "No deadlines require attention today"
        assert len(message.blocks) == 1

    def test_layout_for_single_record(self, make_record) -> None:
        record = make_record(description="Remove it")
        message = _composer(channel="#dev").compose([record], TODAY)
        payload = message.to_payload()

        assert isinstance(message.blocks[0], HeaderBlock)
        assert message.blocks[0].text.text == "Deadline Reminder"
        assert payload["channel"] == "#dev"
        assert payload["text"] == ":warning: Deadline Reminder - 1 deadline(s) found"
        assert message.blocks[3].text.text == ":alarm_clock: *Deadline reached*"
        grid = message.blocks[4]
        assert isinstance(grid, FieldsBlock)
        assert len(grid.fields) == 3
        assert "<https://github.com/acme/app/blob/main/lib/legacy.dart#L3|lib/legacy.dart>" in (
            grid.fields[2].text
        )
        assert message.blocks[5].text.text == "*Description:* Remove it"
        assert isinstance(message.blocks[-1], DividerBlock)

    def test_attributed_record_splits_fields_and_mentions(self, make_record) -> None:
        record = make_record(author="Dev", email="dev@example.com")
        composer = _composer(mention_map={"Dev": "U1"})

        blocks = composer.compose([record], TODAY).blocks

        assert blocks[3].text.text.endswith("<@U1>")
        assert isinstance(blocks[4], FieldsBlock)
        assert isinstance(blocks[5], FieldsBlock)
        assert blocks[5].fields[1].text == "*Author:*\nDev"

    @pytest.mark.parametrize(
        ("deadline", "expected"),
        [
            (date(2024, 12, 29), ":rotating_light: *Deadline passed (3 day(s) overdue)*"),
            (date(2025, 1, 3), ":warning: *Deadline approaching (2 day(s) remaining)*"),
            (date(2025, 1, 20), ":calendar: *Deadline approaching (19 day(s) remaining)*"),
        ],
    )
    def test_status_line(self, make_record, deadline: date, expected: str) -> None:
        blocks = _composer().compose([make_record(deadline=deadline)], TODAY).blocks
        assert blocks[3].text.text == expected

    def test_japanese(self, make_record) -> None:
        message = _composer(language="ja").compose([make_record()], TODAY)
        assert "1 件のデッドライン" in message.summary_text

    def test_block_budget_with_more_notice(self, make_record) -> None:
        records = [make_record(element_name=f"e{i}", line_number=i + 1) for i in range(40)]

        message = _composer().compose(records, TODAY)

        assert len(message.blocks) <= 30
        shown = sum(1 for b in message.blocks if isinstance(b, FieldsBlock))
        assert shown < 40
        assert message.blocks[-1].text.text == f"...and {40 - shown} more deadline(s)"

    def test_exact_fit_needs_no_notice(self, make_record) -> None:
        records = [make_record(element_name=f"e{i}") for i in range(9)]

        message = _composer().compose(records, TODAY)

        assert len(message.blocks) == 30
        assert isinstance(message.blocks[-1], DividerBlock)


class TestComposeFromTemplate:
    def test_renders_placeholders(self, make_record) -> None:
        template = "{{count}}|{{date}}|{{elementName}}|{{author}}|{{daysDiff}}|{{githubUrl}}"
        composer = _composer(custom_template=template)

        message = composer.compose_notification([make_record(deadline=date(2025, 1, 3))], TODAY)

        assert message.blocks == []
        assert message.summary_text == (
            "1|2025-01-01|LegacyAuthService|Unknown|2|"
            "https://github.com/acme/app/blob/main/lib/legacy.dart#L3"
        )

    def test_code_and_mentions(self, make_record) -> None:
        composer = _composer(custom_template="{{slackMention}} {{mention}}\n{{codeBlock}}")
        record = make_record(mention_directive="@here", code_excerpt="int x = 1;")

        message = composer.compose_notification([record], TODAY)

        assert message.summary_text == "@here @here\nint x = 1;"

    def test_json_template_with_nested_object(self, make_record) -> None:
        template = '{"text": "{{count}} due: {{elementName}}", "unfurl": {"links": true}}'
        composer = _composer(custom_template=template)

        message = composer.compose_notification([make_record()], TODAY)

        assert message.blocks == []
        assert message.summary_text == (
            '{"text": "1 due: LegacyAuthService", "unfurl": {"links": true}}'
        )

    def test_malformed_template_falls_back(self, make_record) -> None:
        records = [make_record()]
        fallback = _composer(custom_template="{{elementName").compose_notification(records, TODAY)

        assert fallback == _composer().compose(records, TODAY)

    def test_no_records_uses_acknowledgement(self) -> None:
        message = _composer(custom_template="{{elementName}}").compose_notification([], TODAY)
        assert message.summary_text == "No deadlines require attention today"
