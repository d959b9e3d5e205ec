from dataclasses import dataclass, field
from typing import Literal

PLAIN_TEXT = "plain_text"
MRKDWN = "mrkdwn"
MAX_SECTION_FIELDS = 10


@dataclass(frozen=True)
class TextObject:
    """Slack text composition object."""

    text: str
    type: Literal["plain_text", "mrkdwn"] = MRKDWN
    emoji: bool | None = None

    def __post_init__(self) -> None:
        if self.type not in (PLAIN_TEXT, MRKDWN):
            raise ValueError(f"Unknown text type: {self.type!r}")
        if self.emoji is not None and self.type != PLAIN_TEXT:
            raise ValueError("'emoji' is only valid on plain_text objects")

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"type": self.type, "text": self.text}
        if self.emoji is not None:
            data["emoji"] = self.emoji
        return data


@dataclass(frozen=True)
class HeaderBlock:
    """Large plain-text title."""

    text: TextObject
    type: str = field(default="header", init=False)

    def __post_init__(self) -> None:
        if self.text.type != PLAIN_TEXT:
            raise ValueError("Header text must be plain_text")

    def to_dict(self) -> dict[str, object]:
        return {"type": self.type, "text": self.text.to_dict()}


@dataclass(frozen=True)
class SectionBlock:
    """Section with a single text body."""

    text: TextObject
    type: str = field(default="section", init=False)

    def to_dict(self) -> dict[str, object]:
        return {"type": self.type, "text": self.text.to_dict()}


@dataclass(frozen=True)
class FieldsBlock:
    """Section rendered as a two-column grid of fields."""

    fields: tuple[TextObject, ...]
    type: str = field(default="section", init=False)

    def __post_init__(self) -> None:
        if not 1 <= len(self.fields) <= MAX_SECTION_FIELDS:
            raise ValueError(
                f"A fields section needs 1-{MAX_SECTION_FIELDS} fields, got {len(self.fields)}"
            )

    def to_dict(self) -> dict[str, object]:
        return {"type": self.type, "fields": [f.to_dict() for f in self.fields]}


@dataclass(frozen=True)
class DividerBlock:
    """Horizontal rule."""

    type: str = field(default="divider", init=False)

    def to_dict(self) -> dict[str, object]:
        return {"type": self.type}


DisplayBlock = HeaderBlock | SectionBlock | FieldsBlock | DividerBlock


def header(text: str) -> HeaderBlock:
    return HeaderBlock(TextObject(text, type=PLAIN_TEXT, emoji=True))


def section(text: str) -> SectionBlock:
    return SectionBlock(TextObject(text))


def fields(*texts: str) -> FieldsBlock:
    return FieldsBlock(tuple(TextObject(t) for t in texts))


def divider() -> DividerBlock:
    return DividerBlock()


@dataclass
class NotificationMessage:
    """Composed notification, ready for delivery."""

    summary_text: str
    blocks: list[DisplayBlock] = field(default_factory=list)
    channel: str | None = None

    def to_payload(self) -> dict[str, object]:
        """Wire shape: ``{channel?, text, blocks?}``."""
        payload: dict[str, object] = {}
        if self.channel:
            payload["channel"] = self.channel
        payload["text"] = self.summary_text
        if self.blocks:
            payload["blocks"] = [block.to_dict() for block in self.blocks]
        return payload
