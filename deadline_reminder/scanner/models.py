from dataclasses import dataclass, field, replace
from datetime import date, datetime

from deadline_reminder.notification.dates import format_date


@dataclass(frozen=True)
class DeadlineDate:
    """Calendar date parsed from the annotation arguments."""

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        # Raises ValueError for combinations that are not a real calendar day.
        date(self.year, self.month, self.day)

    @property
    def calendar_date(self) -> date:
        return date(self.year, self.month, self.day)

    @property
    def formatted(self) -> str:
        return format_date(self.calendar_date)


@dataclass(frozen=True)
class Attribution:
    """Author of the line that introduced an annotation."""

    author_name: str
    author_email: str = ""
    commit_hash: str = ""
    authored_at: datetime | None = None


@dataclass(frozen=True)
class ExtractedCode:
    """Declaration excerpt following an annotation."""

    code_excerpt: str
    element_name: str


@dataclass(frozen=True)
class AnnotationRecord:
    """One parsed @Deadline occurrence."""

    source_path: str
    line_number: int
    deadline: DeadlineDate
    code_excerpt: str
    element_name: str
    description: str | None = None
    mention_directive: str | None = None
    attribution: Attribution | None = None

    def with_attribution(self, attribution: Attribution) -> "AnnotationRecord":
        if self.attribution is not None:
            raise ValueError(
                f"Record {self.source_path}:{self.line_number} is already attributed"
            )
        return replace(self, attribution=attribution)

    def with_source_path(self, source_path: str) -> "AnnotationRecord":
        return replace(self, source_path=source_path)

    def to_dict(self) -> dict[str, object]:
        """Summary used for run outputs."""
        return {
            "filePath": self.source_path,
            "lineNumber": self.line_number,
            "elementName": self.element_name,
            "deadline": self.deadline.formatted,
            "description": self.description,
            "author": self.attribution.author_name if self.attribution else None,
        }


@dataclass(frozen=True)
class ParseError:
    """Non-fatal problem found while scanning a document.

    ``line_number`` is None for document-level failures such as read errors.
    """

    message: str
    line_number: int | None = None

    def __str__(self) -> str:
        return self.message


@dataclass
class ParseOutcome:
    """Records and non-fatal errors collected from one document."""

    source_path: str
    records: list[AnnotationRecord] = field(default_factory=list)
    errors: list[ParseError] = field(default_factory=list)
