from dataclasses import dataclass, field

from deadline_reminder.processor.pipeline import PipelineContext
from deadline_reminder.scanner.models import AnnotationRecord


@dataclass(frozen=True)
class ReminderResult:
    """Summary of one reminder run."""

    files_scanned: int
    total_annotations: int
    filtered_annotations: int
    parse_errors: int
    delivered: bool
    records: list[AnnotationRecord] = field(default_factory=list)

    @classmethod
    def from_context(cls, context: PipelineContext) -> "ReminderResult":
        return cls(
            files_scanned=len(context.source_files),
            total_annotations=len(context.records),
            filtered_annotations=len(context.filtered_records),
            parse_errors=context.parse_errors,
            delivered=context.delivered,
            records=list(context.filtered_records),
        )
