from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from deadline_reminder.notification.models import NotificationMessage
from deadline_reminder.scanner.models import AnnotationRecord, ParseOutcome


@dataclass(slots=True)
class PipelineContext:
    reference_date: date
    source_root: Path
    source_files: list[Path] = field(default_factory=list)
    outcomes: list[ParseOutcome] = field(default_factory=list)
    records: list[AnnotationRecord] = field(default_factory=list)
    filtered_records: list[AnnotationRecord] = field(default_factory=list)
    message: NotificationMessage | None = None
    delivered: bool = False
    error_message: str = ""

    @property
    def parse_errors(self) -> int:
        return sum(len(outcome.errors) for outcome in self.outcomes)


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
