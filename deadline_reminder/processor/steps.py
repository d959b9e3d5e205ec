import json
import os
from pathlib import Path

from deadline_reminder.blame.enricher import AttributionEnricher
from deadline_reminder.delivery.base import BaseDeliveryClient
from deadline_reminder.logging.logger import Log
from deadline_reminder.notification.composer import NotificationComposer
from deadline_reminder.notification.dates import DateWindowFilter
from deadline_reminder.processor.pipeline import PipelineContext, PipelineStep
from deadline_reminder.scanner.annotation_scanner import AnnotationScanner
from deadline_reminder.scanner.file_loader import SourceFileFinder


class DiscoverSourcesStep(PipelineStep):
    def __init__(self, finder: SourceFileFinder) -> None:
        self._finder = finder

    def run(self, context: PipelineContext) -> PipelineContext:
        Log.info(f"Scanning for @Deadline annotations in: {context.source_root}")
        context.source_files = self._finder.find(context.source_root)
        Log.info(f"Found {len(context.source_files)} source files")
        return context


class ScanStep(PipelineStep):
    """Parses every source file; paths in records become relative to ``base_dir``."""

    def __init__(self, scanner: AnnotationScanner, base_dir: Path) -> None:
        self._scanner = scanner
        self._base_dir = base_dir

    def run(self, context: PipelineContext) -> PipelineContext:
        context.outcomes = self._scanner.scan_paths(context.source_files)
        records = []
        for outcome in context.outcomes:
            relative = self._relative(outcome.source_path)
            for error in outcome.errors:
                Log.warning(error.message, file=relative, line=error.line_number)
            records.extend(record.with_source_path(relative) for record in outcome.records)
        context.records = records

        Log.info(f"Found {len(records)} @Deadline annotations")
        if context.parse_errors:
            Log.warning(f"Encountered {context.parse_errors} parsing errors")
        return context

    def _relative(self, path: str) -> str:
        return Path(os.path.relpath(path, self._base_dir)).as_posix()


class EnrichStep(PipelineStep):
    def __init__(self, enricher: AttributionEnricher) -> None:
        self._enricher = enricher

    def run(self, context: PipelineContext) -> PipelineContext:
        Log.info("Enriching annotations with git blame information...")
        context.records = self._enricher.enrich(context.records)
        return context


class FilterStep(PipelineStep):
    def __init__(self, date_filter: DateWindowFilter) -> None:
        self._date_filter = date_filter

    def run(self, context: PipelineContext) -> PipelineContext:
        context.filtered_records = self._date_filter.filter(
            context.records, context.reference_date
        )
        Log.info(
            f"{len(context.filtered_records)} annotations match notification criteria"
        )
        return context


class ComposeStep(PipelineStep):
    def __init__(self, composer: NotificationComposer, notify_when_empty: bool = False) -> None:
        self._composer = composer
        self._notify_when_empty = notify_when_empty

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.filtered_records and not self._notify_when_empty:
            Log.info("No annotations match the notification criteria. No notification sent.")
            return context
        context.message = self._composer.compose_notification(
            context.filtered_records, context.reference_date
        )
        return context


class DeliverStep(PipelineStep):
    def __init__(self, delivery: BaseDeliveryClient) -> None:
        self._delivery = delivery

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.message is None:
            return context
        Log.info(f"Sending notification via {type(self._delivery).__name__}...")
        self._delivery.send(context.message)
        context.delivered = True
        Log.info("Notification sent successfully")
        return context


class WriteOutputsStep(PipelineStep):
    """Logs a run summary and appends step outputs for GitHub Actions."""

    def __init__(self, output_path: Path | None = None) -> None:
        self._output_path = output_path

    def run(self, context: PipelineContext) -> PipelineContext:
        Log.info(
            f"Scanned {len(context.source_files)} files: "
            f"{len(context.records)} annotations, "
            f"{len(context.filtered_records)} requiring attention, "
            f"{context.parse_errors} parsing errors"
        )
        if self._output_path is None:
            return context
        annotations = [record.to_dict() for record in context.filtered_records]
        lines = [
            f"total_annotations={len(context.records)}",
            f"filtered_annotations={len(context.filtered_records)}",
            f"annotations_json={json.dumps(annotations, ensure_ascii=False)}",
        ]
        with self._output_path.open("a", encoding="utf-8") as handle:
            handle.write("\n".join(lines) + "\n")
        return context
