from collections.abc import Sequence
from datetime import date
from pathlib import Path

from deadline_reminder.blame.base import BaseAttributionLookup
from deadline_reminder.blame.enricher import AttributionEnricher
from deadline_reminder.blame.git_blame_adapter import GitBlameAdapter
from deadline_reminder.config.settings import Settings
from deadline_reminder.delivery.base import BaseDeliveryClient
from deadline_reminder.delivery.factory import DeliveryClientFactory
from deadline_reminder.logging.logger import Log
from deadline_reminder.notification.composer import ComposerConfig, NotificationComposer
from deadline_reminder.notification.dates import DateWindowFilter
from deadline_reminder.processor.models import ReminderResult
from deadline_reminder.processor.pipeline import PipelineContext, PipelineStep
from deadline_reminder.processor.steps import (
    ComposeStep,
    DeliverStep,
    DiscoverSourcesStep,
    EnrichStep,
    FilterStep,
    ScanStep,
    WriteOutputsStep,
)
from deadline_reminder.scanner.annotation_scanner import AnnotationScanner
from deadline_reminder.scanner.extractor import CodeBlockExtractor
from deadline_reminder.scanner.file_loader import SourceFileFinder


class Processor:
    """Runs the reminder pipeline.

    Pipeline: discover -> scan -> enrich -> filter -> compose -> deliver -> report.
    """

    def __init__(self, steps: Sequence[PipelineStep]) -> None:
        self._steps = list(steps)

    def process(self, source_root: Path, reference_date: date) -> ReminderResult:
        Log.info(f"Reference date: {reference_date.isoformat()}")
        context = PipelineContext(reference_date=reference_date, source_root=source_root)
        for step in self._steps:
            try:
                context = step.run(context)
            except Exception as exc:
                context.error_message = str(exc)
                Log.error(f"{type(step).__name__} failed: {exc}")
                raise
        return ReminderResult.from_context(context)


def build_processor(
    settings: Settings,
    base_dir: Path | None = None,
    attribution: BaseAttributionLookup | None = None,
    delivery: BaseDeliveryClient | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    base_dir = base_dir if base_dir is not None else Path.cwd()
    scanner = AnnotationScanner(extractor=CodeBlockExtractor(max_lines=settings.max_code_lines))
    lookup = attribution if attribution is not None else GitBlameAdapter(repo_root=base_dir)
    composer = NotificationComposer(
        ComposerConfig(
            repository=settings.repository,
            language=settings.language,
            default_branch=settings.default_branch,
            server_url=settings.github_server_url,
            mention_map=settings.mention_map,
            channel=settings.slack_channel or None,
            custom_template=settings.custom_template or None,
            max_blocks=settings.max_blocks,
        )
    )
    output_path = Path(settings.github_output) if settings.github_output else None
    return Processor(
        steps=[
            DiscoverSourcesStep(SourceFileFinder(settings.extensions)),
            ScanStep(scanner, base_dir=base_dir),
            EnrichStep(AttributionEnricher(lookup, max_workers=settings.blame_max_workers)),
            FilterStep(
                DateWindowFilter(
                    notify_window_days=settings.notify_days_before,
                    notify_past_deadlines=settings.notify_past_deadlines,
                )
            ),
            ComposeStep(composer, notify_when_empty=settings.notify_when_empty),
            DeliverStep(
                delivery if delivery is not None else DeliveryClientFactory.create(settings)
            ),
            WriteOutputsStep(output_path),
        ]
    )
