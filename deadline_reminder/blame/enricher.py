from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from deadline_reminder.blame.base import BaseAttributionLookup
from deadline_reminder.blame.exceptions import AttributionError
from deadline_reminder.logging.logger import Log
from deadline_reminder.scanner.models import AnnotationRecord


class AttributionEnricher:
    """Attaches author information to records, one lookup per record.

    Lookups run on at most ``max_workers`` threads. A failed lookup leaves the
    record unattributed.
    """

    def __init__(self, lookup: BaseAttributionLookup, max_workers: int = 4) -> None:
        self._lookup = lookup
        self._max_workers = max(1, max_workers)

    def enrich(self, records: Sequence[AnnotationRecord]) -> list[AnnotationRecord]:
        if self._max_workers == 1 or len(records) <= 1:
            return [self._enrich_one(record) for record in records]
        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            return list(pool.map(self._enrich_one, records))

    def _enrich_one(self, record: AnnotationRecord) -> AnnotationRecord:
        try:
            attribution = self._lookup.lookup(record.source_path, record.line_number)
        except AttributionError as exc:
            Log.warning(str(exc), file=record.source_path, line=record.line_number)
            return record
        if attribution is None:
            return record
        return record.with_attribution(attribution)
