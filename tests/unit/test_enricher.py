from unittest.mock import MagicMock, patch

from deadline_reminder.blame.base import BaseAttributionLookup
from deadline_reminder.blame.enricher import AttributionEnricher
from deadline_reminder.blame.exceptions import AttributionLookupError
from deadline_reminder.blame.git_blame_adapter import GitBlameAdapter
from deadline_reminder.scanner.models import Attribution


class TestAttributionEnricher:
    def test_attaches_attribution(self, make_record) -> None:
        lookup = MagicMock(spec=BaseAttributionLookup)
        lookup.lookup.return_value = Attribution(author_name="Dev")

        enriched = AttributionEnricher(lookup, max_workers=1).enrich([make_record()])

        assert enriched[0].attribution == Attribution(author_name="Dev")
        lookup.lookup.assert_called_once_with("lib/legacy.dart", 3)

    def test_failure_leaves_record_unattributed(self, make_record) -> None:
        lookup = MagicMock(spec=BaseAttributionLookup)
        lookup.lookup.side_effect = AttributionLookupError("not tracked")

        enriched = AttributionEnricher(lookup).enrich([make_record()])

        assert enriched[0].attribution is None

    def test_none_leaves_record_unattributed(self, make_record) -> None:
        lookup = MagicMock(spec=BaseAttributionLookup)
        lookup.lookup.return_value = None

        assert AttributionEnricher(lookup).enrich([make_record()])[0].attribution is None

    def test_parallel_keeps_order(self, make_record) -> None:
        def by_line(path: str, line_number: int) -> Attribution | None:
            if line_number % 2:
                raise AttributionLookupError("odd")
            return Attribution(author_name=f"dev{line_number}")

        lookup = MagicMock(spec=BaseAttributionLookup)
        lookup.lookup.side_effect = by_line
        records = [make_record(line_number=n) for n in range(1, 9)]

        enriched = AttributionEnricher(lookup, max_workers=4).enrich(records)

        assert [r.line_number for r in enriched] == list(range(1, 9))
        assert [r.attribution.author_name if r.attribution else None for r in enriched] == [
            None, "dev2", None, "dev4", None, "dev6", None, "dev8",
        ]

    def test_malformed_blame_output_leaves_record_unattributed(self, make_record) -> None:
        output = "a" * 40 + " 3 3 1\nauthor Dev\nauthor-time soon\n"
        completed = MagicMock(stdout=output, stderr="", returncode=0)

        with patch("deadline_reminder.blame.git_blame_adapter.subprocess.run", return_value=completed):
            enriched = AttributionEnricher(GitBlameAdapter(), max_workers=1).enrich([make_record()])

        assert enriched[0].attribution is None
