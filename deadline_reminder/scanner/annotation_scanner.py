import re
from collections.abc import Iterable
from pathlib import Path

from deadline_reminder.logging.logger import Log
from deadline_reminder.scanner.comments import CommentMap
from deadline_reminder.scanner.exceptions import SourceReadError
from deadline_reminder.scanner.extractor import CodeBlockExtractor
from deadline_reminder.scanner.file_loader import SourceLoader
from deadline_reminder.scanner.models import (
    AnnotationRecord,
    DeadlineDate,
    ParseError,
    ParseOutcome,
)

# Lazy match: argument literals must not contain a closing parenthesis.
DEADLINE_PATTERN = re.compile(r"@Deadline\s*\(\s*(.*?)\s*\)", re.DOTALL)

REQUIRED_PARAMETERS = ("year", "month", "day")
DESCRIPTION_PARAMETER = "description"
MENTION_PARAMETERS = ("slackMention", "mentionDirective")


def parse_named_parameter(arguments: str, name: str) -> str | None:
    """Value of ``name: ...`` in an annotation argument list.

    Tries a single-quoted string, a double-quoted string, then a bare integer.
    """
    key = rf"\b{re.escape(name)}\s*:\s*"
    for value_pattern in (r"'([^']*)'", r'"([^"]*)"', r"(\d+)"):
        match = re.search(key + value_pattern, arguments)
        if match:
            return match.group(1)
    return None


def line_number_at(document: str, offset: int) -> int:
    return document.count("\n", 0, offset) + 1


class AnnotationScanner:
    """Finds @Deadline annotations in source text and parses them into records."""

    def __init__(
        self,
        extractor: CodeBlockExtractor | None = None,
        loader: SourceLoader | None = None,
    ) -> None:
        self._extractor = extractor if extractor is not None else CodeBlockExtractor()
        self._loader = loader if loader is not None else SourceLoader()

    def scan_text(self, document: str, source_path: str) -> ParseOutcome:
        outcome = ParseOutcome(source_path=source_path)
        comments = CommentMap(document)

        for match in DEADLINE_PATTERN.finditer(document):
            if comments.is_commented(match.start()):
                continue
            line_number = line_number_at(document, match.start())
            arguments = match.group(1)

            values = [parse_named_parameter(arguments, name) for name in REQUIRED_PARAMETERS]
            if not all(values):
                outcome.errors.append(
                    ParseError(
                        f"Invalid @Deadline at line {line_number}: "
                        "missing required date parameters",
                        line_number,
                    )
                )
                continue
            try:
                year, month, day = (int(value) for value in values)
                deadline = DeadlineDate(year=year, month=month, day=day)
            except (ValueError, OverflowError) as exc:
                outcome.errors.append(
                    ParseError(
                        f"Invalid @Deadline at line {line_number}: invalid date values ({exc})",
                        line_number,
                    )
                )
                continue

            extracted = self._extractor.extract(document[match.end() :])
            outcome.records.append(
                AnnotationRecord(
                    source_path=source_path,
                    line_number=line_number,
                    deadline=deadline,
                    code_excerpt=extracted.code_excerpt,
                    element_name=extracted.element_name,
                    description=parse_named_parameter(arguments, DESCRIPTION_PARAMETER),
                    mention_directive=self._mention(arguments),
                )
            )
        return outcome

    @staticmethod
    def _mention(arguments: str) -> str | None:
        for name in MENTION_PARAMETERS:
            value = parse_named_parameter(arguments, name)
            if value:
                return value
        return None

    def scan_file(self, path: Path) -> ParseOutcome:
        """Scan one file. Read failures become a document-level error."""
        try:
            document = self._loader.load(path)
        except SourceReadError as exc:
            return ParseOutcome(source_path=str(path), errors=[ParseError(str(exc))])
        return self.scan_text(document, str(path))

    def scan_paths(self, paths: Iterable[Path]) -> list[ParseOutcome]:
        outcomes = []
        for path in paths:
            outcome = self.scan_file(path)
            Log.debug(f"Scanned {path}: {len(outcome.records)} annotations")
            outcomes.append(outcome)
        return outcomes
