"""``{{placeholder}}`` templates for custom notification text."""

import re
from collections.abc import Mapping, Sequence

from deadline_reminder.notification.exceptions import TemplateError

GLOBAL_PLACEHOLDERS = frozenset({"count", "date"})
RECORD_PLACEHOLDERS = frozenset(
    {
        "elementName",
        "filePath",
        "lineNumber",
        "deadline",
        "author",
        "description",
        "codeBlock",
        "githubUrl",
        "daysDiff",
        "mention",
        "slackMention",
    }
)

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")
_UNCLOSED = re.compile(r"\{\{\s*\w")
RECORD_SEPARATOR = "\n\n"


class MessageTemplate:
    """A validated message template.

    Raises:
        TemplateError: if a ``{{`` opens a placeholder that is never closed, or
            a placeholder name is unknown. Other braces are literal text.
    """

    def __init__(self, source: str) -> None:
        if not source:
            raise TemplateError("Template is empty")
        leftover = _PLACEHOLDER.sub("", source)
        unclosed = _UNCLOSED.search(leftover)
        if unclosed:
            snippet = leftover[unclosed.start() : unclosed.start() + 20]
            raise TemplateError(f"Unclosed placeholder near {snippet!r}")
        unknown = {
            name
            for name in _PLACEHOLDER.findall(source)
            if name not in GLOBAL_PLACEHOLDERS | RECORD_PLACEHOLDERS
        }
        if unknown:
            raise TemplateError(f"Unknown placeholder(s): {sorted(unknown)}")
        self._source = source

    def render(
        self,
        global_values: Mapping[str, str],
        record_values: Sequence[Mapping[str, str]],
    ) -> str:
        """Substitute globals once, then render one copy per record."""
        base = _substitute(self._source, global_values, GLOBAL_PLACEHOLDERS)
        copies = [_substitute(base, values, RECORD_PLACEHOLDERS) for values in record_values]
        return RECORD_SEPARATOR.join(copies)


def _substitute(text: str, values: Mapping[str, str], names: frozenset[str]) -> str:
    def replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in names:
            return match.group(0)
        try:
            return values[name]
        except KeyError as exc:
            raise TemplateError(f"No value for placeholder '{name}'") from exc

    return _PLACEHOLDER.sub(replace, text)
