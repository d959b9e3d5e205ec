"""Best-effort extraction of the declaration that follows an annotation.

This is a structural scanner, not a parser: declaration kinds are recognized
by anchored patterns and bodies are delimited with depth counters. Braces,
brackets and semicolons inside string literals are counted like code.
"""

import re

from deadline_reminder.scanner.models import ExtractedCode

UNKNOWN_ELEMENT = "unknown"
ANONYMOUS_EXTENSION = "anonymous extension"
TRUNCATION_MARKER = "  // ... (truncated)"
DEFAULT_MAX_LINES = 15
FALLBACK_LINES = 5

_LEADING_WHITESPACE = re.compile(r"\s*")

# Brace-bodied declarations, tried in order.
_CLASS = re.compile(r"(?:abstract\s+)?class\s+(\w+)[^{]*\{")
_MIXIN = re.compile(r"mixin\s+(\w+)[^{]*\{")
_EXTENSION = re.compile(r"extension\b(?:\s+(?!on\b)(\w+))?[^{]*\{")
_ENUM = re.compile(r"enum\s+(\w+)[^{]*\{")
_BRACE_BODIED = (_CLASS, _MIXIN, _EXTENSION, _ENUM)

_FUNCTION = re.compile(
    r"(?:static\s+)?"
    r"(?:Future<[^>]+>|Stream<[^>]+>|void|int|double|bool|String|dynamic|var|final|const"
    r"|[\w<>,\s]+)"
    r"\s+(?:get\s+)?(\w+)\s*(?:<[^>]+>)?\s*\([^)]*\)[^{;]*"
)
_GETTER = re.compile(r"(?:static\s+)?[\w<>,\s]+\s+get\s+(\w+)")
_VARIABLE = re.compile(
    r"(?:static\s+)?(?:final\s+|const\s+|var\s+|late\s+)?(?:[\w<>,\s]+\s+)?(\w+)\s*="
)

_FALLBACK_NAME = re.compile(
    r"(?:class|mixin|extension|enum|void|Future|Stream|int|double|bool|String"
    r"|dynamic|var|final|const)\s+(\w+)"
)

_OPENERS = "([{"
_CLOSERS = ")]}"


def balanced_span(text: str, start: int = 0) -> str:
    """Return ``text[start:]`` up to and including the brace that closes the first ``{``.

    If the braces never balance, everything from ``start`` is returned.
    """
    depth = 0
    opened = False
    for index in range(start, len(text)):
        char = text[index]
        if char == "{":
            depth += 1
            opened = True
        elif char == "}":
            depth -= 1
            if opened and depth == 0:
                return text[start : index + 1]
    return text[start:]


def statement_end(text: str) -> int:
    """Offset just past the first ``;`` outside any ``()``, ``[]`` or ``{}``.

    Returns 0 if no such semicolon exists.
    """
    depth = 0
    for index, char in enumerate(text):
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
        elif char == ";" and depth == 0:
            return index + 1
    return 0


def truncate_lines(code: str, max_lines: int = DEFAULT_MAX_LINES) -> str:
    lines = code.split("\n")
    if len(lines) <= max_lines:
        return code
    return "\n".join(lines[:max_lines]) + "\n" + TRUNCATION_MARKER


class CodeBlockExtractor:
    """Classifies the declaration after an annotation and extracts its source."""

    def __init__(self, max_lines: int = DEFAULT_MAX_LINES) -> None:
        self._max_lines = max_lines

    def extract(self, text: str) -> ExtractedCode:
        """Extract the declaration at the start of ``text``.

        Only leading whitespace is skipped; a second annotation stacked directly
        below the first one is treated as the start of the declaration.
        """
        code = text[_LEADING_WHITESPACE.match(text).end() :]
        excerpt, name = self._classify(code)
        return ExtractedCode(
            code_excerpt=truncate_lines(excerpt, self._max_lines),
            element_name=name,
        )

    def _classify(self, code: str) -> tuple[str, str]:
        for pattern in _BRACE_BODIED:
            match = pattern.match(code)
            if match:
                return balanced_span(code), match.group(1) or ANONYMOUS_EXTENSION

        match = _FUNCTION.match(code)
        if match:
            return self._with_body(code, match.end(), terminate=True), match.group(1)

        match = _GETTER.match(code)
        if match:
            return self._with_body(code, match.end(), terminate=False), match.group(1)

        match = _VARIABLE.match(code)
        if match:
            end = statement_end(code[match.end() :])
            return code[: match.end() + end], match.group(1)

        return self._fallback(code)

    @staticmethod
    def _with_body(code: str, signature_end: int, *, terminate: bool) -> str:
        signature = code[:signature_end]
        rest = code[signature_end:]
        body = rest.lstrip()
        if body.startswith("{"):
            brace = signature_end + len(rest) - len(body)
            return code[:brace] + balanced_span(code, brace)
        if body.startswith("=>"):
            semicolon = rest.find(";")
            return signature + rest[: semicolon + 1]
        # Abstract or external declarations end at the signature.
        return signature + ";" if terminate else signature

    @staticmethod
    def _fallback(code: str) -> tuple[str, str]:
        excerpt = "\n".join(code.split("\n")[:FALLBACK_LINES])
        match = _FALLBACK_NAME.search(excerpt)
        return excerpt, match.group(1) if match else UNKNOWN_ELEMENT
