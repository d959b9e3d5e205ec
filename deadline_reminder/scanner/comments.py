"""Comment detection for annotation matches.

Only ``//`` line comments and non-nesting ``/* ... */`` block comments are
recognized. Markers inside string literals are not distinguished from real
comment markers.
"""

from bisect import bisect_left

_BLOCK_OPEN = "/*"
_BLOCK_CLOSE = "*/"
_LINE_COMMENT = "//"


def block_comment_spans(document: str) -> list[tuple[int, int]]:
    """Return ``(open, close)`` offsets for every block comment.

    ``open`` is the offset of ``/*`` and ``close`` the offset of the ``*`` in the
    matching ``*/``. An unterminated comment closes at ``len(document)``.
    The first ``*/`` after an opener always closes it.
    """
    spans: list[tuple[int, int]] = []
    position = 0
    while True:
        start = document.find(_BLOCK_OPEN, position)
        if start == -1:
            return spans
        end = document.find(_BLOCK_CLOSE, start + 2)
        if end == -1:
            spans.append((start, len(document)))
            return spans
        spans.append((start, end))
        position = end + 2


def _in_line_comment(document: str, offset: int) -> bool:
    line_start = document.rfind("\n", 0, offset) + 1
    return _LINE_COMMENT in document[line_start:offset]


class CommentMap:
    """Block-comment intervals of one document, computed in a single pass."""

    def __init__(self, document: str) -> None:
        self._document = document
        self._spans = block_comment_spans(document)
        self._starts = [start for start, _ in self._spans]

    def in_block_comment(self, offset: int) -> bool:
        index = bisect_left(self._starts, offset) - 1
        if index < 0:
            return False
        _, close = self._spans[index]
        return offset <= close

    def is_commented(self, offset: int) -> bool:
        if self.in_block_comment(offset):
            return True
        return _in_line_comment(self._document, offset)


def is_commented(document: str, offset: int) -> bool:
    """Whether ``offset`` lies inside a comment of ``document``.

    Linear scan from the start of the document; use :class:`CommentMap` when
    querying many offsets of the same document.
    """
    in_block = False
    i = 0
    while i < offset:
        if not in_block and document.startswith(_BLOCK_OPEN, i):
            in_block = True
            i += 2
            continue
        if in_block and document.startswith(_BLOCK_CLOSE, i):
            in_block = False
            i += 2
            continue
        i += 1
    if in_block:
        return True
    return _in_line_comment(document, offset)
