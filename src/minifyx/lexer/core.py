"""Single-pass HTML region lexer.

Implements a find/classify/commit loop: find the next ``<``, classify the
markup that starts there, then commit the position past it. Every event
covers a contiguous slice of the source, so joining the ``raw`` text of
all events reproduces the input exactly.

Protected elements are matched to their closing tag here, once, instead
of by repeated whole-document pattern scans per tag kind. The outermost
protected element wins; nothing inside it is examined.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from minifyx.lexer.modes import NESTABLE_TAGS, PROTECTED_TAGS
from minifyx.tokens import HtmlEvent, HtmlEventType

_NAME_CHARS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-_:.")

_CLOSE_TAG_RE: dict[str, re.Pattern[str]] = {
    tag: re.compile(rf"</{tag}\s*>", re.IGNORECASE) for tag in PROTECTED_TAGS
}
_NESTED_TAG_RE: dict[str, re.Pattern[str]] = {
    tag: re.compile(rf"<(/?){tag}(?=[\s/>])[^>]*>", re.IGNORECASE) for tag in NESTABLE_TAGS
}


class HtmlLexer:
    """Single-pass lexer producing HtmlEvent records.

    Usage:
            >>> lexer = HtmlLexer("<div><style> a { } </style></div>")
            >>> [e.type.name for e in lexer.tokenize()]
            ['TAG_OPEN', 'PROTECTED_BLOCK', 'TAG_CLOSE']

    Thread Safety:
        Lexer instances are single-use. Create one per source string.

    """

    __slots__ = ("_source", "_source_len", "_pos", "_protected")

    def __init__(self, source: str, protected_tags: Iterable[str] = PROTECTED_TAGS) -> None:
        """Initialize lexer with source text.

        Args:
            source: HTML source text
            protected_tags: Element names to emit as PROTECTED_BLOCK events.
                Must be a subset of PROTECTED_TAGS.
        """
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._protected = frozenset(protected_tags) & PROTECTED_TAGS

    def tokenize(self) -> Iterator[HtmlEvent]:
        """Tokenize source into an event stream.

        Yields:
            HtmlEvent objects in source order

        Complexity: O(n) for documents without nestable protected elements.
        """
        source = self._source
        text_start = 0

        while self._pos < self._source_len:
            lt = source.find("<", self._pos)
            if lt == -1:
                break

            event = self._classify_markup(lt)
            if event is None:
                # Not markup ("a < b", "<!DOCTYPE", "<?xml"): stays text
                self._pos = lt + 1
                continue

            if lt > text_start:
                yield HtmlEvent(HtmlEventType.TEXT, source[text_start:lt], text_start)
            yield event
            self._pos = text_start = lt + len(event.raw)

        if text_start < self._source_len:
            yield HtmlEvent(HtmlEventType.TEXT, source[text_start:], text_start)

    # =========================================================================
    # Classification
    # =========================================================================

    def _classify_markup(self, lt: int) -> HtmlEvent | None:
        """Classify the markup starting at lt, or return None for plain text."""
        source = self._source

        if source.startswith("<!--", lt):
            end = source.find("-->", lt + 4)
            end = self._source_len if end == -1 else end + 3
            return HtmlEvent(HtmlEventType.COMMENT, source[lt:end], lt)

        closing = source.startswith("</", lt)
        name_start = lt + 2 if closing else lt + 1
        name_end = self._name_end(name_start)
        if name_end == name_start or not source[name_start].isalpha():
            return None

        tag_end = self._tag_end(name_end)
        if tag_end == -1:
            return None

        tag = source[name_start:name_end].lower()
        raw_tag = source[lt:tag_end]
        if closing:
            return HtmlEvent(HtmlEventType.TAG_CLOSE, raw_tag, lt, tag=tag)

        if tag in self._protected and not raw_tag.endswith("/>"):
            block = self._scan_protected(tag, lt, tag_end)
            if block is not None:
                return block
        return HtmlEvent(HtmlEventType.TAG_OPEN, raw_tag, lt, tag=tag)

    def _scan_protected(self, tag: str, lt: int, content_start: int) -> HtmlEvent | None:
        """Match a protected element to its closing tag.

        Returns:
            PROTECTED_BLOCK event, or None when the element is never closed.
        """
        source = self._source
        if tag in NESTABLE_TAGS:
            match = self._find_nested_close(tag, content_start)
        else:
            match = _CLOSE_TAG_RE[tag].search(source, content_start)
        if match is None:
            return None

        end = match.end()
        return HtmlEvent(
            HtmlEventType.PROTECTED_BLOCK,
            source[lt:end],
            lt,
            tag=tag,
            open_tag=source[lt:content_start],
            inner=source[content_start : match.start()],
            close_tag=match.group(0),
        )

    def _find_nested_close(self, tag: str, content_start: int) -> re.Match[str] | None:
        """Find the closing tag that balances the element opened before content_start."""
        depth = 1
        for match in _NESTED_TAG_RE[tag].finditer(self._source, content_start):
            if match.group(1):
                depth -= 1
                if depth == 0:
                    return match
            elif not match.group(0).endswith("/>"):
                depth += 1
        return None

    # =========================================================================
    # Window navigation helpers
    # =========================================================================

    def _name_end(self, pos: int) -> int:
        """End of the tag name starting at pos."""
        source = self._source
        while pos < self._source_len and source[pos] in _NAME_CHARS:
            pos += 1
        return pos

    def _tag_end(self, pos: int) -> int:
        """Position just past the ">" closing the tag, or -1 if there is none.

        A quote opens an attribute value only right after "=", so a stray
        apostrophe in a malformed tag cannot swallow the rest of the document.
        """
        source = self._source
        n = self._source_len
        after_equals = False
        while pos < n:
            char = source[pos]
            if char == ">":
                return pos + 1
            if after_equals and (char == '"' or char == "'"):
                close = source.find(char, pos + 1)
                if close == -1:
                    return -1
                pos = close + 1
                after_equals = False
                continue
            if char == "=":
                after_equals = True
            elif char not in " \t\r\n":
                after_equals = False
            pos += 1
        return -1
