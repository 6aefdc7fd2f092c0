"""HTML-aware whitespace pass and gap tightening.

The whitespace pass is a single scan that tracks whether it is in text,
inside a tag, or inside a quoted attribute value:

- inside a tag, whitespace runs collapse to one space (the attribute
  separator); attribute values are copied verbatim
- in text, a whitespace run followed by ``<`` is kept as one space only
  when the tag last seen and the tag about to open are both inline (so
  ``</span> <span>`` keeps its visible gap); otherwise it is dropped, as
  in ``<p>Hello <b>``
- any other whitespace run in text collapses to one space
- the result is trimmed at both ends

Placeholder markers are plain text to this pass.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from collections.abc import Sequence

from minifyx.lexer.modes import BLOCK_GAP_TAGS, INLINE_TAGS
from minifyx.scanners.modes import WHITESPACE, HtmlMode
from minifyx.stringbuilder import StringBuilder

_WS_CHARS = " \t\r\n"

_RE_WS_RUN = re.compile(r"[ \t\r\n]+")
_RE_BLOCK_GAP = re.compile(
    r">\s+<(" + "|".join(rf"{tag}\b" for tag in BLOCK_GAP_TAGS) + ")", re.ASCII
)


def collapse_html_whitespace(source: str, preserve_inline_spaces: bool = True) -> str:
    """Collapse insignificant whitespace in an HTML document or fragment.

    Args:
        source: HTML text (may contain placeholder markers)
        preserve_inline_spaces: Keep one space between two inline tags

    Returns:
        HTML with whitespace collapsed and both ends trimmed

    Example:
        >>> collapse_html_whitespace("<div>\\n  <span>a</span> <b>b</b>\\n</div>")
        '<div><span>a</span> <b>b</b></div>'
    """
    out = StringBuilder()
    n = len(source)
    pos = 0
    mode = HtmlMode.TEXT
    attr_quote = ""
    last_tag_inline = False

    while pos < n:
        char = source[pos]

        if mode is HtmlMode.ATTR_VALUE:
            end = source.find(attr_quote, pos)
            end = n if end == -1 else end + 1
            out.append(source[pos:end])
            pos = end
            mode = HtmlMode.TAG
            continue

        if mode is HtmlMode.TAG:
            if char == '"' or char == "'":
                attr_quote = char
                mode = HtmlMode.ATTR_VALUE
                out.append(char)
            elif char == ">":
                out.append(char)
                mode = HtmlMode.TEXT
            elif char in WHITESPACE:
                if out.last != " " and out.last != "<":
                    out.append(" ")
            else:
                out.append(char)
            pos += 1
            continue

        # HtmlMode.TEXT
        if char == "<":
            last_tag_inline = _is_inline_tag_at(source, pos)
            mode = HtmlMode.TAG
            out.append(char)
            pos += 1
            continue

        if char not in WHITESPACE:
            out.append(char)
            pos += 1
            continue

        end = pos + 1
        while end < n and source[end] in WHITESPACE:
            end += 1

        if end < n:
            if source[end] != "<":
                out.append_space()
            elif preserve_inline_spaces and last_tag_inline and _is_inline_tag_at(source, end):
                out.append_space()
        pos = end

    return out.build().strip(_WS_CHARS)


def tighten_tag_gaps(html: str, sealed: Sequence[tuple[int, int]] = ()) -> str:
    """Remove whitespace between a ``>`` and the opening tag of a block element.

    Args:
        html: HTML text
        sealed: Sorted ``(start, end)`` spans that must not be touched; a gap
            whose ``>`` falls inside one is left as written

    Example:
        >>> tighten_tag_gaps("</title> <style>")
        '</title><style>'
    """
    if not sealed:
        return _RE_BLOCK_GAP.sub(r"><\1", html)

    starts = [start for start, _ in sealed]

    def replace(match: re.Match[str]) -> str:
        idx = bisect_right(starts, match.start()) - 1
        if idx >= 0 and match.start() < sealed[idx][1]:
            return match.group(0)
        return f"><{match.group(1)}"

    return _RE_BLOCK_GAP.sub(replace, html)


def collapse_to_single_line(text: str) -> str:
    """Collapse every whitespace run to one space and trim both ends."""
    return _RE_WS_RUN.sub(" ", text).strip(_WS_CHARS)


def trim_trailing_newline(text: str) -> str:
    """Remove exactly one trailing line break (CRLF, LF or CR).

    Spaces before the line break are kept.
    """
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith(("\n", "\r")):
        return text[:-1]
    return text


def _tag_name_at(source: str, lt: int) -> str:
    """Lowercased name of the tag whose ``<`` is at lt ("" for ``<!``, ``<?``)."""
    pos = lt + 1
    if source.startswith("/", pos):
        pos += 1
    end = pos
    n = len(source)
    while end < n and source[end].isascii() and source[end].isalnum():
        end += 1
    return source[pos:end].lower()


def _is_inline_tag_at(source: str, lt: int) -> bool:
    return _tag_name_at(source, lt) in INLINE_TAGS
