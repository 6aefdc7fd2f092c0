"""CSS scanner.

Single left-to-right scan that drops block comments, collapses whitespace
and tightens the space around punctuation, without touching quoted
strings.

State:
- inside a block comment
- inside a quoted string (and which quote opened it)
- inside a ``url(...)`` call, with a paren depth so nested parens do not
  end it early; while inside, ``/*`` is not a comment start
- a collapsed space waiting to be emitted

Comments starting with ``/*!`` are "important" (licenses, banners) and are
copied verbatim.
"""

from __future__ import annotations

from minifyx.scanners.modes import CSS_TIGHT_PUNCT, WHITESPACE
from minifyx.stringbuilder import StringBuilder


def _starts_url(source: str, pos: int) -> bool:
    """Return True if a case-insensitive ``url(`` starts at pos."""
    return source[pos : pos + 3].lower() == "url" and source[pos + 3 : pos + 4] == "("


def minify_css(source: str) -> str:
    """Minify a CSS stylesheet.

    Args:
        source: CSS source text

    Returns:
        Minified CSS. Never raises: an unterminated comment or string simply
        runs to the end of input.

    Example:
        >>> minify_css("/* cmt */ body { color: red ; margin : 0 ; }")
        'body{color:red;margin:0;}'
    """
    out = StringBuilder()
    n = len(source)
    pos = 0

    in_url = False
    url_depth = 0
    pending_space = False

    while pos < n:
        char = source[pos]

        # url( ... ) tracking, outside strings and comments
        if not in_url and char in "uU" and _starts_url(source, pos):
            in_url = True
            url_depth = 0
        if in_url:
            if char == "(":
                url_depth += 1
            elif char == ")":
                if url_depth > 0:
                    url_depth -= 1
                if url_depth == 0:
                    in_url = False

        if char == "/" and not in_url and source.startswith("/*", pos):
            end = source.find("*/", pos + 2)
            end = n if end == -1 else end + 2
            if source.startswith("/*!", pos):
                if pending_space and out.last not in CSS_TIGHT_PUNCT:
                    out.append_space()
                pending_space = False
                out.append(source[pos:end])
            elif out.last == "/" and source.startswith("*", end):
                # Dropping the comment must not fuse "/" and "*" into a new one
                pending_space = True
            pos = end
            continue

        if char == "'" or char == '"':
            if pending_space and out.last not in CSS_TIGHT_PUNCT:
                out.append_space()
            pending_space = False
            pos = _copy_string(source, pos, out)
            continue

        if char in WHITESPACE:
            pending_space = True
            pos += 1
            continue

        if pending_space:
            # No space next to punctuation, and none at the start of output
            if char not in CSS_TIGHT_PUNCT and out.last not in CSS_TIGHT_PUNCT:
                out.append_space()
            pending_space = False
        out.append(char)
        pos += 1

    return out.build()


def _copy_string(source: str, pos: int, out: StringBuilder) -> int:
    """Copy a quoted string starting at pos verbatim; return the position after it.

    A backslash always consumes the following character, so an escaped
    quote never closes the string.
    """
    quote = source[pos]
    n = len(source)
    end = pos + 1
    while end < n:
        char = source[end]
        if char == "\\":
            end += 2
            continue
        end += 1
        if char == quote:
            break
    end = min(end, n)
    out.append(source[pos:end])
    return end
