"""XML scanner.

Conservative XML minification:

- comments are dropped when ``xml_remove_comments`` is set
- CDATA sections, processing instructions and declarations (DOCTYPE) are
  always copied verbatim
- inside tags, whitespace between the name and attributes collapses to a
  single space when ``xml_collapse_attr_whitespace`` is set; attribute
  values are never touched
- text nodes that are only whitespace are dropped when
  ``xml_collapse_tag_whitespace`` is set; other text nodes lose only their
  leading and trailing whitespace, internal runs are kept as written

Unlike the HTML whitespace pass, internal whitespace in text is never
collapsed, since XML consumers may treat it as significant.
"""

from __future__ import annotations

from minifyx.config import MinifyOptions, resolve_options
from minifyx.scanners.modes import WHITESPACE, XmlMode
from minifyx.stringbuilder import StringBuilder

_WS_CHARS = " \t\r\n"

# (opening delimiter, closing delimiter, mode), checked in order
_MARKUP_OPENERS: tuple[tuple[str, str, XmlMode], ...] = (
    ("<?", "?>", XmlMode.PI),
    ("<!--", "-->", XmlMode.COMMENT),
    ("<![CDATA[", "]]>", XmlMode.CDATA),
    ("<!", ">", XmlMode.DECLARATION),
)


def minify_xml(source: str, options: MinifyOptions | None = None) -> str:
    """Minify an XML document.

    Args:
        source: XML source text
        options: Minification options (context default if None)

    Returns:
        Minified XML. Never raises; unterminated constructs run to the end
        of input.

    Example:
        >>> minify_xml("<root>\\n <child> value </child>\\n</root>")
        '<root><child>value</child></root>'
    """
    opts = resolve_options(options)
    out = StringBuilder()
    text: list[str] = []

    n = len(source)
    pos = 0
    mode = XmlMode.TEXT
    attr_quote = ""

    while pos < n:
        char = source[pos]

        if mode is XmlMode.TEXT:
            if char != "<":
                end = source.find("<", pos)
                end = n if end == -1 else end
                text.append(source[pos:end])
                pos = end
                continue

            _flush_text("".join(text), out, opts)
            text.clear()

            for opener, closer, markup_mode in _MARKUP_OPENERS:
                if source.startswith(opener, pos):
                    pos = _copy_markup(source, pos, opener, closer, markup_mode, out, opts)
                    break
            else:
                out.append("<")
                mode = XmlMode.TAG
                pos += 1
            continue

        if mode is XmlMode.ATTR_VALUE:
            end = source.find(attr_quote, pos)
            end = n if end == -1 else end + 1
            out.append(source[pos:end])
            pos = end
            mode = XmlMode.TAG
            continue

        # XmlMode.TAG
        if char == '"' or char == "'":
            attr_quote = char
            mode = XmlMode.ATTR_VALUE
            out.append(char)
        elif char == ">":
            out.append(char)
            mode = XmlMode.TEXT
        elif char in WHITESPACE:
            if not opts.xml_collapse_attr_whitespace:
                out.append(char)
            elif out.last != " " and (out.last != "<" or _markup_char_follows(source, pos)):
                out.append(" ")
        else:
            out.append(char)
        pos += 1

    _flush_text("".join(text), out, opts)
    return out.build()


def _copy_markup(
    source: str,
    pos: int,
    opener: str,
    closer: str,
    mode: XmlMode,
    out: StringBuilder,
    opts: MinifyOptions,
) -> int:
    """Copy (or drop) one delimited markup construct; return the position after it."""
    end = source.find(closer, pos + len(opener))
    end = len(source) if end == -1 else end + len(closer)
    if not (mode is XmlMode.COMMENT and opts.xml_remove_comments):
        out.append(source[pos:end])
    return end


def _markup_char_follows(source: str, pos: int) -> bool:
    """Return True if the first non-whitespace character from pos is "!" or "?".

    ``< !--`` must keep its space, or the output would read as ``<!--``.
    """
    n = len(source)
    while pos < n and source[pos] in WHITESPACE:
        pos += 1
    return pos < n and source[pos] in "!?"


def _flush_text(text: str, out: StringBuilder, opts: MinifyOptions) -> None:
    """Emit a buffered text node according to the whitespace options."""
    if not text:
        return
    if not opts.xml_collapse_tag_whitespace:
        out.append(text)
        return
    # Whitespace-only nodes vanish; others are trimmed at the edges only
    out.append(text.strip(_WS_CHARS))
