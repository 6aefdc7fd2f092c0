"""HTML minifier and type dispatch.

``minify_html`` stitches the four language scanners together. Sensitive
regions are minified with the matching scanner, hidden behind placeholder
markers while the rest of the document is whitespace-collapsed, and put
back verbatim at the end.

Pipeline (order matters):

 1. drop ``<!-- ... -->`` comments (optionally keeping conditional and
    ``<!--! ... -->`` license comments)
 2. lex the document once; each protected element becomes a placeholder
    after its content is processed:

    - ``pre``: kept, minus one trailing line break when ``trim_pre_right``
    - ``code``: collapsed to one line when ``minify_code_blocks``
    - ``textarea``: trimmed at both ends when ``minify_textarea``
    - ``template``: inner HTML minified when ``minify_html_templates``
    - ``script`` with a template type: inner HTML minified when
      ``minify_script_templates``
    - ``style``: CSS scanner when ``minify_inline_css``
    - ``script`` with a JSON type: JSON scanner when ``minify_json_scripts``
    - any other ``script``: JS scanner when ``minify_inline_js``

 3. minify ``data-json`` attribute values in place
 4. HTML-aware whitespace pass
 5. drop whitespace next to placeholder markers
 6. restore placeholders
 7. drop whitespace before block-level opening tags, outside restored blocks

Thread Safety:
    Every call builds its own placeholder table and lexer. No shared
    mutable state; safe to call from many threads at once.

"""

from __future__ import annotations

import os
import re
from typing import TextIO

from minifyx.config import MinifyOptions, resolve_options
from minifyx.content import ContentType, detect_type
from minifyx.errors import UnsupportedTypeError
from minifyx.lexer import HtmlLexer
from minifyx.lexer.modes import PROTECTED_TAGS, SCRIPT_JSON_TYPES, SCRIPT_TEMPLATE_TYPES
from minifyx.placeholders import PlaceholderTable
from minifyx.scanners.css import minify_css
from minifyx.scanners.html import (
    collapse_html_whitespace,
    collapse_to_single_line,
    tighten_tag_gaps,
    trim_trailing_newline,
)
from minifyx.scanners.js import minify_js
from minifyx.scanners.json import minify_json
from minifyx.scanners.xml import minify_xml
from minifyx.tokens import HtmlEvent, HtmlEventType
from minifyx.utils.logger import get_logger

logger = get_logger(__name__)

_RE_COMMENT = re.compile(r"<!--[\s\S]*?-->")
_RE_DATA_JSON = re.compile(
    r"""(data-json\s*=\s*)(?:"([^"]*)"|'([^']*)')""",
    re.IGNORECASE,
)
_RE_SCRIPT_TYPE = re.compile(
    r"""(?<![\w-])type\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>]+))""",
    re.IGNORECASE,
)

_UNPROTECTED_PRE = PROTECTED_TAGS - {"pre"}


def minify_html(source: str, options: MinifyOptions | None = None) -> str:
    """Minify an HTML document.

    Args:
        source: HTML source text
        options: Minification options (context default if None)

    Returns:
        Minified HTML

    Example:
        >>> minify_html("<div>\\n  <p>Hi</p>\\n  <pre>  a  b\\n</pre>\\n</div>")
        '<div><p>Hi</p><pre>  a  b</pre></div>'
    """
    opts = resolve_options(options)
    html = source

    if opts.remove_html_comments:
        html = _strip_comments(html, opts)

    table = PlaceholderTable(html)
    html = _protect_regions(html, opts, table)

    if opts.minify_data_json:
        html = _minify_data_json(html)

    if opts.collapse_html_whitespace:
        html = collapse_html_whitespace(html, opts.preserve_inline_tag_spaces)

    if opts.tighten_block_tag_gaps:
        html = table.tighten_gaps(html)

    html, sealed = table.restore_sealed(html)

    if opts.tighten_block_tag_gaps:
        html = tighten_tag_gaps(html, sealed)

    logger.debug("Restored %d protected regions", len(table))
    return html


def _minify_fragment(fragment: str, opts: MinifyOptions) -> str:
    """Minify the inner HTML of a template with its own placeholder table."""
    table = PlaceholderTable(fragment)
    html = _protect_regions(fragment, opts, table)
    if opts.minify_data_json:
        html = _minify_data_json(html)
    html = collapse_html_whitespace(html, opts.preserve_inline_tag_spaces)
    if opts.tighten_block_tag_gaps:
        html = table.tighten_gaps(html)
    html, sealed = table.restore_sealed(html)
    if opts.tighten_block_tag_gaps:
        html = tighten_tag_gaps(html, sealed)
    return html


# =========================================================================
# Pipeline steps
# =========================================================================


def _strip_comments(html: str, opts: MinifyOptions) -> str:
    """Remove HTML comments, keeping conditional/license ones when asked."""

    def replace(match: re.Match[str]) -> str:
        body = match.group(0)[4:]
        if opts.preserve_conditional_comments and body.startswith(("[if", "<![endif]")):
            return match.group(0)
        if opts.preserve_license_comments and body.startswith("!"):
            return match.group(0)
        return ""

    return _RE_COMMENT.sub(replace, html)


def _protect_regions(html: str, opts: MinifyOptions, table: PlaceholderTable) -> str:
    """Replace each protected element with a placeholder holding its processed markup."""
    protected = PROTECTED_TAGS if opts.preserve_pre else _UNPROTECTED_PRE
    parts: list[str] = []
    for event in HtmlLexer(html, protected).tokenize():
        if event.type is HtmlEventType.PROTECTED_BLOCK:
            parts.append(table.add(_process_block(event, opts)))
        else:
            parts.append(event.raw)
    return "".join(parts)


def _process_block(event: HtmlEvent, opts: MinifyOptions) -> str:
    """Run the matching scanner over a protected element's content."""
    tag = event.tag
    inner = event.inner

    if tag == "pre":
        if opts.trim_pre_right:
            inner = trim_trailing_newline(inner)
    elif tag == "code":
        if opts.minify_code_blocks:
            inner = collapse_to_single_line(inner)
    elif tag == "textarea":
        if opts.minify_textarea:
            inner = inner.strip()
    elif tag == "template":
        if opts.minify_html_templates:
            inner = _minify_fragment(inner, opts)
    elif tag == "style":
        if opts.minify_inline_css:
            inner = minify_css(inner)
    elif tag == "script":
        script_type = _script_type(event.open_tag)
        if script_type in SCRIPT_TEMPLATE_TYPES:
            if opts.minify_script_templates:
                inner = _minify_fragment(inner, opts)
        elif script_type in SCRIPT_JSON_TYPES:
            if opts.minify_json_scripts:
                inner = minify_json(inner)
        elif opts.minify_inline_js:
            inner = minify_js(inner)

    return f"{event.open_tag}{inner}{event.close_tag}"


def _script_type(open_tag: str) -> str:
    """Lowercased ``type`` attribute of a script tag ("" when absent)."""
    match = _RE_SCRIPT_TYPE.search(open_tag)
    if match is None:
        return ""
    value = next(group for group in match.groups() if group is not None)
    return value.strip().lower()


def _minify_data_json(html: str) -> str:
    """Minify JSON held in ``data-json`` attribute values, keeping the quote style."""

    def replace(match: re.Match[str]) -> str:
        prefix, double, single = match.groups()
        if double is not None:
            return f'{prefix}"{minify_json(double)}"'
        return f"{prefix}'{minify_json(single)}'"

    return _RE_DATA_JSON.sub(replace, html)


# =========================================================================
# Dispatch
# =========================================================================


def minify(
    source: str,
    content_type: ContentType | str,
    options: MinifyOptions | None = None,
) -> str:
    """Minify text of the given content type.

    Args:
        source: Text to minify
        content_type: ContentType member or its name ("html", "css", ...)
        options: Minification options (context default if None)

    Returns:
        Minified text

    Raises:
        UnsupportedTypeError: content_type is UNKNOWN or not recognised

    Example:
        >>> minify('{ "a": [1, 2] }', "json")
        '{"a":[1,2]}'
    """
    kind = _coerce_type(content_type)

    if kind is ContentType.HTML:
        return minify_html(source, options)
    if kind is ContentType.CSS:
        return minify_css(source)
    if kind is ContentType.JS:
        return minify_js(source)
    if kind is ContentType.JSON:
        return minify_json(source)
    if kind is ContentType.XML:
        return minify_xml(source, options)
    raise UnsupportedTypeError(content_type)


def _coerce_type(content_type: object) -> ContentType:
    if isinstance(content_type, ContentType):
        return content_type
    if isinstance(content_type, str):
        return ContentType.from_name(content_type)
    return ContentType.UNKNOWN


def minify_file(
    path: str | os.PathLike[str],
    options: MinifyOptions | None = None,
    content_type: ContentType | str | None = None,
) -> str:
    """Read a UTF-8 file, detect its type and minify it.

    Args:
        path: File to read
        options: Minification options (context default if None)
        content_type: Force a type instead of detecting it from the extension

    Returns:
        Minified file content

    Raises:
        UnsupportedTypeError: The type is unknown (checked before reading)
        OSError: The file cannot be read
    """
    kind = detect_type(path) if content_type is None else _coerce_type(content_type)
    if kind is ContentType.UNKNOWN:
        raise UnsupportedTypeError(content_type or kind, source_file=os.fspath(path))

    logger.debug("Minifying %s as %s", os.fspath(path), kind.value)
    with open(path, encoding="utf-8") as fh:
        source = fh.read()
    return minify(source, kind, options)


def minify_stream(
    reader: TextIO,
    content_type: ContentType | str,
    options: MinifyOptions | None = None,
) -> str:
    """Read all text from reader and minify it.

    The type is checked before anything is read.
    """
    kind = _coerce_type(content_type)
    if kind is ContentType.UNKNOWN:
        raise UnsupportedTypeError(content_type)
    return minify(reader.read(), kind, options)


def minify_to_stream(
    reader: TextIO,
    writer: TextIO,
    content_type: ContentType | str,
    options: MinifyOptions | None = None,
) -> None:
    """Minify everything from reader and write the result to writer."""
    writer.write(minify_stream(reader, content_type, options))
