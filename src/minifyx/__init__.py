"""
Minifyx: whitespace-aware minifier for HTML, CSS, JS, JSON and XML

Hand-written character scanners, one per language, with an HTML pipeline
that protects ``<pre>``, ``<textarea>``, ``<script>``, ``<style>`` and
friends behind placeholders while the rest of the document is collapsed.
Zero runtime dependencies, no shared mutable state.

Quick Start:
    >>> from minifyx import minify
    >>> minify("<p>\\n  <b>Hello</b>   <i>World</i>\\n</p>", "html")
    '<p><b>Hello</b> <i>World</i></p>'
    >>> minify("a { color : red ; }", "css")
    'a{color:red;}'

Options:
    >>> from minifyx import MinifyOptions, minify_html
    >>> opts = MinifyOptions(remove_html_comments=False)
    >>> minify_html("<p><!-- kept --></p>", opts)
    '<p><!-- kept --></p>'

Files:
    >>> from minifyx import minify_file
    >>> css = minify_file("site/main.css")  # type detected from extension

Command line:
    minifyx index.html main.css -o dist/
"""

from minifyx.config import (
    MinifyOptions,
    get_minify_options,
    minify_options_context,
    reset_minify_options,
    set_minify_options,
)
from minifyx.content import ContentType, detect_type
from minifyx.errors import MinifyxError, UnsupportedTypeError
from minifyx.lexer import HtmlLexer
from minifyx.minifier import (
    minify,
    minify_file,
    minify_html,
    minify_stream,
    minify_to_stream,
)
from minifyx.placeholders import PlaceholderTable
from minifyx.scanners import minify_css, minify_js, minify_json, minify_xml
from minifyx.tokens import HtmlEvent, HtmlEventType

__version__ = "0.1.0"

__all__ = [
    # Core API
    "minify",
    "minify_html",
    "minify_css",
    "minify_js",
    "minify_json",
    "minify_xml",
    "minify_file",
    "minify_stream",
    "minify_to_stream",
    "detect_type",
    "ContentType",
    # Configuration
    "MinifyOptions",
    "get_minify_options",
    "set_minify_options",
    "reset_minify_options",
    "minify_options_context",
    # Errors
    "MinifyxError",
    "UnsupportedTypeError",
    # Lexer
    "HtmlLexer",
    "HtmlEvent",
    "HtmlEventType",
    "PlaceholderTable",
    # Version
    "__version__",
]
