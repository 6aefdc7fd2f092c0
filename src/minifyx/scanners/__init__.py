"""Language scanners for minifyx.

Each scanner is a pure function over a string:

- css: ``minify_css`` (comments, strings, url() aware)
- json: ``minify_json`` (string aware whitespace strip)
- xml: ``minify_xml`` (comment/CDATA/PI/declaration aware)
- js: ``minify_js`` (two passes: structure, then space tightening)
- html: the HTML-aware whitespace pass used by the HTML minifier
"""

from __future__ import annotations

from minifyx.scanners.css import minify_css
from minifyx.scanners.html import collapse_html_whitespace, tighten_tag_gaps
from minifyx.scanners.js import minify_js
from minifyx.scanners.json import minify_json
from minifyx.scanners.xml import minify_xml

__all__ = [
    "collapse_html_whitespace",
    "minify_css",
    "minify_js",
    "minify_json",
    "minify_xml",
    "tighten_tag_gaps",
]
