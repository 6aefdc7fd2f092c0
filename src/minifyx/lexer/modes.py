"""HTML tag classes used by the region lexer and the whitespace pass.

This module defines which elements are protected from whitespace
collapsing, which tags count as inline (whitespace between them is
visible), and which count as block-level for gap tightening.
"""

from __future__ import annotations

# Elements whose content is extracted and protected behind a placeholder
PROTECTED_TAGS = frozenset({"pre", "code", "textarea", "template", "script", "style"})

# Protected elements that may legitimately contain themselves
NESTABLE_TAGS = frozenset({"template"})

# Inline elements: a space between two of these is visually significant
INLINE_TAGS = frozenset(
    {
        "span",
        "a",
        "strong",
        "em",
        "b",
        "i",
        "small",
        "label",
        "button",
        "input",
        "select",
        "textarea",
        "abbr",
        "cite",
        "code",
        "s",
        "u",
        "sub",
        "sup",
        "time",
    }
)

# Block-level elements: whitespace before their opening tag is dropped
BLOCK_GAP_TAGS = (
    "title",
    "style",
    "pre",
    "code",
    "textarea",
    "template",
    "script",
    "div",
    "p",
    "h[1-6]",
    "section",
    "article",
    "header",
    "footer",
    "main",
    "nav",
    "ul",
    "ol",
    "li",
    "table",
    "thead",
    "tbody",
    "tfoot",
    "tr",
    "td",
    "th",
    "form",
)

# <script type="..."> values whose content is an HTML template
SCRIPT_TEMPLATE_TYPES = frozenset({"text/html", "text/x-handlebars-template", "text/x-template"})

# <script type="..."> values whose content is JSON
SCRIPT_JSON_TYPES = frozenset({"application/ld+json", "application/json"})
