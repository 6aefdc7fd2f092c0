"""Single-pass HTML region lexer for minifyx.

The lexer walks an HTML document once and emits a flat stream of events:
text, opening tags, closing tags, comments and protected blocks (the
``pre``, ``code``, ``textarea``, ``template``, ``script`` and ``style``
elements, each with its raw content and closing tag). The HTML minifier
consumes this stream once to decide what to hide behind placeholders.

Architecture:
lexer/
├── __init__.py          # Re-exports HtmlLexer
├── core.py              # HtmlLexer (find, classify, commit)
└── modes.py             # Tag classes (protected, inline, block)

Usage:
    >>> from minifyx.lexer import HtmlLexer
    >>> for event in HtmlLexer("<p>Hi</p><pre> x </pre>").tokenize():
    ...     print(event)
HtmlEvent(TAG_OPEN, '<p>', @0)
HtmlEvent(TEXT, 'Hi', @3)
HtmlEvent(TAG_CLOSE, '</p>', @5)
HtmlEvent(PROTECTED_BLOCK, '<pre> x </pre>', @9)

"""

from minifyx.lexer.core import HtmlLexer

__all__ = ["HtmlLexer"]
