"""Scanner modes and character classes.

Each scanner is a small finite state machine. Exactly one mode is active
at any scan position, and modes change only on specific character
patterns (an unescaped matching quote closes a string, ``*/`` closes a
block comment, and so on).
"""

from __future__ import annotations

from enum import Enum, auto


class JsMode(Enum):
    """What a "/" opens in the JavaScript scanner.

    String and template literals are recognised by their opening quote
    alone and are copied in one step, so they need no mode of their own.
    """

    NORMAL = auto()  # Division
    LINE_COMMENT = auto()  # // ... to end of line
    BLOCK_COMMENT = auto()  # /* ... */
    REGEX = auto()  # /.../flags


class XmlMode(Enum):
    """XML scanner modes."""

    TEXT = auto()  # Character data, buffered until the next <
    TAG = auto()  # Inside <name ...>
    ATTR_VALUE = auto()  # Inside a quoted attribute value
    COMMENT = auto()  # <!-- ... -->
    CDATA = auto()  # <![CDATA[ ... ]]>
    PI = auto()  # <? ... ?>
    DECLARATION = auto()  # <!DOCTYPE ...> and other <! ... >


# Whitespace outside literals (space, tab, CR, LF)
WHITESPACE = frozenset(" \t\r\n")

# Punctuation the CSS scanner never leaves a space next to
CSS_TIGHT_PUNCT = frozenset(";:,{}()")

# A "/" after one of these symbols starts a regex literal
JS_REGEX_PRECEDERS = frozenset("=({[,!?:;&|^~<>+-*%")

# A "/" right after one of these keywords starts a regex literal
JS_REGEX_KEYWORDS = frozenset(
    {
        "return",
        "case",
        "throw",
        "else",
        "do",
        "typeof",
        "instanceof",
        "delete",
        "void",
        "in",
        "of",
        "yield",
        "await",
        "new",
        "while",
        "for",
        "if",
        "catch",
        "switch",
    }
)

# Keywords after which a line break terminates the statement
JS_ASI_KEYWORDS = frozenset({"return", "throw", "break", "continue"})

# The tightening pass drops any space next to one of these
JS_NO_SPACE_PUNCT = frozenset("(){}[];,:*/%&|^!~?=<>")


def is_ident_char(char: str) -> bool:
    """Return True for characters that can appear in a JS identifier."""
    return char.isalnum() or char == "_" or char == "$"


class HtmlMode(Enum):
    """HTML whitespace pass modes."""

    TEXT = auto()  # Between tags
    TAG = auto()  # Inside <...>
    ATTR_VALUE = auto()  # Inside a quoted attribute value
