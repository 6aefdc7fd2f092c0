"""Event types produced by the HTML region lexer.

The lexer turns an HTML document into a flat stream of HtmlEvent records
that the orchestrator consumes once. Concatenating the ``raw`` text of
every event reproduces the source exactly.

Thread Safety:
HtmlEvent is frozen (immutable) and safe to share across threads.
HtmlEventType is an enum (inherently immutable).

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class HtmlEventType(Enum):
    """Event kinds produced by the HTML region lexer."""

    TEXT = auto()  # Character data between markup
    TAG_OPEN = auto()  # <name ...> or <name .../>
    TAG_CLOSE = auto()  # </name>
    COMMENT = auto()  # <!-- ... -->
    PROTECTED_BLOCK = auto()  # <pre>, <script>, ... with its content and closing tag


@dataclass(frozen=True, slots=True)
class HtmlEvent:
    """A single lexer event.

    Attributes:
        type: The event kind
        raw: Exact source text covered by the event
        offset: Offset of the first character in the source
        tag: Lowercased tag name for tag and block events, "" otherwise
        open_tag: Opening tag of a protected block
        inner: Raw content of a protected block
        close_tag: Closing tag of a protected block

    """

    type: HtmlEventType
    raw: str
    offset: int
    tag: str = ""
    open_tag: str = ""
    inner: str = ""
    close_tag: str = ""

    def __repr__(self) -> str:
        """Compact representation for debugging."""
        val_repr = repr(self.raw[:20] + "..." if len(self.raw) > 20 else self.raw)
        return f"HtmlEvent({self.type.name}, {val_repr}, @{self.offset})"
