"""StringBuilder for O(n) output accumulation.

Every scanner writes its output through a StringBuilder: characters are
appended to a list and joined once at the end, instead of repeated string
concatenation. The builder also remembers the last character written,
which is the piece of state every scanner consults when deciding whether
a collapsed space may be emitted.

Thread Safety:
StringBuilder instances are local to each scanner call.
No shared mutable state.

"""

from __future__ import annotations


class StringBuilder:
    """Efficient string accumulator that tracks its last character.

    Usage:
            >>> sb = StringBuilder()
            >>> sb.append("<p>")
            >>> sb.append("Hello")
            >>> sb.last
            'o'
            >>> sb.build()
            '<p>Hello'

    Thread Safety:
        Instance is local to each scanner call.
        No shared mutable state.

    """

    __slots__ = ("_parts", "last")

    def __init__(self) -> None:
        """Initialize empty StringBuilder."""
        self._parts: list[str] = []
        # Last character appended ("" until something is written)
        self.last: str = ""

    def append(self, s: str) -> StringBuilder:
        """Append a string to the builder.

        Args:
            s: String to append (empty strings are skipped)

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
            self.last = s[-1]
        return self

    def append_space(self) -> StringBuilder:
        """Append a single space unless output is empty or already ends in one.

        Returns:
            self for method chaining
        """
        if self.last and self.last != " ":
            self._parts.append(" ")
            self.last = " "
        return self

    def build(self) -> str:
        """Join all parts into final string.

        Returns:
            Concatenated string of all appended parts
        """
        return "".join(self._parts)

    def __len__(self) -> int:
        """Return number of parts (not total length)."""
        return len(self._parts)

    def __bool__(self) -> bool:
        """Return True if any parts have been appended."""
        return bool(self._parts)
