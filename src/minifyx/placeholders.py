"""Placeholder table for two-phase HTML rewriting.

Protected regions (pre, script, style, ...) are swapped for inert markers
before whitespace collapsing and swapped back afterwards. Markers use a
reserved scheme, ``###HOLD_BLOCK_<n>###``, with a counter that only grows,
so no two markers in one table can collide. When the document already
contains ``###HOLD_BLOCK_`` the table switches to ``###HOLD<k>_BLOCK_``
with the smallest ``k`` the document does not contain, so literal text can
never be mistaken for a marker.

Restoration is a single pass: every marker is replaced by its stored block
verbatim, and substituted content is never scanned again.

Thread Safety:
A PlaceholderTable lives for exactly one minify call.
No shared mutable state.

"""

from __future__ import annotations

import re
from collections.abc import Iterator

MARKER_PREFIX = "###HOLD_BLOCK_"
MARKER_SUFFIX = "###"


def _pick_prefix(source: str) -> str:
    """First marker prefix that does not occur in source."""
    prefix = MARKER_PREFIX
    salt = 0
    while prefix in source:
        salt += 1
        prefix = f"###HOLD{salt}_BLOCK_"
    return prefix


class PlaceholderTable:
    """Ordered mapping of marker tokens to protected blocks.

    Usage:
            >>> table = PlaceholderTable()
            >>> marker = table.add("<pre> x </pre>")
            >>> marker
            '###HOLD_BLOCK_0###'
            >>> table.restore(f"<p>{marker}</p>")
            '<p><pre> x </pre></p>'

    """

    __slots__ = (
        "_blocks",
        "_gap_after_tag",
        "_gap_before_tag",
        "_gap_between",
        "_marker_re",
        "prefix",
    )

    def __init__(self, source: str = "") -> None:
        """Initialize an empty table.

        Args:
            source: Document the markers will be placed in; the marker
                prefix is chosen so that it never occurs in it
        """
        self._blocks: dict[str, str] = {}
        self.prefix = _pick_prefix(source)

        marker = re.escape(self.prefix) + r"\d+" + re.escape(MARKER_SUFFIX)
        self._marker_re = re.compile(marker, re.ASCII)
        self._gap_after_tag = re.compile(r">\s+(" + marker + ")", re.ASCII)
        self._gap_between = re.compile("(" + marker + r")\s+(?=" + marker + ")", re.ASCII)
        self._gap_before_tag = re.compile("(" + marker + r")\s+<", re.ASCII)

    def add(self, block: str) -> str:
        """Store a block and return the marker that stands in for it."""
        marker = f"{self.prefix}{len(self._blocks)}{MARKER_SUFFIX}"
        self._blocks[marker] = block
        return marker

    def restore(self, text: str) -> str:
        """Replace every known marker in ``text`` with its block, in one pass."""
        return self.restore_sealed(text)[0]

    def restore_sealed(self, text: str) -> tuple[str, list[tuple[int, int]]]:
        """Restore markers and report where each restored block landed.

        Returns:
            The restored text and a sorted list of ``(start, end)`` spans,
            one per restored block, covering everything but the block's
            final character. A later pass that must not reach into a
            protected block checks its match positions against these spans.
        """
        if not self._blocks:
            return text, []

        parts: list[str] = []
        spans: list[tuple[int, int]] = []
        length = 0
        last = 0
        for match in self._marker_re.finditer(text):
            block = self._blocks.get(match.group(0))
            if block is None:
                continue
            chunk = text[last : match.start()]
            parts.append(chunk)
            length += len(chunk)
            spans.append((length, length + len(block) - 1))
            parts.append(block)
            length += len(block)
            last = match.end()
        parts.append(text[last:])
        return "".join(parts), spans

    def tighten_gaps(self, text: str) -> str:
        """Remove whitespace between markers and adjacent tags or markers.

        ``>  ###HOLD_BLOCK_0###`` loses the gap after the tag,
        ``###HOLD_BLOCK_0###  ###HOLD_BLOCK_1###`` loses the gap between
        markers, and ``###HOLD_BLOCK_0###  <`` loses the gap before the tag.
        """
        text = self._gap_after_tag.sub(r">\1", text)
        text = self._gap_between.sub(r"\1", text)
        return self._gap_before_tag.sub(r"\1<", text)

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._blocks.items())

    def __contains__(self, marker: object) -> bool:
        return marker in self._blocks
