"""Tests for the placeholder table used by the HTML minifier."""

from minifyx import PlaceholderTable
from minifyx.placeholders import MARKER_PREFIX, MARKER_SUFFIX


class TestAddAndRestore:
    """Markers stand in for blocks and are swapped back verbatim."""

    def test_markers_are_sequential(self) -> None:
        table = PlaceholderTable()
        assert table.add("a") == f"{MARKER_PREFIX}0{MARKER_SUFFIX}"
        assert table.add("b") == f"{MARKER_PREFIX}1{MARKER_SUFFIX}"
        assert len(table) == 2

    def test_identical_blocks_get_distinct_markers(self) -> None:
        table = PlaceholderTable()
        assert table.add("x") != table.add("x")

    def test_restore(self) -> None:
        table = PlaceholderTable()
        m0 = table.add("<pre> a </pre>")
        m1 = table.add("<style>b{}</style>")
        assert table.restore(f"<div>{m0}{m1}</div>") == (
            "<div><pre> a </pre><style>b{}</style></div>"
        )

    def test_restored_content_not_rescanned(self) -> None:
        """A block that itself looks like a marker is not expanded again."""
        table = PlaceholderTable()
        m0 = table.add("x")
        m1 = table.add(m0)
        assert table.restore(m1) == m0

    def test_unknown_marker_left_alone(self) -> None:
        table = PlaceholderTable()
        table.add("x")
        text = f"{MARKER_PREFIX}7{MARKER_SUFFIX}"
        assert table.restore(text) == text

    def test_empty_table(self) -> None:
        assert PlaceholderTable().restore("abc") == "abc"

    def test_iteration_and_membership(self) -> None:
        table = PlaceholderTable()
        marker = table.add("block")
        assert list(table) == [(marker, "block")]
        assert marker in table
        assert "nope" not in table


class TestPrefix:
    """The marker prefix never occurs in the document it is used for."""

    def test_default_prefix(self) -> None:
        assert PlaceholderTable("<p>plain</p>").prefix == MARKER_PREFIX

    def test_prefix_changes_on_collision(self) -> None:
        literal = f"{MARKER_PREFIX}0{MARKER_SUFFIX}"
        table = PlaceholderTable(f"<p>{literal}</p>")
        marker = table.add("<pre>x</pre>")
        assert marker == "###HOLD1_BLOCK_0###"
        assert table.restore(f"{literal}{marker}") == f"{literal}<pre>x</pre>"

    def test_skips_every_taken_prefix(self) -> None:
        table = PlaceholderTable("###HOLD_BLOCK_ ###HOLD1_BLOCK_")
        assert table.prefix == "###HOLD2_BLOCK_"

    def test_gaps_use_chosen_prefix(self) -> None:
        table = PlaceholderTable(MARKER_PREFIX)
        marker = table.add("x")
        assert table.tighten_gaps(f"<div> {marker}") == f"<div>{marker}"


class TestRestoreSealed:
    """Spans report where restored blocks landed."""

    def test_spans(self) -> None:
        table = PlaceholderTable()
        m0 = table.add("<pre>1</pre>")
        m1 = table.add("<i>")
        text, spans = table.restore_sealed(f"ab{m0}c{m1}")
        assert text == "ab<pre>1</pre>c<i>"
        assert spans == [(2, 13), (15, 17)]
        for start, end in spans:
            assert text[start] == "<"
            assert text[end] == ">"

    def test_no_markers(self) -> None:
        table = PlaceholderTable()
        table.add("x")
        assert table.restore_sealed("plain") == ("plain", [])


class TestTightenGaps:
    """Whitespace next to markers."""

    def test_after_tag(self) -> None:
        m = f"{MARKER_PREFIX}0{MARKER_SUFFIX}"
        assert PlaceholderTable().tighten_gaps(f"<div> \n {m}") == f"<div>{m}"

    def test_between_markers(self) -> None:
        m0 = f"{MARKER_PREFIX}0{MARKER_SUFFIX}"
        m1 = f"{MARKER_PREFIX}1{MARKER_SUFFIX}"
        m2 = f"{MARKER_PREFIX}2{MARKER_SUFFIX}"
        assert PlaceholderTable().tighten_gaps(f"{m0} {m1}  {m2}") == f"{m0}{m1}{m2}"

    def test_before_tag(self) -> None:
        m = f"{MARKER_PREFIX}0{MARKER_SUFFIX}"
        assert PlaceholderTable().tighten_gaps(f"{m} </div>") == f"{m}</div>"

    def test_text_gaps_kept(self) -> None:
        m = f"{MARKER_PREFIX}0{MARKER_SUFFIX}"
        assert PlaceholderTable().tighten_gaps(f"Use {m} now") == f"Use {m} now"
