"""Tests for the markdown line scanners."""

from docdrift.checks.markdown import (
    Block,
    fenced_mask,
    find_fenced_blocks,
    find_tables,
    heading_level,
    is_link_bullet,
    iter_headings,
    section_end,
)


class TestHeadingLevel:
    """Tests for ATX heading recognition."""

    def test_levels(self) -> None:
        assert heading_level("# Title") == (1, "Title")
        assert heading_level("### Deep  ") == (3, "Deep")

    def test_closing_hashes_stripped(self) -> None:
        assert heading_level("## Project Structure ##") == (2, "Project Structure")

    def test_requires_space(self) -> None:
        assert heading_level("#hashtag") is None

    def test_too_many_hashes(self) -> None:
        assert heading_level("####### seven") is None

    def test_not_a_heading(self) -> None:
        assert heading_level("plain text") is None


class TestFencedBlocks:
    """Tests for fenced code block detection."""

    def test_backtick_and_tilde(self) -> None:
        lines = ["```python", "a", "b", "```", "text", "~~~", "c", "~~~"]

        assert find_fenced_blocks(lines) == [Block(0, 3, 2), Block(5, 7, 1)]

    def test_other_marker_does_not_close(self) -> None:
        lines = ["```", "~~~", "x", "```"]

        assert find_fenced_blocks(lines) == [Block(0, 3, 2)]

    def test_unclosed_fence_is_ignored(self) -> None:
        lines = ["```", "a", "```", "```", "never", "closed"]

        assert find_fenced_blocks(lines) == [Block(0, 2, 1)]

    def test_mask(self) -> None:
        assert fenced_mask(["x", "```", "y", "```", "z"]) == [False, True, True, True, False]


class TestHeadingsAndSections:
    """Tests for heading iteration and section bounds."""

    def test_headings_inside_fences_are_skipped(self) -> None:
        lines = ["# Top", "```", "# not a heading", "```", "## Sub"]

        assert iter_headings(lines) == [(0, 1, "Top"), (4, 2, "Sub")]

    def test_section_ends_at_same_or_higher_level(self) -> None:
        lines = ["## A", "text", "### A.1", "more", "## B", "tail"]

        assert section_end(lines, 0, 2) == 4
        assert section_end(lines, 2, 3) == 4
        assert section_end(lines, 4, 2) == 6


class TestTables:
    """Tests for pipe table detection."""

    def test_table_rows_counted_without_separator(self) -> None:
        lines = ["intro", "| a | b |", "|---|:-:|", "| 1 | 2 |", "| 3 | 4 |", "after"]

        assert find_tables(lines) == [Block(1, 4, 3)]

    def test_run_without_separator_is_not_a_table(self) -> None:
        assert find_tables(["| a | b |", "| 1 | 2 |"]) == []

    def test_table_in_fence_is_ignored(self) -> None:
        lines = ["```", "| a |", "|---|", "| 1 |", "```"]

        assert find_tables(lines) == []


class TestLinkBullets:
    def test_link_and_code_bullets(self) -> None:
        assert is_link_bullet("- [Guide](docs/guide.md)")
        assert is_link_bullet("* `parse_config`")

    def test_other_lines(self) -> None:
        assert not is_link_bullet("- plain text")
        assert not is_link_bullet("  - [nested](x.md)")
        assert not is_link_bullet("[not a bullet](x.md)")
