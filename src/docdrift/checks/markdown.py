"""Small line scanners for the markdown structures the checks need.

These are not a markdown parser: each helper recognizes one construct
(ATX headings, fenced code blocks, pipe tables, link bullets) over a list of
lines and ignores anything malformed.
"""

import re
from dataclasses import dataclass

FENCE_MARKERS = ("```", "~~~")

TABLE_SEP_RE = re.compile(r"^\|?[\s:]*-+[\s:]*(\|[\s:]*-+[\s:]*)*\|?\s*$")

CLOSING_HASHES_RE = re.compile(r"\s+#+$")


@dataclass(frozen=True)
class Block:
    """A contiguous run of lines. Indices are 0-based and inclusive."""

    start: int
    end: int
    size: int  # Body lines for fences, non-separator rows for tables


def heading_level(line: str) -> tuple[int, str] | None:
    """Return the level (1-6) and title of an ATX heading line."""
    hashes = len(line) - len(line.lstrip("#"))
    if hashes == 0 or hashes > 6:
        return None
    rest = line[hashes:]
    if rest and not rest.startswith((" ", "\t")):
        return None
    return hashes, CLOSING_HASHES_RE.sub("", rest.strip())


def fence_marker(line: str) -> str | None:
    """Return the fence marker if ``line`` opens or closes a fenced block."""
    stripped = line.strip()
    for marker in FENCE_MARKERS:
        if stripped.startswith(marker):
            return marker
    return None


def fenced_mask(lines: list[str]) -> list[bool]:
    """Flag every line that is part of a closed fenced block, fences included."""
    mask = [False] * len(lines)
    for block in find_fenced_blocks(lines):
        for i in range(block.start, block.end + 1):
            mask[i] = True
    return mask


def find_fenced_blocks(lines: list[str]) -> list[Block]:
    """Locate closed fenced code blocks. An unclosed fence is not a block."""
    blocks: list[Block] = []
    i = 0
    while i < len(lines):
        marker = fence_marker(lines[i])
        if marker is None:
            i += 1
            continue
        start = i
        j = i + 1
        while j < len(lines) and not lines[j].strip().startswith(marker):
            j += 1
        if j >= len(lines):
            break
        blocks.append(Block(start=start, end=j, size=j - start - 1))
        i = j + 1
    return blocks


def iter_headings(lines: list[str]) -> list[tuple[int, int, str]]:
    """Return ``(index, level, title)`` for headings outside fenced blocks."""
    mask = fenced_mask(lines)
    headings = []
    for i, line in enumerate(lines):
        if mask[i]:
            continue
        parsed = heading_level(line)
        if parsed:
            headings.append((i, parsed[0], parsed[1]))
    return headings


def section_end(lines: list[str], heading_index: int, level: int) -> int:
    """Index one past the last line of the section opened at ``heading_index``."""
    for i, other_level, _title in iter_headings(lines):
        if i > heading_index and other_level <= level:
            return i
    return len(lines)


def is_table_row(line: str) -> bool:
    return line.lstrip().startswith("|")


def find_tables(lines: list[str]) -> list[Block]:
    """Locate pipe tables outside fences. A run without a separator row is skipped."""
    mask = fenced_mask(lines)
    tables: list[Block] = []
    i = 0
    while i < len(lines):
        if mask[i] or not is_table_row(lines[i]):
            i += 1
            continue
        start = i
        rows = 0
        has_separator = False
        while i < len(lines) and not mask[i] and is_table_row(lines[i]):
            if TABLE_SEP_RE.match(lines[i].strip()):
                has_separator = True
            else:
                rows += 1
            i += 1
        if has_separator:
            tables.append(Block(start=start, end=i - 1, size=rows))
    return tables


def is_link_bullet(line: str) -> bool:
    """A top-level bullet that is primarily a link or backticked identifier."""
    for prefix in ("- ", "* "):
        if line.startswith(prefix):
            rest = line[len(prefix):]
            return rest.startswith(("[", "`"))
    return False


def is_list_context(line: str) -> bool:
    """A line that may appear inside a link-heavy list without breaking it."""
    return (
        not line.strip()
        or line.startswith("### ")
        or line.startswith("#### ")
        or is_link_bullet(line)
    )
