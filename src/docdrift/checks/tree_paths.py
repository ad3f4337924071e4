"""Validate declared ``## Project Structure`` trees against the filesystem."""

import logging
import re
from pathlib import Path

from docdrift.checks.markdown import find_fenced_blocks, iter_headings, section_end
from docdrift.models.issue import CheckKind, Issue
from docdrift.models.tree import TreeNode
from docdrift.paths import STRUCTURE_HEADING

logger = logging.getLogger(__name__)

# Gitignored files that are expected to be absent from a checkout
SKIP_PATHS = {".env"}

# Guide bars and spaces, an optional branch (├── └── |-- `-- +-- \--) and an
# optional list bullet. Whatever follows is the entry name.
PREFIX_RE = re.compile(
    r"^(?:[ \t\u00a0]|[│┃|](?=[ \t\u00a0]|$))*"
    r"(?:(?:[├└┣┗╰]|[|`+\\])[─━-]+[ \t\u00a0]*)?"
    r"(?:[-*+][ \t]+)?"
)
COMMENT_RE = re.compile(r"(?:^|\s)(?:#|//|<-|←|—).*$")
SYMLINK_RE = re.compile(r"\s(?:->|→)\s")
PLACEHOLDER_START = ("[", "<", "{", "(")
ELLIPSIS_RE = re.compile(r"^(?:\.{3,}|…)")


def _find_block(lines: list[str], start: int, end: int) -> list[tuple[int, str]]:
    """Lines of the tree listing between ``start`` and ``end`` (exclusive).

    Prefers the first fenced block in the section and falls back to the first
    run of indented lines.
    """
    for block in find_fenced_blocks(lines):
        if start < block.start and block.end < end:
            return [(i, lines[i]) for i in range(block.start + 1, block.end)]
        if block.start >= end:
            break

    body: list[tuple[int, str]] = []
    for i in range(start + 1, end):
        line = lines[i]
        if line.startswith(("    ", "\t")):
            body.append((i, line))
        elif body and not line.strip():
            body.append((i, line))
        elif body:
            break
    return body


def _clean_name(rest: str) -> tuple[str, bool] | None:
    """Strip annotations from an entry. Returns ``(name, is_symlink)``."""
    rest = rest.strip()
    symlink = SYMLINK_RE.search(rest)
    if symlink:
        rest = rest[: symlink.start()]
    rest = COMMENT_RE.sub("", rest).strip()
    if not rest:
        return None
    name = rest.split()[0].strip("`")
    if len(name) > 4 and name.startswith("**") and name.endswith("**"):
        name = name[2:-2]
    if name.startswith("./"):
        name = name[2:] or "./"
    elif name.startswith("/"):
        # Tree entries are relative to the project root
        name = name.lstrip("/")
    if not name:
        return None
    return name, symlink is not None


def extract_tree_nodes(content: str, root_name: str | None = None) -> list[TreeNode]:
    """Parse the entries of the first ``Project Structure`` section.

    Depth comes from the column where each name starts, so both plain
    indentation and box-drawing prefixes nest correctly. An entry followed by
    a deeper entry is a directory even without a trailing slash. A leading
    ``.``, ``./`` or root-named directory stands for the project root itself.
    """
    lines = content.splitlines()
    heading = next(
        ((i, level) for i, level, title in iter_headings(lines) if title == STRUCTURE_HEADING),
        None,
    )
    if heading is None:
        return []
    start, level = heading
    body = _find_block(lines, start, section_end(lines, start, level))

    nodes: list[TreeNode] = []
    stack: list[tuple[int, str]] = []  # (column, directory path with slash)
    last: tuple[int, TreeNode] | None = None

    for index, line in body:
        line = line.rstrip()
        if not line.strip():
            continue
        column = PREFIX_RE.match(line).end()
        rest = line[column:]
        stripped = rest.strip()
        if not stripped or stripped.startswith(PLACEHOLDER_START) or ELLIPSIS_RE.match(stripped):
            continue
        cleaned = _clean_name(rest)
        if cleaned is None:
            continue
        name, is_symlink = cleaned

        # A deeper entry turns the previous file entry into a directory
        if last is not None and column > last[0] and not last[1].is_dir:
            prev_column, prev = last
            prev.is_dir = True
            stack.append((prev_column, prev.path + "/"))

        while stack and stack[-1][0] >= column:
            stack.pop()

        is_dir = name.endswith("/") or is_symlink
        bare = name.rstrip("/")
        if not nodes and not stack and bare in {".", root_name}:
            stack.append((column, ""))
            last = None
            continue

        parent = stack[-1][1] if stack else ""
        node = TreeNode(
            name=name,
            line=index + 1,
            depth=sum(1 for _, path in stack if path),
            is_dir=is_dir,
            path=parent + bare,
            is_symlink=is_symlink,
        )
        nodes.append(node)
        last = (column, node)
        if is_dir:
            stack.append((column, node.path + "/"))

    return nodes


def _should_verify(node: TreeNode) -> bool:
    if node.is_symlink:
        return False
    if any(ch in node.path for ch in "*?[]"):
        return False
    if ".." in node.path.split("/"):
        return False
    return node.path not in SKIP_PATHS and node.name not in SKIP_PATHS


def check_tree_paths(rel: str, content: str, root: Path) -> list[Issue]:
    """Report every declared tree entry that does not exist under ``root``.

    Directories must be directories and files must be files. Every missing
    entry is reported, including entries beneath a missing directory.
    Entries that climb out of the root with ``..`` are not verified.
    """
    issues: list[Issue] = []
    nodes = extract_tree_nodes(content, root_name=root.name)

    for node in nodes:
        if not _should_verify(node):
            continue
        target = root / node.path
        if node.is_dir:
            if target.is_dir():
                continue
            if target.exists():
                message = f"Referenced directory is not a directory: {node.path}/"
            else:
                message = f"Referenced path does not exist: {node.path}/"
        else:
            if target.is_file():
                continue
            if target.exists():
                message = f"Referenced file is a directory: {node.path}"
            else:
                message = f"Referenced path does not exist: {node.path}"

        issues.append(
            Issue(check=CheckKind.TREE_PATH, file=rel, message=message, line=node.line)
        )

    logger.debug("%s: %d tree entries, %d missing", rel, len(nodes), len(issues))
    return issues
