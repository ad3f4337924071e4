"""Heuristic check for reference dumps that lack directive framing."""

import logging
import re

from docdrift.checks.markdown import (
    find_fenced_blocks,
    find_tables,
    is_link_bullet,
    is_list_context,
    iter_headings,
    section_end,
)
from docdrift.config import AuditConfig
from docdrift.discovery.files import is_agent_file
from docdrift.models.issue import CheckKind, Issue, Severity

logger = logging.getLogger(__name__)

MOVE_HINT = "consider moving to README.md"


def imperative_pattern(words: frozenset[str]) -> re.Pattern[str]:
    """Case-insensitive whole-word match for any signal word."""
    if not words:
        return re.compile(r"(?!)")
    alternatives = "|".join(re.escape(w) for w in sorted(words, key=len, reverse=True))
    return re.compile(rf"(?<![\w'])(?:{alternatives})(?![\w'])", re.IGNORECASE)


def has_context(lines: list[str], start: int, window: int, pattern: re.Pattern[str]) -> bool:
    """Whether any of the ``window`` lines before ``start`` carries a directive."""
    preceding = lines[max(0, start - window) : start]
    return any(pattern.search(line) for line in preceding)


def _warning(rel: str, line: int, end_line: int, message: str) -> Issue:
    return Issue(
        check=CheckKind.ACTIONABLE,
        file=rel,
        message=message,
        line=line,
        end_line=end_line,
        severity=Severity.WARNING,
    )


def _informational_sections(rel: str, lines: list[str], config: AuditConfig) -> list[Issue]:
    issues = []
    for i, level, title in iter_headings(lines):
        if title.lower() not in config.informational_headings:
            continue
        end = section_end(lines, i, level)
        while end > i + 1 and not lines[end - 1].strip():
            end -= 1
        issues.append(
            _warning(rel, i + 1, end, f'Informational section "{title}", {MOVE_HINT}')
        )
    return issues


def _link_lists(rel: str, lines: list[str], config: AuditConfig) -> list[Issue]:
    issues = []
    i = 0
    while i < len(lines):
        if not is_link_bullet(lines[i]):
            i += 1
            continue
        start = i
        count = 0
        while i < len(lines) and is_list_context(lines[i]):
            if is_link_bullet(lines[i]):
                count += 1
            i += 1
        end = i
        while end > start and not lines[end - 1].strip():
            end -= 1
        if count > config.link_list_max_items:
            issues.append(
                _warning(rel, start + 1, end, f"Link-heavy list ({count} items), {MOVE_HINT}")
            )
    return issues


def check_actionable(rel: str, content: str, config: AuditConfig) -> list[Issue]:
    """Flag large code fences and tables with no directive in the lines before them.

    Also flags informational sections and link-heavy lists. Only agent
    instruction files are checked; other documents produce no issues.
    """
    if not is_agent_file(rel, config):
        return []

    lines = content.splitlines()
    pattern = imperative_pattern(config.imperative_words)
    issues = _informational_sections(rel, lines, config)

    for block in find_fenced_blocks(lines):
        if block.size <= config.code_block_max_lines:
            continue
        if has_context(lines, block.start, config.context_lines, pattern):
            continue
        issues.append(
            _warning(
                rel,
                block.start + 1,
                block.end + 1,
                f"Large code block ({block.size} lines) without imperative context, {MOVE_HINT}",
            )
        )

    for table in find_tables(lines):
        if table.size <= config.table_max_rows:
            continue
        if has_context(lines, table.start, config.context_lines, pattern):
            continue
        issues.append(
            _warning(
                rel,
                table.start + 1,
                table.end + 1,
                f"Large table ({table.size} rows) without imperative context, {MOVE_HINT}",
            )
        )

    issues.extend(_link_lists(rel, lines, config))
    issues.sort(key=Issue.sort_key)
    logger.debug("%s: %d actionable-content warning(s)", rel, len(issues))
    return issues
