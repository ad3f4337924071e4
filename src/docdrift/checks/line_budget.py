"""Combined line budget across all instruction files."""

import logging
from pathlib import Path

from docdrift.config import AuditConfig
from docdrift.models.instruction import InstructionFile
from docdrift.models.issue import CheckKind, Issue, unreadable_issue
from docdrift.models.report import LineCounts
from docdrift.paths import relative_to_root

logger = logging.getLogger(__name__)


def count_lines(data: bytes) -> int:
    """Count line terminators, plus one for a trailing partial line."""
    count = data.count(b"\n")
    if data and not data.endswith(b"\n"):
        count += 1
    return count


def check_line_budget(
    files: list[InstructionFile],
    root: Path,
    config: AuditConfig,
) -> tuple[list[Issue], dict[str, int], int]:
    """Sum line counts and flag a total strictly over ``config.line_budget``.

    Returns ``(issues, counts, total)``. ``counts`` maps relative paths to
    line counts, largest first; it is returned whether or not the budget
    tripped. Unreadable files are reported and left out of the counts.
    """
    raw: dict[str, int] = {}
    issues: list[Issue] = []

    for doc in files:
        try:
            data = doc.path.read_bytes()
        except OSError as e:
            issues.append(unreadable_issue(doc.rel_path, e))
            continue
        raw[relative_to_root(doc.path, root)] = count_lines(data)

    line_counts = LineCounts.from_mapping(raw)
    total = line_counts.total

    if total > config.line_budget:
        breakdown = ", ".join(f"{name}: {n}" for name, n in line_counts.items())
        issues.append(
            Issue(
                check=CheckKind.LINE_BUDGET,
                file=None,
                message=(
                    f"Over line budget: {total} lines (max {config.line_budget}); {breakdown}"
                ),
            )
        )

    logger.debug(
        "Line budget: %d / %d lines across %d file(s)", total, config.line_budget, len(raw)
    )
    return issues, line_counts.counts, total
