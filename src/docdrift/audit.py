"""Audit orchestration: resolve root, discover files, run every check."""

import logging
import time
from pathlib import Path

from docdrift.checks.actionable import check_actionable
from docdrift.checks.line_budget import check_line_budget
from docdrift.checks.staleness import check_staleness
from docdrift.checks.tree_paths import check_tree_paths
from docdrift.config import AuditConfig
from docdrift.discovery.files import find_companion_docs, find_instruction_files
from docdrift.discovery.root import find_root
from docdrift.models.issue import Issue, unreadable_issue
from docdrift.models.report import AuditReport, LineCounts
from docdrift.paths import relative_to_root

logger = logging.getLogger(__name__)


def run_audit(
    config: AuditConfig,
    start: Path | None = None,
    root: Path | None = None,
) -> AuditReport:
    """Run the full audit and return every issue found.

    ``root`` skips root resolution; otherwise the root is resolved from
    ``start`` (default: CWD). A single file failing to read is reported as an
    ``unreadable`` issue and never stops the other checks.
    """
    start_time = time.time()
    root = (root or find_root(config, start)).resolve()
    files = find_instruction_files(root, config)
    issues: list[Issue] = []

    for doc in files:
        try:
            content = doc.content
        except OSError as e:
            issues.append(unreadable_issue(doc.rel_path, e))
            continue
        issues.extend(check_tree_paths(doc.rel_path, content, root))
        issues.extend(check_actionable(doc.rel_path, content, config))

    if config.check_companion_docs:
        for path in find_companion_docs(root):
            rel = relative_to_root(path, root)
            try:
                content = path.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                issues.append(unreadable_issue(rel, e))
                continue
            issues.extend(check_tree_paths(rel, content, root))

    budget_issues, counts, total = check_line_budget(files, root, config)
    issues.extend(budget_issues)
    issues.extend(check_staleness(files, root, config))

    # A file unreadable in several checks is reported once
    unique = list(dict.fromkeys(issues))
    unique.sort(key=Issue.sort_key)

    report = AuditReport(
        root=root,
        files=files,
        issues=unique,
        line_counts=LineCounts(counts=counts, total=total),
        line_budget=config.line_budget,
        duration_ms=int((time.time() - start_time) * 1000),
    )
    logger.debug(
        "Audit of %s finished: %d file(s), %d issue(s) in %dms",
        root,
        len(files),
        len(report.issues),
        report.duration_ms,
    )
    return report
