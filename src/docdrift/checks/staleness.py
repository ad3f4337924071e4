"""Staleness: instruction files older than the source they describe."""

import logging
from dataclasses import dataclass
from pathlib import Path

from docdrift.config import AuditConfig
from docdrift.discovery.files import walk_files
from docdrift.models.instruction import DocCategory, InstructionFile
from docdrift.models.issue import CheckKind, Issue, unreadable_issue
from docdrift.paths import relative_to_root

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceFile:
    path: Path
    mtime: float


class SourceIndex:
    """Source files with their mtimes, scanned once per directory."""

    def __init__(self, config: AuditConfig) -> None:
        self.config = config
        self._cache: dict[Path, list[SourceFile]] = {}

    def scan(self, directory: Path) -> list[SourceFile]:
        if directory not in self._cache:
            sources: list[SourceFile] = []
            for path in walk_files(
                directory,
                self.config.skip_dirs,
                extensions=self.config.source_extensions,
            ):
                try:
                    sources.append(SourceFile(path, path.stat().st_mtime))
                except OSError as e:
                    logger.warning("Skipping source file %s: %s", path, e.strerror or e)
            self._cache[directory] = sources
        return self._cache[directory]

    def scope_for(self, doc: InstructionFile, root: Path) -> list[SourceFile]:
        """Source files an instruction file is presumed to cover.

        Package-level files cover their own directory subtree; root- and
        skill-level files cover every configured source directory.
        """
        if doc.category is DocCategory.PACKAGE:
            return self.scan(doc.path.parent)

        sources: list[SourceFile] = []
        seen: set[Path] = set()
        for name in self.config.source_dirs:
            directory = root / name
            if name in self.config.skip_dirs or not directory.is_dir():
                continue
            for source in self.scan(directory):
                if source.path not in seen:
                    seen.add(source.path)
                    sources.append(source)
        return sources


def check_staleness(
    files: list[InstructionFile],
    root: Path,
    config: AuditConfig,
) -> list[Issue]:
    """Flag instruction files with source files strictly newer than themselves.

    Equal modification times are not stale. A file with no source in scope
    produces no issue.
    """
    index = SourceIndex(config)
    issues: list[Issue] = []

    for doc in files:
        try:
            doc_mtime = doc.mtime
        except OSError as e:
            issues.append(unreadable_issue(doc.rel_path, e))
            continue

        newer = [s for s in index.scope_for(doc, root) if s.mtime > doc_mtime]
        if not newer:
            continue

        newest = max(newer, key=lambda s: (s.mtime, str(s.path)))
        newest_rel = relative_to_root(newest.path, root)
        if len(newer) == 1:
            message = f"Older than {newest_rel}, may be stale"
        else:
            message = (
                f"Older than {len(newer)} source files (newest: {newest_rel}), may be stale"
            )
        issues.append(Issue(check=CheckKind.STALENESS, file=doc.rel_path, message=message))

    logger.debug("Staleness: %d of %d file(s) stale", len(issues), len(files))
    return issues
