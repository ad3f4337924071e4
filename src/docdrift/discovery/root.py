"""Project root resolution."""

import logging
from pathlib import Path

from docdrift.config import AuditConfig
from docdrift.paths import VCS_MARKER

logger = logging.getLogger(__name__)


def _ancestors(start: Path) -> list[Path]:
    """The start directory followed by each parent up to the filesystem root."""
    return [start, *start.parents]


def find_root(config: AuditConfig, start: Path | None = None) -> Path:
    """Find the project root by walking up from ``start`` (default: CWD).

    Pass 1: nearest directory containing any of ``config.root_markers``.
    Pass 2: nearest directory containing a ``.git`` entry.
    Pass 3: ``start`` itself.

    Always returns a directory and never raises; a deleted working directory
    falls back to the unresolved start. Only entry existence is checked.
    """
    try:
        start = (start or Path.cwd()).resolve()
    except OSError as e:
        logger.warning("Cannot resolve start directory (%s), using it as given", e)
        start = start or Path(".")

    for directory in _ancestors(start):
        for marker in config.root_markers:
            if (directory / marker).exists():
                logger.debug("Root %s found via marker %s", directory, marker)
                return directory

    for directory in _ancestors(start):
        if (directory / VCS_MARKER).exists():
            logger.debug("Root %s found via %s", directory, VCS_MARKER)
            return directory

    logger.warning("No project root marker found, using %s", start)
    return start
