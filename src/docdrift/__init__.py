"""docdrift - audit agent instruction files for drift against the source tree."""

__version__ = "0.3.0"

from docdrift.audit import run_audit
from docdrift.checks import (
    check_actionable,
    check_line_budget,
    check_staleness,
    check_tree_paths,
)
from docdrift.config import AuditConfig, ConfigError
from docdrift.discovery import AuditError, find_instruction_files, find_root
from docdrift.models import AuditReport, CheckKind, DocCategory, InstructionFile, Issue, Severity

__all__ = [
    "__version__",
    "AuditConfig",
    "AuditError",
    "AuditReport",
    "CheckKind",
    "ConfigError",
    "DocCategory",
    "InstructionFile",
    "Issue",
    "Severity",
    "check_actionable",
    "check_line_budget",
    "check_staleness",
    "check_tree_paths",
    "find_instruction_files",
    "find_root",
    "run_audit",
]
