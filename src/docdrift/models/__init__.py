"""Data models for docdrift."""

from docdrift.models.instruction import DocCategory, InstructionFile
from docdrift.models.issue import CheckKind, Issue, Severity, unreadable_issue
from docdrift.models.report import AuditReport, LineCounts
from docdrift.models.tree import TreeNode

__all__ = [
    # Instruction file models
    "DocCategory",
    "InstructionFile",
    # Issue models
    "CheckKind",
    "Issue",
    "Severity",
    "unreadable_issue",
    # Report models
    "AuditReport",
    "LineCounts",
    # Tree-path models
    "TreeNode",
]
