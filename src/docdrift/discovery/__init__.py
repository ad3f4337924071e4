"""Project root resolution and instruction file discovery."""

from docdrift.discovery.files import (
    AuditError,
    find_companion_docs,
    find_instruction_files,
    is_agent_file,
    walk_files,
)
from docdrift.discovery.root import find_root

__all__ = [
    "AuditError",
    "find_companion_docs",
    "find_instruction_files",
    "find_root",
    "is_agent_file",
    "walk_files",
]
