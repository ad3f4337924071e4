"""Intermediate model for entries parsed from a project structure block."""

from dataclasses import dataclass


@dataclass
class TreeNode:
    """One entry of a declared directory tree."""

    name: str
    line: int  # 1-based line number in the document
    depth: int
    is_dir: bool
    path: str = ""  # Joined with ancestor directories, relative to the root
    is_symlink: bool = False
