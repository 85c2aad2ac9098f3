"""Core data models shared across wth components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional


@dataclass
class FileEntry:
    """Metadata for an individual file kept in the scan tree."""

    name: str
    path: str
    size: int
    lines: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "path": self.path, "size": self.size, "lines": self.lines}


@dataclass
class DirectoryNode:
    """One directory level of a bounded scan.

    ``compressed`` holds the names of ignored directories that exist at this
    level but were not descended into.
    """

    name: str
    path: str
    files: List[FileEntry] = field(default_factory=list)
    dirs: List["DirectoryNode"] = field(default_factory=list)
    compressed: List[str] = field(default_factory=list)

    def iter_files(self) -> Iterator[FileEntry]:
        """Yield every file in this subtree, depth-first, own files first."""
        yield from self.files
        for child in self.dirs:
            yield from child.iter_files()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "files": [entry.to_dict() for entry in self.files],
            "dirs": [child.to_dict() for child in self.dirs],
            "compressed": list(self.compressed),
        }


@dataclass
class GitSummary:
    """Commit statistics for a version-controlled project."""

    total_commits: int
    top_authors: List[str]
    recent_commits: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalCommits": self.total_commits,
            "topAuthors": list(self.top_authors),
            "recentCommits": list(self.recent_commits),
        }


@dataclass
class ProjectProfile:
    """Everything a single analysis run produces for one directory."""

    path: str
    structure: DirectoryNode
    stack: List[str]
    red_flags: List[str]
    git_summary: Optional[GitSummary] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "stack": list(self.stack),
            "structure": self.structure.to_dict(),
            "redFlags": list(self.red_flags),
            "gitSummary": self.git_summary.to_dict() if self.git_summary else None,
        }
