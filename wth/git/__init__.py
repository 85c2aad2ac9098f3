"""Git integrations for history summaries and blame lookups."""

from .history import GitError, GitHistory

__all__ = ["GitError", "GitHistory"]
