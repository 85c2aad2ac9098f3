"""Git history summaries and per-line blame lookups."""

from __future__ import annotations

import re
import subprocess
from collections import Counter
from datetime import date
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ..logging import get_logger
from ..models import GitSummary

DEFAULT_TIMEOUT = 5.0
DEFAULT_LOG_LIMIT = 50
TOP_AUTHORS = 3
RECENT_COMMITS = 5
SHORT_HASH = 7
SUBJECT_WIDTH = 60

_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_DATE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")

Runner = Callable[..., str]

logger = get_logger("git")


class GitError(RuntimeError):
    """Raised when a git subprocess fails, times out, or git is unavailable."""


class GitHistory:
    """Reads commit history and blame data through the git CLI.

    Every public method degrades to ``None``/``False`` on failure; only the
    runner raises :class:`GitError`.
    """

    def __init__(
        self,
        runner: Runner | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        log_limit: int = DEFAULT_LOG_LIMIT,
    ) -> None:
        self._runner = runner or self._default_runner
        self.timeout = timeout
        self.log_limit = log_limit

    def is_repository(self, repo_path: str | Path) -> bool:
        try:
            output = self._run(["git", "rev-parse", "--is-inside-work-tree"], cwd=Path(repo_path))
        except GitError as exc:
            logger.debug("%s is not a git work tree: %s", repo_path, exc)
            return False
        return output.strip() == "true"

    def summarize(self, repo_path: str | Path) -> Optional[GitSummary]:
        """Return commit statistics, or None when history is unavailable.

        Author counts use the exact author-name string, so one person committing
        under two spellings is counted as two authors.
        """
        repo = Path(repo_path)
        if not self.is_repository(repo):
            return None
        try:
            log_output = self._run(
                [
                    "git",
                    "log",
                    f"--max-count={self.log_limit}",
                    f"--format=%H{_FIELD_SEP}%an{_FIELD_SEP}%B{_RECORD_SEP}",
                ],
                cwd=repo,
            )
            total_output = self._run(["git", "rev-list", "--count", "HEAD"], cwd=repo)
            total = int(total_output.strip())
        except (GitError, ValueError) as exc:
            logger.debug("Git summary unavailable for %s: %s", repo, exc)
            return None

        commits = _parse_log(log_output)
        authors = Counter(author for _, author, _ in commits)
        top_authors = [
            f"{name} ({count} commits)" for name, count in authors.most_common(TOP_AUTHORS)
        ]
        recent = [
            f"{commit_hash[:SHORT_HASH]} - {subject[:SUBJECT_WIDTH]}"
            for commit_hash, _, subject in commits[:RECENT_COMMITS]
        ]
        return GitSummary(total_commits=total, top_authors=top_authors, recent_commits=recent)

    def blame_date(self, repo_path: str | Path, relative_path: str, line: int) -> Optional[date]:
        """Return the date the given 1-based line was last changed, if known."""
        try:
            output = self._run(
                ["git", "blame", "-L", f"{line},{line}", "--", relative_path],
                cwd=Path(repo_path),
            )
        except GitError as exc:
            logger.debug("Blame failed for %s:%d: %s", relative_path, line, exc)
            return None
        match = _DATE.search(output)
        if not match:
            return None
        try:
            return date(*(int(part) for part in match.groups()))
        except ValueError:
            return None

    def _run(self, args: Sequence[str], *, cwd: Path) -> str:
        return self._runner(args, cwd=cwd, timeout=self.timeout)

    @staticmethod
    def _default_runner(args: Sequence[str], *, cwd: Path, timeout: float | None = None) -> str:
        try:
            completed = subprocess.run(
                list(args),
                cwd=str(cwd),
                check=True,
                encoding="utf-8",
                errors="replace",
                capture_output=True,
                timeout=timeout,
            )
        except subprocess.CalledProcessError as exc:
            raise GitError(exc.stderr.strip() or f"{args[1]} exited with {exc.returncode}") from exc
        except subprocess.TimeoutExpired as exc:
            raise GitError(f"git {args[1]} timed out after {timeout}s") from exc
        except OSError as exc:
            raise GitError(str(exc)) from exc
        return completed.stdout


def _parse_log(output: str) -> List[tuple[str, str, str]]:
    commits: List[tuple[str, str, str]] = []
    for record in output.split(_RECORD_SEP):
        record = record.strip("\n")
        if not record:
            continue
        fields = record.split(_FIELD_SEP, 2)
        if len(fields) != 3:
            continue
        commit_hash, author, message = fields
        subject = message.strip().split("\n", 1)[0] if message.strip() else ""
        commits.append((commit_hash.strip(), author, subject))
    return commits


__all__ = ["GitError", "GitHistory"]
