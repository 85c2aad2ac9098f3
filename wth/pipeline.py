"""Pipeline wiring the scanner, detectors and git summary into one profile."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .analyzers import RedFlagAnalyzer, TechStackDetector, UnusedDependencyFinder
from .config import ConfigError, WthConfig, load_config
from .git import GitHistory
from .logging import get_logger
from .models import ProjectProfile
from .scanner import DEFAULT_RULES, DirectoryScanner


class ProjectAnalyzer:
    """Runs one full analysis of a directory.

    Components passed explicitly are used as-is; the rest are built from the
    ``.wth.yml`` found at the analysed root.
    """

    def __init__(
        self,
        scanner: DirectoryScanner | None = None,
        stack_detector: TechStackDetector | None = None,
        red_flag_analyzer: RedFlagAnalyzer | None = None,
        git: GitHistory | None = None,
    ) -> None:
        self.scanner = scanner
        self.stack_detector = stack_detector
        self.red_flag_analyzer = red_flag_analyzer
        self.git = git
        self.logger = get_logger("pipeline")

    def run(
        self,
        path: str | Path,
        *,
        include_git: bool = True,
        max_depth: Optional[int] = None,
    ) -> ProjectProfile:
        """Analyse ``path``; raises only when the path is missing or not a directory."""
        root = Path(path).expanduser().resolve()
        if not root.exists():
            raise FileNotFoundError(f"Directory not found: {path}")
        if not root.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {path}")

        self.logger.info("Analysing %s", root)
        config = self._load_config(root)
        depth = max_depth if max_depth is not None else config.scan.max_depth
        rules = DEFAULT_RULES.extended(config.scan.ignore_dirs, config.scan.ignore_files)

        git = self.git or GitHistory(timeout=config.git.timeout, log_limit=config.git.log_limit)
        scanner = self.scanner or DirectoryScanner(rules)
        stack_detector = self.stack_detector or TechStackDetector()
        red_flag_analyzer = self.red_flag_analyzer or RedFlagAnalyzer(
            settings=config.red_flags,
            git=git,
            dependency_finder=UnusedDependencyFinder(
                rules=rules, max_depth=config.scan.dependency_depth
            ),
        )

        structure = scanner.scan(root, depth)
        self.logger.debug("Scanned %d files", sum(1 for _ in structure.iter_files()))
        stack = stack_detector.detect(root, structure)
        red_flags = red_flag_analyzer.analyze(root, structure)
        git_summary = git.summarize(root) if include_git else None

        return ProjectProfile(
            path=str(root),
            structure=structure,
            stack=stack,
            red_flags=red_flags,
            git_summary=git_summary,
        )

    def _load_config(self, root: Path) -> WthConfig:
        try:
            return load_config(root)
        except (ConfigError, OSError) as exc:
            self.logger.warning("Ignoring invalid configuration in %s: %s", root, exc)
            return WthConfig(root=root)


__all__ = ["ProjectAnalyzer"]
