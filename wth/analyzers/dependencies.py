"""Cross-references declared Node.js dependencies against source imports."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Set

from ..logging import get_logger
from ..scanner import DEFAULT_RULES, DirectoryScanner, ScanRules
from .imports import ImportExtractor, RegexImportExtractor
from .utils import SCRIPT_SUFFIXES, load_package_json, read_text

DEFAULT_DEPENDENCY_DEPTH = 5
MAX_REPORTED = 5

logger = get_logger("analyzers.dependencies")


class UnusedDependencyFinder:
    """Flags runtime dependencies that no scanned source file imports."""

    def __init__(
        self,
        rules: ScanRules = DEFAULT_RULES,
        extractor: Optional[ImportExtractor] = None,
        max_depth: int = DEFAULT_DEPENDENCY_DEPTH,
        limit: int = MAX_REPORTED,
    ) -> None:
        self.scanner = DirectoryScanner(rules)
        self.extractor = extractor or RegexImportExtractor()
        self.max_depth = max_depth
        self.limit = limit

    def find_unused(self, root: str | Path) -> List[str]:
        """Return up to ``limit`` unused runtime dependencies in declaration order."""
        root_path = Path(root)
        package = load_package_json(root_path)
        if package is None:
            return []
        declared = package.get("dependencies")
        if not isinstance(declared, dict) or not declared:
            return []

        imported = self.collect_imports(root_path)
        unused = [str(name) for name in declared if name not in imported]
        logger.debug(
            "%d of %d dependencies unreferenced in %s", len(unused), len(declared), root_path
        )
        return unused[: self.limit]

    def collect_imports(self, root: Path) -> Set[str]:
        """Return every package name referenced by scripts under ``root``."""
        try:
            tree = self.scanner.scan(root, self.max_depth)
        except OSError as exc:
            logger.debug("Dependency scan of %s failed: %s", root, exc)
            return set()

        imported: Set[str] = set()
        for entry in tree.iter_files():
            if not entry.name.endswith(SCRIPT_SUFFIXES):
                continue
            text = read_text(entry.path)
            if text is None:
                continue
            imported.update(self.extractor.extract(text))
        return imported


__all__ = ["UnusedDependencyFinder"]
