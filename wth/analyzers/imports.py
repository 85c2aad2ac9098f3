"""Extraction of imported module specifiers from source text."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Optional, Set

_IMPORT_FROM = re.compile(r"""\b(?:from|import)\s+['"]([^'"]+)['"]""")
_REQUIRE_CALL = re.compile(r"""require\(\s*['"]([^'"]+)['"]\s*\)""")


class ImportExtractor(ABC):
    """Contract for turning source text into referenced package names."""

    @abstractmethod
    def extract(self, text: str) -> Set[str]:
        """Return the external package names referenced by ``text``."""


class RegexImportExtractor(ImportExtractor):
    """Matches quoted module names after ``from``/``import`` and inside ``require()``.

    This is a textual heuristic: computed requires, re-exports and type-only
    imports are not resolved, so callers should treat misses as possible
    false positives rather than proof of non-use.
    """

    def extract(self, text: str) -> Set[str]:
        packages: Set[str] = set()
        for pattern in (_IMPORT_FROM, _REQUIRE_CALL):
            for match in pattern.finditer(text):
                name = normalize_specifier(match.group(1))
                if name:
                    packages.add(name)
        return packages


def normalize_specifier(specifier: str) -> Optional[str]:
    """Reduce a module specifier to its package identity.

    Relative and absolute paths are internal and yield None. Scoped packages
    keep ``@scope/name``; everything else keeps its first path segment.
    """
    specifier = specifier.strip()
    if not specifier or specifier.startswith((".", "/")):
        return None
    parts = specifier.split("/")
    if specifier.startswith("@"):
        return "/".join(parts[:2])
    return parts[0]


__all__ = ["ImportExtractor", "RegexImportExtractor", "normalize_specifier"]
