"""Heuristic analyzers that run over a scanned project tree."""

from __future__ import annotations

from .dependencies import UnusedDependencyFinder
from .imports import ImportExtractor, RegexImportExtractor
from .red_flags import RedFlagAnalyzer
from .stack import TechStackDetector

__all__ = [
    "ImportExtractor",
    "RedFlagAnalyzer",
    "RegexImportExtractor",
    "TechStackDetector",
    "UnusedDependencyFinder",
]
