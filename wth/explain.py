"""Plain-language explanations for common folders and project shapes."""

from __future__ import annotations

from typing import Mapping, Sequence

from .models import DirectoryNode

FOLDER_DESCRIPTIONS: Mapping[str, str] = {
    "src": "Source code lives here",
    "components": "Reusable UI pieces",
    "pages": "Route handlers / page files",
    "routes": "API endpoint definitions",
    "api": "Backend API logic",
    "models": "Data structure definitions",
    "controllers": "Request handling logic",
    "services": "Business logic layer",
    "utils": "Helper functions",
    "lib": "Shared utilities",
    "hooks": "Custom React hooks",
    "styles": "CSS and styling",
    "public": "Static assets",
    "assets": "Images, fonts, media",
    "config": "Configuration files",
    "tests": "Test files",
    "__tests__": "Test files",
    "spec": "Test specifications",
    "docs": "Documentation",
    "scripts": "Build/deploy scripts",
    "middleware": "Request interceptors",
    "types": "TypeScript type definitions",
    "interfaces": "Interface definitions",
    "schemas": "Data validation schemas",
    "migrations": "Database migrations",
    "prisma": "Prisma ORM files",
}

_API_DIRS = frozenset({"api", "routes", "controllers"})
_UI_LABELS = frozenset({"React", "Vue", "Svelte", "Next.js"})


def explain_folder(name: str) -> str:
    return FOLDER_DESCRIPTIONS.get(name.lower(), f"Custom {name} directory")


def guess_purpose(stack: Sequence[str], tree: DirectoryNode) -> str:
    """Return a one-line guess at what kind of project this is."""
    has_api = any(child.name.lower() in _API_DIRS for child in tree.dirs)
    has_ui = any(label in _UI_LABELS for label in stack)

    if has_ui and has_api:
        return "Full-stack web application"
    if has_ui:
        return "Frontend web application"
    if has_api:
        return "Backend API service"
    if "Python" in stack:
        return "Python project"
    if "Go" in stack:
        return "Go service"
    return "Software project"


__all__ = ["FOLDER_DESCRIPTIONS", "explain_folder", "guess_purpose"]
