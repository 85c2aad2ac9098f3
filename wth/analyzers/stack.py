"""Technology stack detection from marker files and declared dependencies."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..models import DirectoryNode
from .utils import load_node_dependencies, load_python_dependencies, root_entries

MARKER_FILES: Mapping[str, Tuple[str, ...]] = {
    "package.json": ("Node.js", "JavaScript/TypeScript"),
    "requirements.txt": ("Python",),
    "Pipfile": ("Python", "Pipenv"),
    "pyproject.toml": ("Python", "Poetry"),
    "Cargo.toml": ("Rust",),
    "go.mod": ("Go",),
    "pom.xml": ("Java", "Maven"),
    "build.gradle": ("Java/Kotlin", "Gradle"),
    "Gemfile": ("Ruby",),
    "composer.json": ("PHP", "Composer"),
    "Dockerfile": ("Docker",),
    "docker-compose.yml": ("Docker Compose",),
    ".eslintrc": ("ESLint",),
    ".eslintrc.js": ("ESLint",),
    ".prettierrc": ("Prettier",),
    "tsconfig.json": ("TypeScript",),
    "next.config.js": ("Next.js",),
    "nuxt.config.js": ("Nuxt.js",),
    "vite.config.js": ("Vite",),
    "webpack.config.js": ("Webpack",),
    "tailwind.config.js": ("TailwindCSS",),
    "vercel.json": ("Vercel",),
}

NODE_PACKAGE_LABELS: Mapping[str, Tuple[str, ...]] = {
    "react": ("React",),
    "vue": ("Vue",),
    "svelte": ("Svelte",),
    "express": ("Express",),
    "fastify": ("Fastify",),
    "@nestjs/core": ("NestJS",),
    "mongoose": ("MongoDB", "Mongoose"),
    "pg": ("PostgreSQL",),
    "mysql": ("MySQL",),
    "jest": ("Jest",),
    "vitest": ("Vitest",),
    "cypress": ("Cypress",),
}

PYTHON_PACKAGE_LABELS: Mapping[str, Tuple[str, ...]] = {
    "django": ("Django",),
    "flask": ("Flask",),
    "fastapi": ("FastAPI",),
    "sqlalchemy": ("SQLAlchemy",),
    "pytest": ("pytest",),
}

# Nested marker paths relative to the root.
NESTED_MARKERS: Mapping[Tuple[str, ...], Tuple[str, ...]] = {
    ("prisma", "schema.prisma"): ("Prisma",),
}


class TechStackDetector:
    """Derives technology labels from root-level markers and manifests."""

    def __init__(
        self,
        markers: Mapping[str, Sequence[str]] = MARKER_FILES,
        node_labels: Mapping[str, Sequence[str]] = NODE_PACKAGE_LABELS,
        python_labels: Mapping[str, Sequence[str]] = PYTHON_PACKAGE_LABELS,
        nested_markers: Mapping[Tuple[str, ...], Sequence[str]] = NESTED_MARKERS,
    ) -> None:
        self.markers = markers
        self.node_labels = node_labels
        self.python_labels = python_labels
        self.nested_markers = nested_markers

    def detect(self, root: str | Path, tree: Optional[DirectoryNode] = None) -> List[str]:
        """Return the deduplicated technology labels for ``root``."""
        root_path = Path(root)
        labels: Dict[str, None] = {}

        present = root_entries(root_path)
        if tree is not None:
            present.update(entry.name for entry in tree.files)

        for marker, techs in self.markers.items():
            if marker in present:
                labels.update(dict.fromkeys(techs))

        for parts, techs in self.nested_markers.items():
            if root_path.joinpath(*parts).is_file():
                labels.update(dict.fromkeys(techs))

        node_deps = load_node_dependencies(root_path)
        declared = set(node_deps["dependencies"]) | set(node_deps["devDependencies"])
        for package, techs in self.node_labels.items():
            if package in declared:
                labels.update(dict.fromkeys(techs))

        python_deps = {name.lower() for name in load_python_dependencies(root_path)}
        for package, techs in self.python_labels.items():
            if package in python_deps:
                labels.update(dict.fromkeys(techs))

        return list(labels)


__all__ = ["TechStackDetector", "MARKER_FILES", "NODE_PACKAGE_LABELS"]
