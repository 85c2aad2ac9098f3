"""Text, JSON and Markdown renderings of a project profile."""

from __future__ import annotations

import json
import re
import time
from datetime import UTC, datetime
from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, PackageLoader

from .explain import explain_folder, guess_purpose
from .models import DirectoryNode, ProjectProfile

MAX_FILES_SHOWN = 5

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


def render_tree(node: DirectoryNode, indent: str = "") -> str:
    """Render ``node`` as an indented tree.

    Directories come first with their explanation, then up to
    ``MAX_FILES_SHOWN`` files, then any compressed directory names.
    """
    lines: List[str] = []
    for index, child in enumerate(node.dirs):
        is_last = index == len(node.dirs) - 1 and not node.files
        prefix = "└─" if is_last else "├─"
        next_indent = "  " if is_last else "│ "
        lines.append(f"{indent}{prefix} {child.name}/ → {explain_folder(child.name)}\n")
        lines.append(render_tree(child, indent + next_indent))

    shown = node.files[:MAX_FILES_SHOWN]
    for index, entry in enumerate(shown):
        prefix = "└─" if index == len(shown) - 1 else "├─"
        lines.append(f"{indent}{prefix} {entry.name}\n")

    hidden = len(node.files) - len(shown)
    if hidden > 0:
        lines.append(f"{indent}... {hidden} more files\n")

    if node.compressed:
        lines.append(f"{indent}[compressed: {', '.join(node.compressed)}]\n")

    return "".join(lines)


def strip_ansi(text: str) -> str:
    return _ANSI_ESCAPE.sub("", text)


def to_json(profile: ProjectProfile) -> str:
    return json.dumps(profile.to_dict(), indent=2, ensure_ascii=False)


def _environment() -> Environment:
    return Environment(
        loader=PackageLoader("wth", "templates"),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render_markdown(profile: ProjectProfile, generated: Optional[datetime] = None) -> str:
    """Return the Markdown report for ``profile``."""
    generated = generated or datetime.now(UTC)
    template = _environment().get_template("report.md.j2")
    return template.render(
        profile=profile,
        generated=generated.isoformat(),
        purpose=guess_purpose(profile.stack, profile.structure),
        tree=strip_ansi(render_tree(profile.structure)).rstrip("\n"),
    )


def export_markdown(profile: ProjectProfile, output_dir: Optional[Path] = None) -> Path:
    """Write the Markdown report to a timestamped file and return its path."""
    directory = Path(output_dir) if output_dir is not None else Path.cwd()
    target = directory / f"project-analysis-{int(time.time() * 1000)}.md"
    target.write_text(render_markdown(profile), encoding="utf-8")
    return target


__all__ = [
    "export_markdown",
    "render_markdown",
    "render_tree",
    "strip_ansi",
    "to_json",
]
