"""Tests for tree, JSON and Markdown rendering."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

from wth.explain import explain_folder, guess_purpose
from wth.models import DirectoryNode, FileEntry, GitSummary, ProjectProfile
from wth.report import export_markdown, render_markdown, render_tree, strip_ansi, to_json


def _file(name: str) -> FileEntry:
    return FileEntry(name=name, path=f"/p/{name}", size=1, lines=1)


def _profile(**overrides: object) -> ProjectProfile:
    structure = DirectoryNode(
        name="p",
        path="/p",
        files=[_file("package.json")],
        dirs=[DirectoryNode(name="api", path="/p/api", files=[_file("index.js")])],
        compressed=["node_modules"],
    )
    values: dict[str, object] = {
        "path": "/p",
        "structure": structure,
        "stack": ["Node.js", "React"],
        "red_flags": ["Massive file: index.js (1500 lines)"],
    }
    values.update(overrides)
    return ProjectProfile(**values)  # type: ignore[arg-type]


def test_render_tree_layout() -> None:
    tree = _profile().structure

    assert render_tree(tree) == (
        "├─ api/ → Backend API logic\n"
        "│ └─ index.js\n"
        "└─ package.json\n"
        "[compressed: node_modules]\n"
    )


def test_render_tree_truncates_file_listing() -> None:
    node = DirectoryNode(name="p", path="/p", files=[_file(f"f{i}.txt") for i in range(7)])

    rendered = render_tree(node)

    assert "f4.txt" in rendered
    assert "f5.txt" not in rendered
    assert rendered.endswith("... 2 more files\n")


def test_last_directory_without_files_uses_closing_connector() -> None:
    node = DirectoryNode(name="p", path="/p", dirs=[DirectoryNode(name="Widgets", path="/p/Widgets")])

    assert render_tree(node) == "└─ Widgets/ → Custom Widgets directory\n"


def test_explain_folder_is_case_insensitive() -> None:
    assert explain_folder("SRC") == "Source code lives here"
    assert explain_folder("quux") == "Custom quux directory"


def test_guess_purpose_variants() -> None:
    api_tree = _profile().structure
    bare = DirectoryNode(name="p", path="/p")

    assert guess_purpose(["React"], api_tree) == "Full-stack web application"
    assert guess_purpose(["Vue"], bare) == "Frontend web application"
    assert guess_purpose([], api_tree) == "Backend API service"
    assert guess_purpose(["Python"], bare) == "Python project"
    assert guess_purpose(["Go"], bare) == "Go service"
    assert guess_purpose([], bare) == "Software project"


def test_strip_ansi() -> None:
    assert strip_ansi("\x1b[1;34msrc\x1b[0m/") == "src/"


def test_to_json_matches_profile_dict() -> None:
    profile = _profile(git_summary=GitSummary(3, ["Alice (3 commits)"], ["abc1234 - init"]))

    payload = json.loads(to_json(profile))

    assert payload["redFlags"] == ["Massive file: index.js (1500 lines)"]
    assert payload["gitSummary"] == {
        "totalCommits": 3,
        "topAuthors": ["Alice (3 commits)"],
        "recentCommits": ["abc1234 - init"],
    }


def test_render_markdown_sections() -> None:
    profile = _profile(git_summary=GitSummary(3, ["Alice (3 commits)"], ["abc1234 - init"]))
    generated = datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)

    markdown = render_markdown(profile, generated)

    assert markdown.startswith("# Project Analysis Report\n")
    assert "**Generated:** 2026-01-02T03:04:05+00:00" in markdown
    assert "**Path:** /p" in markdown
    assert "Full-stack web application" in markdown
    assert "- Node.js\n- React\n" in markdown
    assert "- Total commits: 3" in markdown
    assert "- Top contributors: Alice (3 commits)" in markdown
    assert "- abc1234 - init" in markdown
    assert "```\n├─ api/ → Backend API logic\n" in markdown
    assert "## Red Flags\n\n- Massive file: index.js (1500 lines)" in markdown
    assert "\x1b[" not in markdown


def test_render_markdown_omits_empty_sections() -> None:
    markdown = render_markdown(_profile(red_flags=[], stack=[]))

    assert "## Git Summary" not in markdown
    assert "## Red Flags" not in markdown
    assert "- No framework detected" in markdown


def test_export_markdown_writes_timestamped_file(tmp_path: Path) -> None:
    target = export_markdown(_profile(), tmp_path)

    assert target.parent == tmp_path
    assert target.name.startswith("project-analysis-")
    assert target.suffix == ".md"
    assert target.read_text(encoding="utf-8").startswith("# Project Analysis Report")
