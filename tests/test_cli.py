"""CLI behaviour tests."""

from __future__ import annotations

import importlib
import json
import sys
from pathlib import Path

import pytest

from wth import cli
from wth.cli import _build_parser, main
from wth.git import GitHistory
from wth.pipeline import ProjectAnalyzer
from tests._fixtures.git_runner import FakeGitRunner
from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture(autouse=True)
def _offline_git(monkeypatch, fake_git: FakeGitRunner) -> None:
    """Route the CLI's pipeline through the fake git runner."""

    def _factory() -> ProjectAnalyzer:
        return ProjectAnalyzer(git=GitHistory(runner=fake_git))

    monkeypatch.setattr(cli, "ProjectAnalyzer", _factory)


@pytest.fixture
def project(repo_builder: RepoBuilder) -> Path:
    repo_builder.write(
        {
            "package.json": json.dumps({"dependencies": {"react": "^18", "left-pad": "^1"}}),
            "src/App.jsx": "import React from 'react'\n",
        }
    )
    return repo_builder.path()


def test_parser_defaults() -> None:
    args = _build_parser().parse_args([])
    assert args.path == "."
    assert not any((args.tree, args.redflags, args.explain_only, args.json, args.export, args.git))
    assert args.max_depth is None


def test_parser_accepts_all_modes() -> None:
    args = _build_parser().parse_args(
        ["some/dir", "--tree", "--redflags", "--explain-only", "--json", "--export", "--git", "--max-depth", "2", "-v"]
    )
    assert args.path == "some/dir"
    assert args.tree and args.redflags and args.explain_only
    assert args.json and args.export and args.git and args.verbose
    assert args.max_depth == 2


def test_missing_directory_exits_non_zero(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "nope")])
    assert excinfo.value.code == 1
    assert "Directory not found" in capsys.readouterr().err


def test_default_report_sections(project: Path, capsys) -> None:
    main([str(project)])
    out = capsys.readouterr().out

    assert 'What This Project Probably Is: "Frontend web application"' in out
    assert "Tech Stack\n" in out
    assert "  React\n" in out
    assert "Structure\n" in out
    assert "├─ src/ → Source code lives here" in out
    assert "Red Flags\n  Potentially unused dependencies: left-pad" in out
    assert "Git Summary" not in out


def test_tree_only(project: Path, capsys) -> None:
    main([str(project), "--tree"])
    out = capsys.readouterr().out

    assert out.startswith("├─ src/")
    assert "Tech Stack" not in out
    assert "Red Flags" not in out


def test_redflags_only(project: Path, capsys) -> None:
    main([str(project), "--redflags"])

    assert capsys.readouterr().out == "Potentially unused dependencies: left-pad\n"


def test_redflags_only_when_clean(repo_builder: RepoBuilder, capsys) -> None:
    main([str(repo_builder.path()), "--redflags"])

    assert capsys.readouterr().out == "No red flags detected\n"


def test_explain_only(project: Path, capsys) -> None:
    main([str(project), "--explain-only"])
    out = capsys.readouterr().out

    assert "Folders\n  src/ → Source code lives here\n" in out
    assert "Tech Stack" not in out


def test_json_output(project: Path, capsys) -> None:
    main([str(project), "--json"])
    payload = json.loads(capsys.readouterr().out)

    assert payload["path"] == str(project.resolve())
    assert "React" in payload["stack"]
    assert payload["redFlags"] == ["Potentially unused dependencies: left-pad"]
    assert payload["gitSummary"] is None


def test_git_summary_shown_only_with_flag(
    project: Path, fake_git: FakeGitRunner, capsys
) -> None:
    fake_git.make_repository()
    fake_git.responses[("log",)] = "1234567890\x1fAlice\x1fInitial\n\x1e\n"
    fake_git.responses[("rev-list", "--count", "HEAD")] = "1\n"

    main([str(project)])
    assert "Git Summary" not in capsys.readouterr().out

    main([str(project), "--git"])
    out = capsys.readouterr().out
    assert "Git Summary\n  Total commits: 1\n  Top contributors: Alice (1 commits)" in out
    assert "    1234567 - Initial" in out


def test_export_writes_markdown(project: Path, tmp_path: Path, capsys) -> None:
    out_dir = tmp_path / "reports"
    out_dir.mkdir()

    main([str(project), "--export", "--output-dir", str(out_dir)])

    reports = list(out_dir.glob("project-analysis-*.md"))
    assert len(reports) == 1
    assert "Exported to" in capsys.readouterr().out
    assert "left-pad" in reports[0].read_text(encoding="utf-8")


def test_importing_main_module_does_not_run_cli(monkeypatch) -> None:
    monkeypatch.delitem(sys.modules, "wth.__main__", raising=False)
    monkeypatch.setattr(sys, "argv", ["wth", "--definitely-not-an-option"])

    module = importlib.import_module("wth.__main__")

    assert callable(module.main)
