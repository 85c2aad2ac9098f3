"""CLI entrypoint for the wth project explainer."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from .explain import explain_folder, guess_purpose
from .logging import configure_logging
from .models import ProjectProfile
from .pipeline import ProjectAnalyzer
from .report import export_markdown, render_tree, to_json


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wth",
        description="Explain any project folder like you're 5.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory to analyze (defaults to current directory).",
    )
    parser.add_argument("--tree", action="store_true", help="Show only the file tree.")
    parser.add_argument("--redflags", action="store_true", help="Show only red flags.")
    parser.add_argument(
        "--explain-only",
        action="store_true",
        help="Show only the project purpose and folder explanations.",
    )
    parser.add_argument("--json", action="store_true", help="Output the analysis as JSON.")
    parser.add_argument(
        "--export", action="store_true", help="Export the analysis to a Markdown file."
    )
    parser.add_argument("--git", action="store_true", help="Include the git history summary.")
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Directory depth to scan (defaults to scan.max_depth in .wth.yml, or 3).",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for --export reports (defaults to current directory).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for wth."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    try:
        profile = ProjectAnalyzer().run(args.path, max_depth=args.max_depth)
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")

    # The git summary is always computed; --git only controls whether it is shown.
    if not args.git:
        profile = replace(profile, git_summary=None)

    if args.export:
        target = export_markdown(profile, args.output_dir)
        print(f"Exported to {_relativize(target)}")
        return

    if args.json:
        print(to_json(profile))
        return

    print(render_report(profile, args), end="")


def render_report(profile: ProjectProfile, args: argparse.Namespace) -> str:
    """Return the terminal report, honouring the section toggles in ``args``."""
    purpose = guess_purpose(profile.stack, profile.structure)

    if args.tree or args.redflags:
        sections: list[str] = []
        if args.tree:
            sections.append(render_tree(profile.structure))
        if args.redflags:
            if profile.red_flags:
                sections.append("".join(f"{flag}\n" for flag in profile.red_flags))
            else:
                sections.append("No red flags detected\n")
        return "\n".join(sections)

    if args.explain_only:
        lines = [f"What This Project Probably Is: \"{purpose}\"", "", "Folders"]
        lines.extend(
            f"  {child.name}/ → {explain_folder(child.name)}" for child in profile.structure.dirs
        )
        return "\n".join(lines) + "\n"

    sections = [f"What This Project Probably Is: \"{purpose}\"\n"]

    lines = ["Tech Stack"]
    if profile.stack:
        lines.extend(f"  {tech}" for tech in profile.stack)
    else:
        lines.append("  No framework detected")
    sections.append("\n".join(lines) + "\n")

    summary = profile.git_summary
    if summary is not None:
        lines = [
            "Git Summary",
            f"  Total commits: {summary.total_commits}",
            f"  Top contributors: {', '.join(summary.top_authors)}",
            "",
            "  Recent commits:",
        ]
        lines.extend(f"    {commit}" for commit in summary.recent_commits)
        sections.append("\n".join(lines) + "\n")

    sections.append("Structure\n" + render_tree(profile.structure))

    if profile.red_flags:
        lines = ["Red Flags"]
        lines.extend(f"  {flag}" for flag in profile.red_flags)
        sections.append("\n".join(lines) + "\n")

    return "\n".join(sections)


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
