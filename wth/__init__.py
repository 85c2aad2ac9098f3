"""Explain any project folder: structure, tech stack, red flags and git history."""

__version__ = "1.0.0"
