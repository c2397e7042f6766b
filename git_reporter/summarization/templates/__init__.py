"""Prompt templates shipped with the package."""

from pathlib import Path

DEFAULT_TEMPLATE_PATH = Path(__file__).parent / "work_report_prompt.md"
