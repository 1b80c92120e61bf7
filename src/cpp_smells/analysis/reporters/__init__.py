"""Reporters for code smell analysis output."""

from .console import ConsoleReporter
from .json_reporter import build_report, render_json

__all__ = ["ConsoleReporter", "build_report", "render_json"]
