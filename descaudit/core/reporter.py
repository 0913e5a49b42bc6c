"""
Report Renderer Module

This module formats offenses and description problems as one-line strings,
either plain or as rich Text for terminal output.
"""

from typing import Any, Dict, List

from rich.text import Text

from .aggregator import OffenseRecord, RunResult
from .rules import Problem


class ReportRenderer:
    """Formats offenses the way the linter's simple formatter does."""

    def render(self, offense: OffenseRecord, show_rule_id: bool = False) -> str:
        """
        Format one offense.

        Args:
            offense: Offense to format
            show_rule_id: Include the cop name before the message

        Returns:
            ``<S>: <line>: col <column>: [<cop>: ][Corrected] <message>``
        """
        prefix = f"{offense.severity_code}: {offense.location.short_str()}: "
        if show_rule_id:
            prefix += f"{offense.cop_name}: "
        return f"{prefix}{offense.correction_status}{offense.message}"

    def render_text(self, offense: OffenseRecord, show_rule_id: bool = False) -> Text:
        """Same as render(), with the correction marker in green."""
        text = Text(f"{offense.severity_code}: {offense.location.short_str()}: ")
        if show_rule_id:
            text.append(f"{offense.cop_name}: ")
        if offense.corrected:
            text.append(offense.correction_status, style="green")
        text.append(offense.message)
        return text

    def render_result(self, result: RunResult, show_rule_id: bool = False) -> List[str]:
        """A header line per offending file followed by its offenses."""
        lines = []
        for path in result.paths:
            lines.append(f"== {path} ==")
            lines.extend(self.render(offense, show_rule_id) for offense in result.file_offenses(path))
        return lines

    def render_problem(self, problem: Problem) -> str:
        return f"{problem.severity[:1].upper()}: {problem.message}"

    def export_report(self, result: RunResult) -> Dict[str, Any]:
        return result.to_dict()
