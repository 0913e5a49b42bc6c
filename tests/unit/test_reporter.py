"""
Unit tests for the report renderer.
"""

import pytest

from descaudit.core.aggregator import LineLocation, OffenseRecord, RunResult
from descaudit.core.reporter import ReportRenderer
from descaudit.core.rules import Problem


def offense(corrected=False, severity="convention"):
    return OffenseRecord(
        severity=severity,
        message="Description shouldn't end with a full stop.",
        cop_name="FormulaAudit/Desc",
        corrected=corrected,
        location=LineLocation(line=4, column=8, length=20),
    )


class TestReportRenderer:
    """Test one-line offense formatting."""

    def setup_method(self):
        """Set up test fixtures."""
        self.renderer = ReportRenderer()

    @pytest.mark.parametrize("corrected,show_rule_id,expected", [
        (False, False, "C: 4: col 8: Description shouldn't end with a full stop."),
        (False, True, "C: 4: col 8: FormulaAudit/Desc: Description shouldn't end with a full stop."),
        (True, False, "C: 4: col 8: [Corrected] Description shouldn't end with a full stop."),
        (True, True, "C: 4: col 8: FormulaAudit/Desc: [Corrected] Description shouldn't end with a full stop."),
    ])
    def test_render(self, corrected, show_rule_id, expected):
        assert self.renderer.render(offense(corrected), show_rule_id) == expected

    def test_severity_code(self):
        assert self.renderer.render(offense(severity="warning")).startswith("W: ")

    def test_render_text_matches_plain(self):
        """Test that the rich rendering carries the same text."""
        for corrected in (False, True):
            for show_rule_id in (False, True):
                text = self.renderer.render_text(offense(corrected), show_rule_id)
                assert text.plain == self.renderer.render(offense(corrected), show_rule_id)

    def test_render_text_colours_correction_marker(self):
        text = self.renderer.render_text(offense(corrected=True))
        styled = [text.plain[span.start:span.end] for span in text.spans if span.style == "green"]

        assert styled == ["[Corrected] "]

    def test_render_result(self):
        result = RunResult(offenses_by_file={"/b.rb": (offense(),), "/a.rb": (offense(True),)})
        lines = self.renderer.render_result(result)

        assert lines == [
            "== /a.rb ==",
            "C: 4: col 8: [Corrected] Description shouldn't end with a full stop.",
            "== /b.rb ==",
            "C: 4: col 8: Description shouldn't end with a full stop.",
        ]

    def test_render_empty_result(self):
        assert self.renderer.render_result(RunResult()) == []

    def test_render_problem(self):
        problem = Problem(message="Description should start with a capital letter.", rule="capitalization")
        assert self.renderer.render_problem(problem) == "C: Description should start with a capital letter."

    def test_export_report(self):
        report = self.renderer.export_report(RunResult(offenses_by_file={"/a.rb": (offense(),)}))

        assert report['summary']['offense_count'] == 1
        assert report['files'][0]['offenses'][0]['cop_name'] == "FormulaAudit/Desc"
