"""
Core modules for description auditing, correction and linter orchestration.
"""

from .rules import DescriptionRuleEngine
from .corrector import DescriptionCorrector
from .runner import SubprocessRunner
from .aggregator import ResultAggregator
from .reporter import ReportRenderer
from .style import StyleChecker

__all__ = [
    'DescriptionRuleEngine',
    'DescriptionCorrector',
    'SubprocessRunner',
    'ResultAggregator',
    'ReportRenderer',
    'StyleChecker'
]
