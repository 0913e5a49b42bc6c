"""
descaudit

Description style auditing and auto-correction for formulae and casks, plus
orchestration of the external style linters.
"""

__version__ = "1.0.0"

from .core.matcher import DescriptionToken
from .core.rules import DescriptionRuleEngine, Problem, RuleBook, DEFAULT_RULEBOOK
from .core.corrector import DescriptionCorrector, TokenReplacement
from .core.runner import SubprocessRunner, RunOutcome, classify_outcome
from .core.aggregator import ResultAggregator, RunResult, OffenseRecord
from .core.reporter import ReportRenderer
from .core.style import StyleChecker

__all__ = [
    'DescriptionToken',
    'DescriptionRuleEngine',
    'Problem',
    'RuleBook',
    'DEFAULT_RULEBOOK',
    'DescriptionCorrector',
    'TokenReplacement',
    'SubprocessRunner',
    'RunOutcome',
    'classify_outcome',
    'ResultAggregator',
    'RunResult',
    'OffenseRecord',
    'ReportRenderer',
    'StyleChecker'
]
