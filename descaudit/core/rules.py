"""
Description Rule Engine Module

This module checks formula and cask descriptions against a fixed, ordered
rulebook. Each rule is a record holding a predicate, the message it produces
and whether it ends the audit when it fires; a single loop walks the rules in
order and collects the problems.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, List, Optional, Tuple
import logging

from .matcher import DescriptionToken, regex_match_group, string_content

logger = logging.getLogger(__name__)

MAX_DESC_LENGTH = 80

VALID_LOWERCASE_WORDS = frozenset([
    'iOS',
    'iPhone',
    'macOS',
])

CONVENTION = "convention"


@dataclass(frozen=True)
class Problem:
    """A single rule violation found in a description."""
    message: str
    rule: str
    match: Optional[str] = None
    severity: str = CONVENTION
    span: Optional[Tuple[int, int]] = None


@dataclass(frozen=True)
class AuditContext:
    """Everything a rule may look at during one audit call."""
    kind: str
    name: str
    token: Optional[DescriptionToken]
    rulebook: "RuleBook"

    @property
    def content(self) -> str:
        return string_content(self.token)


# A check returns (message, matched substring) when the rule fires.
Finding = Tuple[str, Optional[str]]


@dataclass(frozen=True)
class Rule:
    """One entry of the rulebook."""
    name: str
    check: Callable[[AuditContext], Optional[Finding]]
    fatal: bool = False


def _check_presence(ctx: AuditContext) -> Optional[Finding]:
    if ctx.token is None:
        return f"{ctx.kind.capitalize()} should have a desc (Description).", None
    return None


def _check_non_empty(ctx: AuditContext) -> Optional[Finding]:
    if len(ctx.content) == 0:
        return "The desc (description) should not be an empty string.", None
    return None


def _check_leading_whitespace(ctx: AuditContext) -> Optional[Finding]:
    match = regex_match_group(ctx.token, r'^\s+')
    if match is not None:
        return "Description shouldn't have leading spaces.", match
    return None


def _check_trailing_whitespace(ctx: AuditContext) -> Optional[Finding]:
    match = regex_match_group(ctx.token, r'\s+$')
    if match is not None:
        return "Description shouldn't have trailing spaces.", match
    return None


def _check_command_line(ctx: AuditContext) -> Optional[Finding]:
    match = regex_match_group(ctx.token, r'(command ?line)', re.IGNORECASE)
    if match is not None:
        return f'Description should use "{match[0]}ommand-line" instead of "{match}".', match
    return None


def _check_indefinite_article(ctx: AuditContext) -> Optional[Finding]:
    match = regex_match_group(ctx.token, r'^(an?)(?=\s)', re.IGNORECASE)
    if match is not None:
        return f'Description shouldn\'t start with an indefinite article, i.e. "{match}".', match
    return None


def _check_capitalization(ctx: AuditContext) -> Optional[Finding]:
    words = ctx.content.split()
    first_word = words[0] if words else None
    if first_word in ctx.rulebook.allowed_lowercase_words:
        return None

    match = regex_match_group(ctx.token, r'^[a-z]')
    if match is not None:
        return "Description should start with a capital letter.", match
    return None


def _check_self_reference(ctx: AuditContext) -> Optional[Finding]:
    match = regex_match_group(ctx.token, rf'^{re.escape(ctx.name)} ', re.IGNORECASE)
    if match is not None:
        return f"Description shouldn't start with the {ctx.kind} name.", match.rstrip()
    return None


def _check_full_stop(ctx: AuditContext) -> Optional[Finding]:
    if regex_match_group(ctx.token, r'\.$') is not None and not ctx.content.endswith("etc."):
        return "Description shouldn't end with a full stop.", "."
    return None


def _check_max_length(ctx: AuditContext) -> Optional[Finding]:
    length = len(ctx.content)
    limit = ctx.rulebook.max_length
    if length <= limit:
        return None
    return (f"Description is too long. It should be less than {limit} characters. "
            f"The current length is {length}."), None


DEFAULT_RULES = (
    Rule('presence', _check_presence, fatal=True),
    Rule('non_empty', _check_non_empty, fatal=True),
    Rule('leading_whitespace', _check_leading_whitespace),
    Rule('trailing_whitespace', _check_trailing_whitespace),
    Rule('command_line', _check_command_line),
    Rule('indefinite_article', _check_indefinite_article),
    Rule('capitalization', _check_capitalization),
    Rule('self_reference', _check_self_reference),
    Rule('full_stop', _check_full_stop),
    Rule('max_length', _check_max_length),
)


@dataclass(frozen=True)
class RuleBook:
    """Ordered rules plus the constants they read."""
    rules: Tuple[Rule, ...] = DEFAULT_RULES
    allowed_lowercase_words: FrozenSet[str] = field(default=VALID_LOWERCASE_WORDS)
    max_length: int = MAX_DESC_LENGTH

    @property
    def rule_names(self) -> List[str]:
        return [rule.name for rule in self.rules]


DEFAULT_RULEBOOK = RuleBook()


class DescriptionRuleEngine:
    """
    Audits one description at a time against a rulebook.

    The engine holds no state besides its rulebook, so a single instance can
    be shared between callers.
    """

    def __init__(self, rulebook: RuleBook = DEFAULT_RULEBOOK):
        self.rulebook = rulebook

    def audit(self, kind: str, name: str, token: Optional[DescriptionToken]) -> List[Problem]:
        """
        Run every rule over a description token.

        Args:
            kind: Item kind used in messages ("formula" or "cask")
            name: Name of the item being described
            token: The quoted description, or None when the item has none

        Returns:
            Problems in rule order; empty when the description is fine
        """
        ctx = AuditContext(kind=kind, name=name, token=token, rulebook=self.rulebook)
        span = token.span if token is not None else None
        problems = []

        for rule in self.rulebook.rules:
            finding = rule.check(ctx)
            if finding is None:
                continue

            message, match = finding
            problems.append(Problem(message=message, rule=rule.name, match=match, span=span))
            if rule.fatal:
                break

        logger.debug(f"Audited {kind} {name}: {len(problems)} problem(s)")
        return problems


def audit_description(kind: str, name: str, token: Optional[DescriptionToken],
                      rulebook: RuleBook = DEFAULT_RULEBOOK) -> List[Problem]:
    """Audit a description without holding on to an engine."""
    return DescriptionRuleEngine(rulebook).audit(kind, name, token)
