"""
Description Corrector Module

This module rewrites a quoted description token so that it satisfies the
rulebook. The rewrite is an ordered sequence of small string transforms; the
sequence is re-applied until the text stops changing, so correcting an
already corrected token is a no-op.

Over-long descriptions are reported by the rule engine but never shortened
here.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional, Tuple
import logging

from .matcher import DescriptionToken
from .rules import DEFAULT_RULEBOOK, RuleBook

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r'(?P<quote>["\'])(?P<correction>.*)(?P=quote)')


@dataclass(frozen=True)
class TokenReplacement:
    """Replacement text for the source span of a description token."""
    span: Optional[Tuple[int, int]]
    original: str
    replacement: str

    @property
    def changed(self) -> bool:
        return self.original != self.replacement

    def __repr__(self):
        return f"TokenReplacement(original={self.original!r}, replacement={self.replacement!r})"


def strip_whitespace(text: str, name: str, rulebook: RuleBook) -> str:
    text = re.sub(r'^\s+', '', text)
    return re.sub(r'\s+$', '', text)


def strip_indefinite_article(text: str, name: str, rulebook: RuleBook) -> str:
    return re.sub(r'^an?\s+', '', text, count=1, flags=re.IGNORECASE)


def capitalize_first_word(text: str, name: str, rulebook: RuleBook) -> str:
    words = text.split()
    if not words or words[0] in rulebook.allowed_lowercase_words:
        return text
    # Same letters the capitalization rule complains about.
    if re.match(r'[a-z]', text):
        return text[0].upper() + text[1:]
    return text


def hyphenate_command_line(text: str, name: str, rulebook: RuleBook) -> str:
    return re.sub(r'(c)ommand ?line', r'\1ommand-line', text, flags=re.IGNORECASE)


def remove_item_name(text: str, name: str, rulebook: RuleBook) -> str:
    if not name:
        return text
    return re.sub(rf'(^|[^a-z]){re.escape(name)}([^a-z]|$)', r'\1\2', text, flags=re.IGNORECASE)


def strip_full_stop(text: str, name: str, rulebook: RuleBook) -> str:
    if text.endswith("etc."):
        return text
    return re.sub(r'\.$', '', text)


Step = Callable[[str, str, RuleBook], str]

CORRECTION_STEPS: Tuple[Step, ...] = (
    strip_whitespace,
    strip_indefinite_article,
    capitalize_first_word,
    hyphenate_command_line,
    remove_item_name,
    strip_whitespace,
    strip_full_stop,
)


class DescriptionCorrector:
    """
    Rewrites description tokens in place of the host's auto-fix.

    Args:
        rulebook: Supplies the allow-list of lowercase first words
        steps: Ordered transforms applied to the unquoted text
    """

    def __init__(self, rulebook: RuleBook = DEFAULT_RULEBOOK, steps: Tuple[Step, ...] = CORRECTION_STEPS):
        self.rulebook = rulebook
        self.steps = steps

    def apply_steps(self, text: str, name: str) -> str:
        """Run the step sequence once."""
        for step in self.steps:
            text = step(text, name, self.rulebook)
        return text

    def correct_text(self, text: str, name: str) -> str:
        """Run the step sequence until the text no longer changes."""
        while True:
            corrected = self.apply_steps(text, name)
            if corrected == text:
                return corrected
            text = corrected

    def correct(self, token: DescriptionToken, name: str) -> Optional[TokenReplacement]:
        """
        Compute the corrected form of a quoted description.

        Args:
            token: Token whose source is a single- or double-quoted string
            name: Item name to remove from the description

        Returns:
            TokenReplacement, or None when the token isn't a plain quoted string
        """
        match = TOKEN_PATTERN.fullmatch(token.source)
        if match is None:
            logger.debug(f"Declining to correct unsupported token: {token.source!r}")
            return None

        quote = match.group('quote')
        correction = self.correct_text(match.group('correction'), name)

        return TokenReplacement(
            span=token.span,
            original=token.source,
            replacement=f"{quote}{correction}{quote}",
        )


def correct_description(token: DescriptionToken, name: str,
                        rulebook: RuleBook = DEFAULT_RULEBOOK) -> Optional[TokenReplacement]:
    """Correct a description with a throwaway corrector."""
    return DescriptionCorrector(rulebook).correct(token, name)
