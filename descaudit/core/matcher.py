"""
Text Matcher Module

This module extracts the literal content of a quoted description token and
runs regular expression checks against it.
"""

import re
from dataclasses import dataclass
from typing import Optional, Pattern, Tuple, Union

QUOTE_CHARS = ('"', "'")


@dataclass(frozen=True)
class DescriptionToken:
    """A quoted string argument as it appears in source, e.g. ``"Tool for X"``."""
    source: str
    span: Optional[Tuple[int, int]] = None

    @property
    def content(self) -> str:
        return string_content(self)

    @classmethod
    def from_text(cls, text: str, quote: str = '"') -> "DescriptionToken":
        """Wrap unquoted text in a quote pair."""
        return cls(f"{quote}{text}{quote}")


def string_content(token: DescriptionToken) -> str:
    """
    Strip a single enclosing quote pair from the token source.

    No escape processing is done. Source without a matching pair of quote
    characters at both ends is returned unchanged.
    """
    source = token.source
    if len(source) >= 2 and source[0] in QUOTE_CHARS and source[-1] == source[0]:
        return source[1:-1]
    return source


def regex_match_group(token: DescriptionToken,
                      pattern: Union[str, Pattern],
                      flags: int = 0) -> Optional[str]:
    """
    Search the literal content of a token.

    Args:
        token: Token to inspect
        pattern: Regular expression (string or compiled)
        flags: re flags, only used for string patterns

    Returns:
        The first overall match, or None if nothing matched
    """
    if isinstance(pattern, str):
        pattern = re.compile(pattern, flags)
    match = pattern.search(string_content(token))
    if match is None:
        return None
    return match.group(0)
