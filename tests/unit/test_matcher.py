"""
Unit tests for the text matcher helpers.
"""

import re

import pytest

from descaudit.core.matcher import DescriptionToken, regex_match_group, string_content


class TestStringContent:
    """Test quote stripping."""

    @pytest.mark.parametrize("source,expected", [
        ('"Tool for things"', "Tool for things"),
        ("'Tool for things'", "Tool for things"),
        ('""', ""),
        ('"  padded "', "  padded "),
        ('"escaped \\" quote"', 'escaped \\" quote'),
    ])
    def test_strips_one_quote_pair(self, source, expected):
        assert string_content(DescriptionToken(source)) == expected

    @pytest.mark.parametrize("source", ['"unterminated', "mixed\"", '"', "bare"])
    def test_unquoted_source_is_returned_as_is(self, source):
        assert string_content(DescriptionToken(source)) == source

    def test_content_property(self):
        assert DescriptionToken('"abc"').content == "abc"

    def test_from_text(self):
        token = DescriptionToken.from_text("abc", quote="'")
        assert token.source == "'abc'"
        assert token.span is None


class TestRegexMatchGroup:
    """Test regex predicates against token content."""

    def test_returns_first_overall_match(self):
        token = DescriptionToken('"Use the command line or commandline"')
        assert regex_match_group(token, r'(command ?line)') == "command line"

    def test_returns_none_without_match(self):
        assert regex_match_group(DescriptionToken('"Tool"'), r'\.$') is None

    def test_matches_content_not_quotes(self):
        """Test that anchors apply to the unquoted text."""
        token = DescriptionToken('"  Tool"')
        assert regex_match_group(token, r'^\s+') == "  "
        assert regex_match_group(token, r'^"') is None

    def test_flags(self):
        token = DescriptionToken('"An app"')
        assert regex_match_group(token, r'^(an?)(?=\s)') is None
        assert regex_match_group(token, r'^(an?)(?=\s)', re.IGNORECASE) == "An"

    def test_compiled_pattern(self):
        pattern = re.compile(r'etc\.$')
        assert regex_match_group(DescriptionToken('"Tools, etc."'), pattern) == "etc."
