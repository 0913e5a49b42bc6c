"""
Test package for descaudit.

This package contains:
- Unit tests for the rule engine, corrector and style orchestration
- Integration tests covering audit/correct and linter/report round trips
- Property-based tests using Hypothesis
"""
