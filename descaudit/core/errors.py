"""
Error types shared by the description auditor and the style runner.

Audit problems and declined corrections are ordinary return values; only
configuration mistakes and untrustworthy linter runs are raised.
"""

from typing import List, Optional


class DescAuditError(Exception):
    """Base class for all descaudit errors."""


class ConfigurationError(DescAuditError):
    """Raised before any linter runs when the requested options are invalid."""

    def __init__(self, message: str, names: Optional[List[str]] = None):
        super().__init__(message)
        self.names = names or []


class ExecutionError(DescAuditError):
    """Raised when a linter run exits outside its expected range or its output can't be trusted."""

    def __init__(self, message: str, command: Optional[List[str]] = None, stderr: str = ""):
        super().__init__(message)
        self.command = command or []
        self.stderr = stderr

    def __str__(self):
        text = super().__str__()
        if self.stderr:
            return f"{text}\n{self.stderr}"
        return text
