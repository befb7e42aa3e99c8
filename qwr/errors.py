"""Project-specific exception types."""

from __future__ import annotations


class QwrError(RuntimeError):
    """Base error for domain-level qwr failures."""


class UsageError(QwrError):
    """Raised when the command line is malformed or incomplete."""


class ValidationError(UsageError):
    """Raised when a field required by the selected mode is missing."""


class HelpRequested(QwrError):
    """Raised to request printing the usage text and exiting successfully."""
