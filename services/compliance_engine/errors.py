"""
Compliance Engine Errors
========================

Hard errors raised to callers. Missing optional data never raises; it is
resolved by inference and fallback rules instead.

Version: 0.1.0
"""


class ComplianceEngineError(Exception):
    """Base class for compliance engine errors."""


class InvalidInputError(ComplianceEngineError):
    """Business profile is absent or cannot be validated."""


class MissingClassificationError(ComplianceEngineError):
    """Obligation mapping was requested without a classification."""
