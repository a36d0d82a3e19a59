"""Comparison subsystem exceptions."""


class ComparisonError(Exception):
    """Base class for comparison errors."""


class ComparisonConfigError(ComparisonError):
    """Comparison model or configuration is invalid or unsupported."""


class ComparisonInputError(ComparisonError, TypeError):
    """Input to a comparison is not a sequence."""


class SequenceFormatError(ComparisonError):
    """Input file does not hold a readable sequence."""
