"""Typed exceptions for rule configuration and password generation."""


class PasswordGeneratorError(Exception):
    """Base class for all passgen errors."""


class InvalidConfigurationError(PasswordGeneratorError, ValueError):
    """Raised when a rule set cannot be used as configured."""


class LengthRangeError(InvalidConfigurationError):
    """Raised when a length bound would break ``min_length <= max_length``."""


class DestinationLengthError(PasswordGeneratorError, ValueError):
    """Raised when a destination buffer is outside the configured length range."""


class GenerationExhaustedError(PasswordGeneratorError, RuntimeError):
    """Raised when no valid password was produced within the attempt budget."""
