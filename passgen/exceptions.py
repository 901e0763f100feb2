"""
Custom exceptions for passgen.
"""


class PassgenException(Exception):
    """Base exception for passgen."""

    pass


class ConfigurationError(PassgenException):
    """Configuration values are missing or inconsistent."""

    pass


class PasswordGenerationError(PassgenException):
    """Password could not be generated from the requested options."""

    pass


class EmptyPoolError(PasswordGenerationError):
    """Every character category is disabled or filtered away."""

    pass


class TooFewPositionsError(PasswordGenerationError):
    """Password length is shorter than the number of required categories."""

    def __init__(self, length: int, required: int):
        super().__init__(
            f"Password length ({length}) is too short for the "
            f"required character types ({required})"
        )
        self.length = length
        self.required = required


class InvalidLengthError(PasswordGenerationError):
    """Password length is outside the configured bounds."""

    def __init__(self, length: int, min_length: int, max_length: int):
        if length < min_length:
            message = f"Password length too short. Minimum: {min_length} characters."
        else:
            message = f"Password length too long. Maximum: {max_length} characters."
        super().__init__(message)
        self.length = length
        self.min_length = min_length
        self.max_length = max_length


class InvalidOptionError(PasswordGenerationError):
    """Command arguments could not be parsed."""

    pass
