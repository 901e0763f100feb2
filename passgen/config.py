"""
Runtime configuration for passgen.

Values come from command-line options or their environment variables
(see ``passgen.__main__``) and are validated here.
"""

from typing import Any, Dict

from .exceptions import ConfigurationError

DEFAULT_PASSWORD_LENGTH = 16
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 64
RATE_LIMIT_PER_MINUTE = 10


class Config:
    """Password length bounds and rate limit."""

    def __init__(self,
                 default_password_length: int = DEFAULT_PASSWORD_LENGTH,
                 min_password_length: int = MIN_PASSWORD_LENGTH,
                 max_password_length: int = MAX_PASSWORD_LENGTH,
                 rate_limit_per_minute: int = RATE_LIMIT_PER_MINUTE):
        """
        Initialize and validate configuration.

        Args:
            default_password_length: Length used when a request gives none
            min_password_length: Smallest length a request may ask for
            max_password_length: Largest length a request may ask for
            rate_limit_per_minute: Password requests per client per minute

        Raises:
            ConfigurationError: If the values are inconsistent
        """
        self.default_password_length = default_password_length
        self.min_password_length = min_password_length
        self.max_password_length = max_password_length
        self.rate_limit_per_minute = rate_limit_per_minute

        self.validate()

    def validate(self) -> None:
        """Check that the bounds are consistent."""
        if self.min_password_length <= 0:
            raise ConfigurationError("MIN_PASSWORD_LENGTH must be greater than 0")

        if self.max_password_length < self.min_password_length:
            raise ConfigurationError(
                f"MAX_PASSWORD_LENGTH ({self.max_password_length}) must be >= "
                f"MIN_PASSWORD_LENGTH ({self.min_password_length})"
            )

        if not (self.min_password_length
                <= self.default_password_length
                <= self.max_password_length):
            raise ConfigurationError(
                f"DEFAULT_PASSWORD_LENGTH ({self.default_password_length}) must be "
                f"between {self.min_password_length} and {self.max_password_length}"
            )

        if self.rate_limit_per_minute <= 0:
            raise ConfigurationError("RATE_LIMIT_PER_MINUTE must be greater than 0")

    def as_dict(self) -> Dict[str, Any]:
        return {
            "default_password_length": self.default_password_length,
            "min_password_length": self.min_password_length,
            "max_password_length": self.max_password_length,
            "rate_limit_per_minute": self.rate_limit_per_minute,
        }

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v}" for k, v in self.as_dict().items())
        return f"Config({fields})"
