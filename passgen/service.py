"""
Password service: rate limiting, generation and command handling.
"""

import logging
from typing import Hashable, Optional, Tuple

from .config import Config
from .exceptions import ConfigurationError, InvalidOptionError, PasswordGenerationError
from .ratelimit import RateLimiter
from .utils.commands import (
    PRESET_COMMANDS,
    WELCOME_TEXT,
    format_help,
    format_metadata,
    format_password_reply,
    format_usage_error,
    parse_password_args,
)
from .utils.password_generator import GenerationOptions, PasswordGenerator
from .utils.random_source import RandomSource, get_random_source
from .utils.strength import StrengthReport

logger = logging.getLogger(__name__)

PASSWORD_COMMANDS = ("/pass", "/password")


class PasswordService:
    """Shared state for serving password requests from many clients."""

    def __init__(self, config: Optional[Config] = None,
                 rate_limiter: Optional[RateLimiter] = None,
                 rng: Optional[RandomSource] = None):
        """
        Initialize the service.

        Raises:
            ConfigurationError: If the limiter's quota differs from the config
        """
        self.config = config or Config()
        self.rate_limiter = rate_limiter or RateLimiter(limit=self.config.rate_limit_per_minute)
        self.rng = rng or get_random_source()

        if self.rate_limiter.limit != self.config.rate_limit_per_minute:
            raise ConfigurationError(
                f"Rate limiter allows {self.rate_limiter.limit} requests per minute "
                f"but RATE_LIMIT_PER_MINUTE is {self.config.rate_limit_per_minute}"
            )

    def check_rate_limit(self, client_id: Hashable, now: Optional[float] = None) -> bool:
        return self.rate_limiter.allow(client_id, now)

    def generate_password(self, options: GenerationOptions) -> Tuple[str, StrengthReport]:
        """
        Generate a password within the configured length bounds.

        Raises:
            InvalidLengthError: If the length is out of bounds
            EmptyPoolError: If no characters are available
            TooFewPositionsError: If length is shorter than the required categories
        """
        options.validate_length(self.config.min_password_length,
                                self.config.max_password_length)

        generator = PasswordGenerator(options, self.rng)
        return generator.generate(), generator.estimate()

    def handle_command(self, client_id: Hashable, text: str,
                       now: Optional[float] = None) -> str:
        """
        Answer one chat-style command from ``client_id``.

        Returns:
            The reply to send back to the client
        """
        command, _, args = text.strip().partition(" ")
        command = command.lower()

        if command == "/start":
            logger.info(f"Client {client_id} started a session")
            return WELCOME_TEXT

        if command == "/help":
            return format_help(
                self.config.default_password_length,
                self.config.min_password_length,
                self.config.max_password_length,
                self.config.rate_limit_per_minute,
            )

        if command in PASSWORD_COMMANDS:
            return self._handle_password(client_id, args, now)

        if command in PRESET_COMMANDS:
            return self._handle_password(client_id, PRESET_COMMANDS[command], now)

        return "❓ Unknown command. Type /help for available commands."

    def _handle_password(self, client_id: Hashable, args: str,
                         now: Optional[float]) -> str:
        if not self.check_rate_limit(client_id, now):
            logger.warning(f"Rate limit exceeded for client {client_id}")
            return (
                "⏳ Too many requests. Maximum "
                f"{self.config.rate_limit_per_minute} password generations per minute. "
                "Please try again later."
            )

        try:
            options = parse_password_args(args, self.config.default_password_length)
        except InvalidOptionError as e:
            return format_usage_error(e)

        try:
            password, report = self.generate_password(options)
        except PasswordGenerationError as e:
            logger.info(f"Rejected password request from client {client_id}: {e}")
            return f"❌ {e}"

        metadata = format_metadata(options, report)
        # Never log the password itself
        logger.info(f"Generated password for client {client_id}: {metadata}")

        return format_password_reply(password, metadata, report)
