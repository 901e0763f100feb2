"""
Secure password generation utilities.
"""

import logging
from typing import List, NamedTuple, Optional, Tuple

from ..exceptions import EmptyPoolError, InvalidLengthError, TooFewPositionsError
from .random_source import RandomSource, get_random_source
from .strength import StrengthReport, estimate_strength

logger = logging.getLogger(__name__)

# Character sets
LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
DIGITS = "0123456789"
SYMBOLS = "!@#$%^&*()-_=+[]{};:,.?/"

# Glyphs easily confused when transcribed by hand
AMBIGUOUS_CHARS = frozenset("0Oo1lI")

DEFAULT_LENGTH = 16


class GenerationOptions(NamedTuple):
    """Options for a single password request."""
    length: int = DEFAULT_LENGTH
    include_lowercase: bool = True
    include_uppercase: bool = True
    include_digits: bool = True
    include_symbols: bool = True
    exclude_ambiguous: bool = False

    def enabled_categories(self) -> List[str]:
        """Names of the enabled categories, in pool order."""
        flags = [
            ("lowercase", self.include_lowercase),
            ("uppercase", self.include_uppercase),
            ("digits", self.include_digits),
            ("symbols", self.include_symbols),
        ]
        return [name for name, enabled in flags if enabled]

    def validate_length(self, min_length: int, max_length: int) -> None:
        """
        Check the length against configured bounds.

        Raises:
            InvalidLengthError: If length is outside [min_length, max_length]
        """
        if not min_length <= self.length <= max_length:
            raise InvalidLengthError(self.length, min_length, max_length)


CATEGORY_CHARS = {
    "lowercase": LOWERCASE,
    "uppercase": UPPERCASE,
    "digits": DIGITS,
    "symbols": SYMBOLS,
}


class CharacterPool(NamedTuple):
    """Working alphabet split into its category subsets."""
    subsets: Tuple[Tuple[str, str], ...]  # (category, characters), enabled only

    @property
    def characters(self) -> str:
        return "".join(chars for _, chars in self.subsets)

    @property
    def size(self) -> int:
        return len(self.characters)

    @property
    def required_groups(self) -> List[str]:
        """Non-empty subsets; the password needs one character of each."""
        return [chars for _, chars in self.subsets if chars]

    def check_length(self, length: int) -> None:
        """
        Check that ``length`` can hold one character of each required group.

        Raises:
            TooFewPositionsError: If length is shorter than the group count
        """
        required = len(self.required_groups)
        if length < required:
            raise TooFewPositionsError(length, required)

    def __contains__(self, char) -> bool:
        return any(char in chars for _, chars in self.subsets)


def build_pool(options: GenerationOptions) -> CharacterPool:
    """
    Build the character pool for the given options.

    Args:
        options: Generation options

    Returns:
        Pool containing the enabled categories in fixed order

    Raises:
        EmptyPoolError: If no enabled category has characters left
    """
    subsets = []
    for category in options.enabled_categories():
        chars = CATEGORY_CHARS[category]
        if options.exclude_ambiguous:
            chars = "".join(c for c in chars if c not in AMBIGUOUS_CHARS)
        subsets.append((category, chars))

    pool = CharacterPool(tuple(subsets))
    if not pool.required_groups:
        raise EmptyPoolError("At least one character type must be enabled")

    return pool


class PasswordGenerator:
    """Generate secure passwords that cover every enabled category."""

    def __init__(self, options: Optional[GenerationOptions] = None,
                 rng: Optional[RandomSource] = None):
        """
        Initialize password generator with options.

        Args:
            options: Generation options (defaults to 16 characters, all categories)
            rng: Randomness source (defaults to the OS CSPRNG)

        Raises:
            EmptyPoolError: If the options leave no characters to draw from
        """
        self.options = options or GenerationOptions()
        self.rng = rng or get_random_source()
        self.pool = build_pool(self.options)

    def generate(self) -> str:
        """
        Generate a secure password.

        One character is drawn from each required group, the remaining
        positions from the whole pool, then the buffer is shuffled so the
        guaranteed characters do not sit at the front.

        Returns:
            Generated password string

        Raises:
            TooFewPositionsError: If length cannot hold one of each group
        """
        required_groups = self.pool.required_groups
        length = self.options.length
        self.pool.check_length(length)

        chars = [self.rng.choice(group) for group in required_groups]

        pool_chars = self.pool.characters
        chars.extend(self.rng.choice(pool_chars) for _ in range(length - len(chars)))

        self.rng.shuffle(chars)
        return "".join(chars)

    def estimate(self) -> StrengthReport:
        """Strength of passwords produced with these options."""
        return estimate_strength(self.pool.size, self.options.length)


def generate_password(options: Optional[GenerationOptions] = None,
                      rng: Optional[RandomSource] = None) -> Tuple[str, StrengthReport]:
    """
    Convenience function to generate a password and its strength report.

    Args:
        options: Generation options
        rng: Randomness source (defaults to the OS CSPRNG)

    Returns:
        Tuple of (password, strength report)

    Raises:
        EmptyPoolError: If no characters are available
        TooFewPositionsError: If length is shorter than the required categories
    """
    generator = PasswordGenerator(options, rng)
    password = generator.generate()
    report = generator.estimate()

    logger.debug(f"Generated password from pool of {generator.pool.size} characters")
    return password, report
