"""
Parsing and formatting for chat-style password commands.

Commands look like ``/pass [length] [--option ...]``. When a flag and
its negation both appear, the last one wins.
"""

from typing import Optional

from ..exceptions import InvalidOptionError
from .password_generator import DEFAULT_LENGTH, GenerationOptions, build_pool
from .strength import Strength, StrengthReport

# option -> (GenerationOptions field, value)
FLAG_OPTIONS = {
    "--symbols": ("include_symbols", True),
    "--no-symbols": ("include_symbols", False),
    "--digits": ("include_digits", True),
    "--no-digits": ("include_digits", False),
    "--uppercase": ("include_uppercase", True),
    "--no-uppercase": ("include_uppercase", False),
    "--lowercase": ("include_lowercase", True),
    "--no-lowercase": ("include_lowercase", False),
    "--no-ambiguous": ("exclude_ambiguous", True),
}

# Shortcut commands and the /pass arguments they stand for
PRESET_COMMANDS = {
    "/pass_default": "",
    "/pass_24": "24",
    "/pass_32": "32",
    "/pass_no_symbols": "16 --no-symbols",
    "/pass_no_ambiguous": "18 --no-ambiguous",
}

STRENGTH_EMOJI = {
    Strength.STRONG: "💪",
    Strength.MEDIUM: "👍",
    Strength.WEAK: "⚠️",
}


def parse_password_args(args: str, default_length: int = DEFAULT_LENGTH) -> GenerationOptions:
    """
    Parse password command arguments.

    Args:
        args: Text after the command name, e.g. ``"20 --no-symbols"``
        default_length: Length used when no number is given

    Returns:
        Parsed generation options (length bounds are not checked here)

    Raises:
        InvalidOptionError: On an unknown option or a non-numeric length
    """
    values = GenerationOptions(length=default_length)._asdict()

    for part in args.split():
        if part.startswith("--"):
            if part not in FLAG_OPTIONS:
                raise InvalidOptionError(f"Unknown option: {part}")
            field, value = FLAG_OPTIONS[part]
            values[field] = value
        else:
            try:
                values["length"] = int(part)
            except ValueError:
                raise InvalidOptionError(
                    f"Invalid length: '{part}'. Expected a number."
                ) from None

    return GenerationOptions(**values)


def format_metadata(options: GenerationOptions, report: StrengthReport,
                    pool_size: Optional[int] = None) -> str:
    """
    Describe a generated password without revealing it.

    This is the only description of a password that may be logged.
    """
    if pool_size is None:
        pool_size = build_pool(options).size

    return (
        f"Length: {options.length} | "
        f"Types: {', '.join(options.enabled_categories())} | "
        f"Pool size: {pool_size} | "
        f"Entropy: {report.entropy_bits:.1f} bits | "
        f"Strength: {report.tier.value}"
    )


def format_password_reply(password: str, metadata: str, report: StrengthReport) -> str:
    return (
        f"🔐 Your Secure Password:\n\n{password}\n\n"
        f"{STRENGTH_EMOJI[report.tier]} {metadata}\n\n"
        "⚠️ Copy this password now and store it securely. "
        "It is not kept anywhere else."
    )


def format_usage_error(error: Exception) -> str:
    return (
        f"❌ Error: {error}\n\n"
        "Usage: /pass [length] [options]\n"
        "Example: /pass 20 --symbols --no-ambiguous\n\n"
        "Type /help for detailed usage."
    )


WELCOME_TEXT = (
    "🔐 Secure Password Generator\n\n"
    "I generate strong, random passwords using cryptographically secure randomness.\n\n"
    "🔒 Privacy Notice:\n"
    "• Passwords are generated using OS-level secure randomness\n"
    "• Passwords are NOT logged or stored\n\n"
    "📝 Quick Start:\n"
    "• /pass - Default password\n"
    "• /pass 24 - 24-character password\n"
    "• /pass 20 --no-symbols - Without symbols\n"
    "• /pass 16 --no-ambiguous - Exclude ambiguous characters\n\n"
    "Type /help for detailed usage information."
)


def format_help(default_length: int, min_length: int, max_length: int,
                rate_limit: int) -> str:
    return (
        "🔐 Password Generator - Help\n\n"
        "Available Commands:\n"
        "• /start - Welcome message\n"
        "• /help - Show this help message\n"
        "• /pass or /password - Generate a secure password\n\n"
        "Password Generation Syntax:\n"
        "/pass [length] [options]\n\n"
        "Examples:\n"
        f"• /pass - Default password (length: {default_length})\n"
        "• /pass 24 - 24-character password\n"
        "• /pass 16 --no-symbols - No symbols\n"
        "• /pass 18 --no-ambiguous - Exclude ambiguous chars (0,O,o,1,l,I)\n"
        "• /pass 20 --no-digits --symbols - No digits, with symbols\n\n"
        "Available Options:\n"
        "• --symbols / --no-symbols\n"
        "• --digits / --no-digits\n"
        "• --uppercase / --no-uppercase\n"
        "• --lowercase / --no-lowercase\n"
        "• --no-ambiguous - Exclude confusing characters\n"
        "When an option and its negation are both given, the last one wins.\n\n"
        "Shortcuts:\n"
        "• /pass_default - Default password\n"
        "• /pass_24 - Strong (24 characters)\n"
        "• /pass_32 - Very strong (32 characters)\n"
        "• /pass_no_symbols - 16 characters, no symbols\n"
        "• /pass_no_ambiguous - 18 characters, no ambiguous chars\n\n"
        "Constraints:\n"
        f"• Min length: {min_length} characters\n"
        f"• Max length: {max_length} characters\n"
        "• At least one character type must be enabled\n"
        f"• Rate limit: {rate_limit} passwords per minute\n\n"
        "Security Recommendations:\n"
        "✅ Use long passwords (16+ characters)\n"
        "✅ Use unique passwords for each account\n"
        "✅ Store passwords in a secure password manager\n"
    )
