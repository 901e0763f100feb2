"""
CLI interface for passgen.
"""

import logging
import sys
import threading
import time
from typing import Callable, Optional

import click
import pyperclip

from .config import (
    Config,
    DEFAULT_PASSWORD_LENGTH,
    MAX_PASSWORD_LENGTH,
    MIN_PASSWORD_LENGTH,
    RATE_LIMIT_PER_MINUTE,
)
from .exceptions import ConfigurationError, PasswordGenerationError
from .service import PasswordService
from .utils.commands import format_metadata
from .utils.password_generator import GenerationOptions, build_pool
from .utils.strength import estimate_strength

CLIPBOARD_CLEAR_SECONDS = 60


def password_options(func: Callable) -> Callable:
    """Attach the character-category options shared by generate and estimate."""
    options = [
        click.argument("length", type=int, required=False),
        click.option("--lowercase/--no-lowercase", default=True, help="Include lowercase letters"),
        click.option("--uppercase/--no-uppercase", default=True, help="Include uppercase letters"),
        click.option("--digits/--no-digits", default=True, help="Include digits"),
        click.option("--symbols/--no-symbols", default=True, help="Include symbols"),
        click.option("--no-ambiguous", is_flag=True, help="Exclude ambiguous characters (0, O, o, 1, l, I)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_options(service: PasswordService, length: Optional[int], lowercase: bool,
                  uppercase: bool, digits: bool, symbols: bool,
                  no_ambiguous: bool) -> GenerationOptions:
    return GenerationOptions(
        length=service.config.default_password_length if length is None else length,
        include_lowercase=lowercase,
        include_uppercase=uppercase,
        include_digits=digits,
        include_symbols=symbols,
        exclude_ambiguous=no_ambiguous,
    )


def copy_to_clipboard(value: str) -> None:
    """Copy value to the clipboard and clear it again after a minute."""
    pyperclip.copy(value)

    def clear_clipboard() -> None:
        time.sleep(CLIPBOARD_CLEAR_SECONDS)
        try:
            pyperclip.copy("")
        except pyperclip.PyperclipException:
            # User may have closed the session; nothing left to clear
            pass

    clear_thread = threading.Thread(target=clear_clipboard, daemon=True)
    clear_thread.start()


@click.group()
@click.option(
    "--default-length",
    type=int,
    default=DEFAULT_PASSWORD_LENGTH,
    envvar="DEFAULT_PASSWORD_LENGTH",
    show_default=True,
    help="Password length when none is given",
)
@click.option(
    "--min-length",
    type=int,
    default=MIN_PASSWORD_LENGTH,
    envvar="MIN_PASSWORD_LENGTH",
    show_default=True,
    help="Minimum allowed password length",
)
@click.option(
    "--max-length",
    type=int,
    default=MAX_PASSWORD_LENGTH,
    envvar="MAX_PASSWORD_LENGTH",
    show_default=True,
    help="Maximum allowed password length",
)
@click.option(
    "--rate-limit",
    type=int,
    default=RATE_LIMIT_PER_MINUTE,
    envvar="RATE_LIMIT_PER_MINUTE",
    show_default=True,
    help="Password requests per client per minute",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default="warning",
    envvar="PASSGEN_LOG_LEVEL",
    show_default=True,
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx: click.Context, default_length: int, min_length: int, max_length: int,
        rate_limit: int, log_level: str) -> None:
    """passgen - Secure password generator."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, log_level.upper()),
    )

    try:
        config = Config(
            default_password_length=default_length,
            min_password_length=min_length,
            max_password_length=max_length,
            rate_limit_per_minute=rate_limit,
        )
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    ctx.obj = PasswordService(config)


@cli.command()
@password_options
@click.option("--count", "-n", default=1, type=click.IntRange(1, 20), help="Number of passwords (1-20, default: 1)")
@click.option("--copy", "-c", is_flag=True, help="Copy the password to the clipboard instead of printing it")
@click.pass_obj
def generate(service: PasswordService, length: Optional[int], lowercase: bool,
             uppercase: bool, digits: bool, symbols: bool, no_ambiguous: bool,
             count: int, copy: bool) -> None:
    """Generate secure passwords."""
    if copy and count > 1:
        click.echo("Error: --copy works with a single password", err=True)
        sys.exit(1)

    options = build_options(service, length, lowercase, uppercase, digits,
                            symbols, no_ambiguous)

    try:
        results = [service.generate_password(options) for _ in range(count)]
    except PasswordGenerationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    report = results[0][1]
    metadata = format_metadata(options, report)

    if copy:
        try:
            copy_to_clipboard(results[0][0])
        except pyperclip.PyperclipException as e:
            click.echo(f"Could not copy to clipboard: {e}", err=True)
            click.echo(results[0][0])
        else:
            click.echo(f"🔐 Password copied to clipboard (cleared after {CLIPBOARD_CLEAR_SECONDS}s).")
    else:
        for password, _ in results:
            click.echo(password)

    click.echo(metadata, err=True)


@cli.command()
@password_options
@click.pass_obj
def estimate(service: PasswordService, length: Optional[int], lowercase: bool,
             uppercase: bool, digits: bool, symbols: bool, no_ambiguous: bool) -> None:
    """Show entropy and strength for options without generating."""
    options = build_options(service, length, lowercase, uppercase, digits,
                            symbols, no_ambiguous)

    try:
        options.validate_length(service.config.min_password_length,
                                service.config.max_password_length)
        pool = build_pool(options)
        pool.check_length(options.length)
    except PasswordGenerationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    report = estimate_strength(pool.size, options.length)
    click.echo(format_metadata(options, report, pool.size))


@cli.command()
@click.option("--client", default="local", show_default=True, help="Client id for lines without an @client prefix")
@click.pass_obj
def shell(service: PasswordService, client: str) -> None:
    """Answer chat-style commands (/start, /help, /pass) read from stdin.

    Prefix a line with @name to send it as another client, e.g.
    "@alice /pass 20 --no-symbols". Each client is rate limited separately.
    """
    stdin = click.get_text_stream("stdin")

    for line in stdin:
        line = line.strip()
        if not line:
            continue

        client_id = client
        if line.startswith("@"):
            client_id, _, line = line[1:].partition(" ")
            line = line.strip()

        click.echo(service.handle_command(client_id, line))
        click.echo()


@cli.command()
@click.pass_obj
def info(service: PasswordService) -> None:
    """Show active configuration."""
    config = service.config

    click.echo("passgen configuration:")
    click.echo(f"  Default length: {config.default_password_length}")
    click.echo(f"  Length range: {config.min_password_length}-{config.max_password_length}")
    click.echo(f"  Rate limit: {config.rate_limit_per_minute} requests per minute per client")


def main() -> None:
    """Main entry point for the CLI application."""
    cli()


if __name__ == "__main__":
    main()
