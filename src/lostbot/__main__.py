#!/usr/bin/env python3
# ══════════════════════════════════════════════════════════════════════════════
#  Lost Family Bot - CLI Entry Point
#  Copyright (c) 2025 SIRIUS Alpha
# ══════════════════════════════════════════════════════════════════════════════
"""
Command-line interface for the Lost Family Bot.

Features:
- Structured logging (console + rotating file)
- Configuration check
- Bot runner with keep-alive endpoint
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import click

from .config import get_config

# ══════════════════════════════════════════════════════════════════════════════
# LOGGING SETUP
# ══════════════════════════════════════════════════════════════════════════════


def setup_logging(
    verbose: bool = False,
    log_file: Optional[Path] = None,
    quiet: bool = False,
) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: Enable DEBUG level
        log_file: Path to log file
        quiet: Suppress console output
    """
    # Root logger
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Clear existing handlers
    root.handlers.clear()

    # Format
    fmt = "%(asctime)s [%(levelname)-.1s] %(name)s: %(message)s"
    datefmt = "%H:%M:%S"
    formatter = logging.Formatter(fmt, datefmt)

    # Console handler
    if not quiet:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(logging.DEBUG if verbose else logging.INFO)
        console.setFormatter(formatter)
        root.addHandler(console)

    # File handler
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,  # 5 MB
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)

        file_fmt = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
        file_handler.setFormatter(logging.Formatter(file_fmt))
        root.addHandler(file_handler)

    # discord.py gateway chatter
    logging.getLogger("discord").setLevel(logging.DEBUG if verbose else logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════════
# CONSOLE OUTPUT HELPERS
# ══════════════════════════════════════════════════════════════════════════════


class Console:
    """Simple console output with status indicators."""

    @staticmethod
    def header(text: str) -> None:
        line = "=" * 60
        click.secho(line, fg="cyan")
        click.secho(f"  {text}", fg="cyan", bold=True)
        click.secho(line, fg="cyan")

    @staticmethod
    def step(text: str) -> None:
        click.echo(f"  {click.style('->', fg='blue')} {text}")

    @staticmethod
    def success(text: str) -> None:
        click.echo(f"  {click.style('[OK]', fg='green')} {text}")

    @staticmethod
    def warning(text: str) -> None:
        click.echo(f"  {click.style('[!]', fg='yellow')} {text}")

    @staticmethod
    def error(text: str) -> None:
        click.echo(f"  {click.style('[X]', fg='red')} {text}", err=True)

    @staticmethod
    def info(text: str) -> None:
        click.echo(f"  {click.style('*', dim=True)} {text}")


# ══════════════════════════════════════════════════════════════════════════════
# CLI COMMANDS
# ══════════════════════════════════════════════════════════════════════════════


@click.group(invoke_without_command=True)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose (debug) output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress console output")
@click.option("--log-file", type=click.Path(path_type=Path), help="Path to log file")
@click.pass_context
def main(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    log_file: Optional[Path],
) -> None:
    """
    Lost Family Bot

    Discord slash commands for Clash of Clans lookups, AI chat and clan
    recruitment.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    config = get_config()
    if log_file is None:
        log_file = config.log_file

    setup_logging(verbose or config.debug, log_file, quiet)

    # If no subcommand, run default
    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@main.command()
@click.option("--no-keepalive", is_flag=True, help="Do not start the keep-alive HTTP endpoint")
def run(no_keepalive: bool = False) -> None:
    """
    Run the Discord bot (default command).

    Required: Set DISCORD_TOKEN environment variable.
    """
    from .discord import LostFamilyBot
    from .keepalive import start_from_config

    Console.header("Lost Family Bot")

    config = get_config()

    if not config.discord.token:
        Console.error("DISCORD_TOKEN environment variable not set")
        Console.info("Set your bot token in .env or environment")
        sys.exit(1)

    for issue in config.validate():
        Console.warning(issue.splitlines()[0])
    for notice in config.notices():
        Console.info(notice)

    bot = LostFamilyBot(config)

    if not no_keepalive:
        start_from_config(config, bot)

    Console.step("Starting Discord bot...")
    Console.info("Press Ctrl+C to stop")

    try:
        bot.run_forever()
    except Exception as e:
        logging.getLogger(__name__).exception("Bot crashed")
        Console.error(f"Bot crashed: {e}")
        sys.exit(1)

    Console.success("Bot stopped gracefully")


@main.command()
def check() -> None:
    """
    Check configuration and environment.

    Exits with status 1 when issues are found.
    """
    config = get_config()

    Console.header("Configuration Check")
    click.echo(config.summary())

    for notice in config.notices():
        Console.info(notice)

    issues = config.validate()
    if not issues:
        Console.success("Configuration check complete")
        return

    for issue in issues:
        Console.error(issue)
    sys.exit(1)


# ══════════════════════════════════════════════════════════════════════════════
# ENTRY POINT
# ══════════════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    main()
