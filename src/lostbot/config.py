#!/usr/bin/env python3
# ══════════════════════════════════════════════════════════════════════════════
#  Lost Family Bot - Configuration Module
#  Copyright (c) 2025 SIRIUS Alpha
# ══════════════════════════════════════════════════════════════════════════════
"""
Configuration management for the Lost Family Bot.

Loads settings from environment variables (and a project-level .env file)
with sensible defaults.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv


def _get_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent
    # Walk up until we find pyproject.toml
    for _ in range(10):
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent
    # Fallback to 2 levels up from src/lostbot
    return Path(__file__).resolve().parent.parent.parent


def _load_dotenv() -> None:
    """Load .env file from the project root if present."""
    env_path = _get_project_root() / ".env"
    if env_path.exists():
        load_dotenv(env_path)


# Load environment on module import
_load_dotenv()


def _env(key: str, default: str = "") -> str:
    """Get environment variable with default."""
    return os.environ.get(key, default)


def _env_int(key: str, default: int) -> int:
    """Get integer environment variable."""
    try:
        return int(os.environ.get(key, str(default)))
    except ValueError:
        return default


def _env_float(key: str, default: float) -> float:
    """Get float environment variable."""
    try:
        return float(os.environ.get(key, str(default)))
    except ValueError:
        return default


def _env_bool(key: str, default: bool = False) -> bool:
    """Get boolean environment variable."""
    val = os.environ.get(key, "").lower()
    if val in ("1", "true", "yes", "on"):
        return True
    if val in ("0", "false", "no", "off"):
        return False
    return default


def _env_path(key: str, default: Path) -> Path:
    """Get path environment variable."""
    val = os.environ.get(key, "")
    if val:
        path = Path(val).expanduser()
        return path if path.is_absolute() else _get_project_root() / path
    return default


def _env_id(key: str) -> Optional[int]:
    """Get a Discord snowflake; 0 or unset means not configured."""
    return _env_int(key, 0) or None


@dataclass
class DiscordConfig:
    """Discord bot configuration."""

    token: str = field(default_factory=lambda: _env("DISCORD_TOKEN", ""))
    guild_id: Optional[int] = field(default_factory=lambda: _env_id("DISCORD_GUILD_ID"))
    tickets_channel_id: Optional[int] = field(default_factory=lambda: _env_id("TICKETS_CHANNEL_ID"))
    global_channel_id: Optional[int] = field(default_factory=lambda: _env_id("GLOBAL_CHANNEL_ID"))
    enable_message_content: bool = field(default_factory=lambda: _env_bool("DISCORD_ENABLE_MESSAGE_CONTENT", False))

    @property
    def is_configured(self) -> bool:
        """Check if Discord is properly configured."""
        return bool(self.token)

    @property
    def tickets_mention(self) -> str:
        """Channel mention for the tickets channel, or a plain fallback."""
        if self.tickets_channel_id:
            return f"<#{self.tickets_channel_id}>"
        return "the tickets channel"


@dataclass
class CocConfig:
    """Clash of Clans API configuration."""

    api_key: str = field(default_factory=lambda: _env("COC_API_KEY", ""))
    base_url: str = field(default_factory=lambda: _env("COC_BASE_URL", "https://api.clashofclans.com/v1"))
    timeout: float = field(default_factory=lambda: _env_float("COC_TIMEOUT", 10.0))


@dataclass
class LLMConfig:
    """Chat completion provider configuration."""

    api_key: str = field(default_factory=lambda: _env("OPENAI_API_KEY", ""))
    model: str = field(default_factory=lambda: _env("OPENAI_MODEL", "gpt-4o"))
    timeout: float = field(default_factory=lambda: _env_float("OPENAI_TIMEOUT", 60.0))

    # Generation settings
    max_tokens: int = field(default_factory=lambda: _env_int("LLM_MAX_TOKENS", 800))
    temperature: float = field(default_factory=lambda: _env_float("LLM_TEMPERATURE", 0.8))


@dataclass
class AnnounceConfig:
    """Daily clan application announcement."""

    enabled: bool = field(default_factory=lambda: _env_bool("ANNOUNCE_ENABLED", True))
    timezone: str = field(default_factory=lambda: _env("ANNOUNCE_TIMEZONE", "Europe/London"))
    hour: int = field(default_factory=lambda: _env_int("ANNOUNCE_HOUR", 16))
    minute: int = field(default_factory=lambda: _env_int("ANNOUNCE_MINUTE", 0))


@dataclass
class WebConfig:
    """Keep-alive HTTP endpoint."""

    enabled: bool = field(default_factory=lambda: _env_bool("KEEPALIVE_ENABLED", True))
    host: str = field(default_factory=lambda: _env("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: _env_int("PORT", 3000))


@dataclass
class Config:
    """
    Master configuration for the Lost Family Bot.

    Aggregates all sub-configurations and provides utility methods.
    """

    discord: DiscordConfig = field(default_factory=DiscordConfig)
    coc: CocConfig = field(default_factory=CocConfig)
    llm: LLMConfig = field(default_factory=LLMConfig)
    announce: AnnounceConfig = field(default_factory=AnnounceConfig)
    web: WebConfig = field(default_factory=WebConfig)

    log_file: Path = field(
        default_factory=lambda: _env_path("LOSTBOT_LOG_FILE", _get_project_root() / "logs" / "lostbot.log")
    )

    # Runtime flags
    debug: bool = field(default_factory=lambda: _env_bool("DEBUG", False))

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of issues.

        Returns:
            List of validation error messages (empty if valid)
        """
        issues = []

        if not self.discord.token:
            issues.append("Discord token not set\n  Set DISCORD_TOKEN in .env or environment")

        if not self.coc.api_key:
            issues.append("Clash of Clans API key not set\n  Set COC_API_KEY (clan/player commands will fail)")

        if not self.llm.api_key:
            issues.append("OpenAI API key not set\n  Set OPENAI_API_KEY (/ask and /roast will fail)")

        if self.announce.enabled:
            if not (0 <= self.announce.hour <= 23 and 0 <= self.announce.minute <= 59):
                issues.append(
                    f"Invalid announcement time: {self.announce.hour:02d}:{self.announce.minute:02d}"
                )
            try:
                ZoneInfo(self.announce.timezone)
            except (ZoneInfoNotFoundError, ValueError):
                issues.append(f"Unknown announcement timezone: {self.announce.timezone}")

        return issues

    def notices(self) -> list[str]:
        """Optional features that are switched off by the current settings."""
        notices = []
        if self.announce.enabled and not self.discord.global_channel_id:
            notices.append("GLOBAL_CHANNEL_ID not set; daily announcement will be skipped")
        if not self.discord.tickets_channel_id:
            notices.append("TICKETS_CHANNEL_ID not set; /clans will not link the tickets channel")
        return notices

    def summary(self) -> str:
        """Generate human-readable configuration summary."""

        def _secret(value: str) -> str:
            return "set" if value else "MISSING"

        lines = [
            "═" * 60,
            "  LOST FAMILY BOT CONFIGURATION",
            "═" * 60,
            "",
            "Discord:",
            f"  Token: {_secret(self.discord.token)}",
            f"  Guild: {self.discord.guild_id or 'global sync'}",
            f"  Tickets Channel: {self.discord.tickets_channel_id or 'None'}",
            f"  Global Channel: {self.discord.global_channel_id or 'None'}",
            "",
            "Clash of Clans:",
            f"  API Key: {_secret(self.coc.api_key)}",
            f"  Base URL: {self.coc.base_url}",
            "",
            "LLM:",
            f"  API Key: {_secret(self.llm.api_key)}",
            f"  Model: {self.llm.model}",
            "",
            "Announcement:",
            f"  Enabled: {self.announce.enabled}",
            f"  Time: {self.announce.hour:02d}:{self.announce.minute:02d} {self.announce.timezone}",
            "",
            "Keep-alive:",
            f"  Enabled: {self.web.enabled}",
            f"  Listen: {self.web.host}:{self.web.port}",
            "",
            "Flags:",
            f"  Debug: {self.debug}",
            f"  Log File: {self.log_file}",
            "",
            "═" * 60,
        ]

        return "\n".join(lines)


# Singleton config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
