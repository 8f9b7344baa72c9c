from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Tuple

import discord
import pytest

from lostbot.config import AnnounceConfig, CocConfig, Config, DiscordConfig, LLMConfig, WebConfig


def discord_http_error(code: int, status: int = 400, message: str = "error") -> discord.HTTPException:
    """Build the exception discord.py raises for a JSON error body."""
    response = SimpleNamespace(status=status, reason="Bad Request")
    cls = discord.NotFound if status == 404 else discord.HTTPException
    return cls(response, {"code": code, "message": message})


class FakeInteraction:
    """In-memory acknowledgeable interaction that records every call."""

    def __init__(self, deferred: bool = False, replied: bool = False, error: Optional[BaseException] = None):
        self.deferred = deferred
        self.replied = replied
        self.error = error
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.user = SimpleNamespace(name="chief", guild_permissions=SimpleNamespace(administrator=False))
        self.command = None

    def _record(self, name: str, options: Dict[str, Any]) -> None:
        self.calls.append((name, dict(options)))
        if self.error is not None:
            raise self.error

    async def defer_reply(self, **options):
        self._record("defer_reply", options)
        self.deferred = True

    async def reply(self, **options):
        self._record("reply", options)
        self.replied = True
        return "reply"

    async def follow_up(self, **options):
        self._record("follow_up", options)
        return "follow_up"

    async def edit_reply(self, **options):
        self._record("edit_reply", options)
        return "edit_reply"

    @property
    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def last(self, name: str) -> Dict[str, Any]:
        for call_name, options in reversed(self.calls):
            if call_name == name:
                return options
        raise AssertionError(f"{name} was never called; calls: {self.call_names}")


@pytest.fixture
def fake_interaction() -> FakeInteraction:
    return FakeInteraction()


@pytest.fixture
def config(tmp_path) -> Config:
    return Config(
        discord=DiscordConfig(token="token", guild_id=None, tickets_channel_id=111, global_channel_id=222),
        coc=CocConfig(api_key="coc-key", base_url="https://coc.test/v1", timeout=1.0),
        llm=LLMConfig(api_key="sk-test", model="gpt-test", timeout=1.0, max_tokens=100, temperature=0.5),
        announce=AnnounceConfig(enabled=True, timezone="Europe/London", hour=16, minute=0),
        web=WebConfig(enabled=False, host="127.0.0.1", port=0),
        log_file=tmp_path / "logs" / "lostbot.log",
    )
