#!/usr/bin/env python3
# ══════════════════════════════════════════════════════════════════════════════
#  Lost Family Bot - Clash of Clans Client
#  Copyright (c) 2025 SIRIUS Alpha
# ══════════════════════════════════════════════════════════════════════════════
"""
Thin client for the official Clash of Clans REST API.

All calls are blocking (requests); the bot runs them with asyncio.to_thread.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.clashofclans.com/v1"

PLAYER_ERROR = "Error fetching player data. Check the tag or API status."
CLAN_ERROR = "Error fetching clan data. Check the tag or API status."
LEADERBOARD_ERROR = "Error fetching global leaderboard."
WAR_ERROR = "Error fetching war data. Check the clan tag or API status."
MEMBERS_ERROR = "Error fetching clan members. Check the clan tag or API status."


class CocApiError(Exception):
    """Raised when a Clash of Clans lookup fails.

    The message is safe to show to users.
    """

    provider = "coc"

    def __init__(self, message: str, status: Optional[int] = None, reason: str = ""):
        super().__init__(message)
        self.status = status
        self.reason = reason


def normalize_tag(tag: str) -> str:
    """Return `tag` upper-cased without '#', e.g. ' #2pp ' -> '2PP'."""
    return tag.strip().replace("#", "").upper()


def encode_tag(tag: str) -> str:
    """URL path segment for a tag: '#2PP' -> '%232PP'."""
    return quote("#" + normalize_tag(tag), safe="")


class CocClient:
    """
    Clash of Clans API client.

    One `requests.Session` is kept for connection reuse.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session

    @classmethod
    def from_config(cls, config) -> "CocClient":
        """Build a client from a `Config`."""
        return cls(
            api_key=config.coc.api_key,
            base_url=config.coc.base_url,
            timeout=config.coc.timeout,
        )

    def _get_session(self) -> requests.Session:
        """Get or create HTTP session."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(
                {
                    "Accept": "application/json",
                    "Authorization": f"Bearer {self.api_key}",
                }
            )
        return self._session

    def close(self) -> None:
        """Close the HTTP session."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def _get(self, path: str, error_message: str) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self._get_session().get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.warning(f"CoC API {path} returned {status}")
            raise CocApiError(error_message, status=status, reason=str(e)) from e
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"CoC API {path} failed: {e}")
            raise CocApiError(error_message, reason=str(e)) from e

    def get_player(self, tag: str) -> Dict[str, Any]:
        """Player profile for `tag`."""
        return self._get(f"players/{encode_tag(tag)}", PLAYER_ERROR)

    def get_clan(self, tag: str) -> Dict[str, Any]:
        """Clan profile for `tag`."""
        return self._get(f"clans/{encode_tag(tag)}", CLAN_ERROR)

    def get_current_war(self, tag: str) -> Dict[str, Any]:
        """Current war of the clan `tag`."""
        return self._get(f"clans/{encode_tag(tag)}/currentwar", WAR_ERROR)

    def get_top_clans(self, limit: int = 5) -> List[Dict[str, Any]]:
        """Top `limit` clans of the global ranking."""
        data = self._get("locations/global/rankings/clans", LEADERBOARD_ERROR)
        return list(data.get("items", []))[:limit]

    def get_clan_members(self, tag: str) -> List[Dict[str, Any]]:
        """Member list of the clan `tag` (empty if the clan has none)."""
        data = self._get(f"clans/{encode_tag(tag)}", MEMBERS_ERROR)
        return list(data.get("memberList") or [])

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __repr__(self) -> str:
        return f"<CocClient base_url={self.base_url!r}>"
