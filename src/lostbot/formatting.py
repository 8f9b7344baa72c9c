"""Plain-text reply formatting for Clash of Clans lookups.

Inputs are the raw JSON dicts returned by the Clash of Clans API.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List

DISCORD_MESSAGE_LIMIT = 2000


def truncate(text: str, limit: int = DISCORD_MESSAGE_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def error_line(message: str) -> str:
    return f"❌ {message}"


def format_player(data: Dict[str, Any]) -> str:
    clan = (data.get("clan") or {}).get("name") or "No Clan"
    return (
        f"🏆 **Player Name:** {data.get('name', '?')}\n"
        f"🏰 **Town Hall:** {data.get('townHallLevel', '?')}\n"
        f"⭐ **Trophies:** {data.get('trophies', '?')}\n"
        f"⚔️ **War Stars:** {data.get('warStars', '?')}\n"
        f"🎖️ **Clan:** {clan}\n"
        f"🛠️ **XP:** {data.get('expLevel', '?')}"
    )


def format_clan(data: Dict[str, Any]) -> str:
    return (
        f"🏰 **Clan Name:** {data.get('name', '?')}\n"
        f"🏆 **Level:** {data.get('clanLevel', '?')}\n"
        f"🎖️ **Points:** {data.get('clanPoints', '?')}\n"
        f"🔥 **Streak:** {data.get('warWinStreak', '?')}\n"
        f"⚔️ **Wins:** {data.get('warWins', '?')}"
    )


def format_leaderboard(clans: Iterable[Dict[str, Any]]) -> str:
    lines = [f"{i}. **{clan.get('name', '?')}** - {clan.get('clanPoints', 0)} pts" for i, clan in enumerate(clans, 1)]
    if not lines:
        return "🏆 **Top Clans:**\nNo ranking data available."
    return "🏆 **Top Clans:**\n" + "\n".join(lines)


def format_war(data: Dict[str, Any]) -> str:
    # Clans outside a war come back with state "notInWar" and no opponent
    opponent = (data.get("opponent") or {}).get("name") or "Unknown"
    return f"📅 **Status:** {data.get('state', 'unknown')}\n🛡️ **Opponent:** {opponent}"


def format_member_line(position: int, member: Dict[str, Any]) -> str:
    return (
        f"{position}. **{member.get('name', '?')}** - {member.get('role', '?')} - "
        f"TH{member.get('townHallLevel', '?')} - Trophies: {member.get('trophies', 0)}"
    )


def format_member_lines(members: List[Dict[str, Any]], start: int) -> str:
    """Numbered member lines, numbering from `start + 1`."""
    return "\n".join(format_member_line(start + i + 1, m) for i, m in enumerate(members))
