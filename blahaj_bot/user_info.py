"""Replies for the bot info, ping, avatar and whois commands."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from .embeds import Embed

BOT_ID = "1087418361283092510"
INFO_COLOR = 0x00FFFFFF

_YEAR = 31_557_600
_MONTH = 2_630_016
_DAY = 86_400


def _format_duration(duration: timedelta) -> str:
    total_us = (duration.days * _DAY + duration.seconds) * 1_000_000 + duration.microseconds
    if total_us < 0:
        raise ValueError("duration must not be negative")
    secs, micros = divmod(total_us, 1_000_000)
    nanos = micros * 1000
    if secs == 0 and nanos == 0:
        return "0s"
    years, rest = divmod(secs, _YEAR)
    months, rest = divmod(rest, _MONTH)
    days, rest = divmod(rest, _DAY)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    millis, rest = divmod(nanos, 1_000_000)
    micro, nano = divmod(rest, 1000)
    units = (
        (years, "year", True),
        (months, "month", True),
        (days, "day", True),
        (hours, "h", False),
        (minutes, "m", False),
        (seconds, "s", False),
        (millis, "ms", False),
        (micro, "us", False),
        (nano, "ns", False),
    )
    return " ".join(
        f"{value}{name}{'s' if plural and value > 1 else ''}"
        for value, name, plural in units
        if value
    )


def botinfo_embed(
    name: str,
    face_url: str,
    created_at: datetime,
    rev: str | None = None,
) -> Embed:
    """Embed describing the bot itself."""
    embed = Embed(
        title="Bot Info",
        author_name=name,
        author_icon_url=face_url,
        thumbnail=face_url,
        color=INFO_COLOR,
    )
    embed.add_field("Git rev", "unknown" if rev is None else rev, False)
    embed.add_field("Bot ID", BOT_ID, False)
    embed.add_field("Created at", created_at.isoformat(), False)
    return embed


def ping_message(latency: timedelta) -> str:
    """Reply to the ping command."""
    return f"Pong! `{_format_duration(latency)}`"


def avatar_message(avatar_url: str | None) -> str:
    """Reply to the avatar command."""
    if avatar_url is None:
        raise ValueError("Could not get avatar URL")
    return avatar_url


def whois_embed(
    user_id: int,
    name: str,
    avatar_url: str | None,
    created_at: datetime,
    joined_at: datetime,
    roles: Iterable[str],
    is_bot: bool,
) -> Embed:
    """Embed describing a guild member."""
    if avatar_url is None:
        raise ValueError("avatar failed")
    embed = Embed(title=name, thumbnail=avatar_url, color=INFO_COLOR)
    embed.add_field("ID", str(user_id), False)
    embed.add_field("Username", name, False)
    embed.add_field("Created at", f"<t:{int(created_at.timestamp())}:R>", False)
    embed.add_field("Joined at", f"<t:{int(joined_at.timestamp())}:R>", False)
    embed.add_field("Roles", ", ".join(roles), False)
    embed.add_field("Bot", "true" if is_bot else "false", False)
    return embed