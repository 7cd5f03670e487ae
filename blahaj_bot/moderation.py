"""Checks and helpers shared by the ban, kick and timeout commands."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone

MAX_TIMEOUT_SECONDS = 2419200
NO_REASON = "No reason provided."
INVALID_DURATION = "Invalid duration! (Valid durations: 5s, 2m, 12h, 3d, 2w)"
DURATION_TOO_LONG = "Duration too long! (Max duration: 28d)"

_DURATION_RE = re.compile(r"(\d+)([smhdw])")
_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400, "w": 604800}
_U64_MAX = 2**64 - 1


class ModerationError(Exception):
    """A moderation request that cannot be carried out; the message is user-facing."""


@dataclass(frozen=True)
class Role:
    """A guild role; roles rank by position, then by id."""

    id: int
    position: int
    name: str = ""


def _rank(role: Role | None) -> tuple[int, ...]:
    return (0,) if role is None else (1, role.position, role.id)


def highest_role(role_ids: Iterable[int], guild_roles: Mapping[int, Role]) -> Role | None:
    """Return the known role of highest position, or None if there is none."""
    best: Role | None = None
    for role_id in role_ids:
        role = guild_roles.get(role_id)
        if role is not None and (best is None or role.position >= best.position):
            best = role
    return best


def hierarchy_refusal(
    author_top: Role | None, user_top: Role | None, bot_top: Role | None
) -> str | None:
    """Return why the target outranks the author or the bot, or None if it doesn't."""
    target = _rank(user_top)
    if _rank(author_top) < target:
        return "User has higher role then you."
    if _rank(bot_top) < target:
        return "User has higher role then bot!"
    return None


def missing_permission_message(permission: str) -> str:
    """Reply used when the bot lacks ``permission``."""
    return f"Bot missing permission: ``{permission}``"


def default_reason(reason: str | None) -> str:
    """Return ``reason``, or the stock text when none was given."""
    return NO_REASON if reason is None else reason


def parse_duration(text: str) -> int | None:
    """Parse the first ``<number><s|m|h|d|w>`` in ``text`` into seconds."""
    match = _DURATION_RE.search(text)
    if match is None:
        return None
    value = int(match[1])
    if value > _U64_MAX:
        return None
    return value * _UNIT_SECONDS[match[2]]


def check_timeout_duration(duration: str) -> int:
    """Return the timeout length in seconds, raising ModerationError if unusable."""
    seconds = parse_duration(duration)
    if seconds is None:
        raise ModerationError(INVALID_DURATION)
    if seconds > MAX_TIMEOUT_SECONDS:
        raise ModerationError(DURATION_TOO_LONG)
    return seconds


def timeout_until(seconds: int, now: datetime | None = None) -> datetime:
    """Moment, to the whole second, at which a timeout of ``seconds`` ends."""
    current = datetime.now(timezone.utc) if now is None else now
    try:
        return datetime.fromtimestamp(int(current.timestamp()) + seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise ModerationError("Timestamp out of range") from exc