"""Welcome new members and hand out the kitten role once pronouns are picked."""

from __future__ import annotations

from collections.abc import Iterable

GUILD_ID = 1095080242219073606
WELCOME_CHANNEL_ID = 1095084404168200302
KITTEN_ROLE_ID = 1249814690486423612

PRONOUN_ROLE_IDS = frozenset(
    {
        1095084950107209728,  # she/her
        1095085000241709217,  # he/him
        1095085169381232770,  # they/them
        1095085419265269922,  # ask for pronouns
    }
)


def is_pronouns_role(role_id: int) -> bool:
    """Whether ``role_id`` is one of the pronoun roles."""
    return role_id in PRONOUN_ROLE_IDS


def should_welcome(guild_id: int, is_bot: bool) -> bool:
    """Whether a member joining ``guild_id`` gets a welcome message."""
    return guild_id == GUILD_ID and not is_bot


def welcome_message(user_id: int) -> str:
    """Text posted in the welcome channel for a new member."""
    return (
        f"Welcome to the server, <@{user_id}>!\n"
        "Please select your roles and pronouns from onboarding to get started."
    )


def needs_kitten_role(roles: Iterable[int], is_bot: bool) -> bool:
    """Whether a member with ``roles`` should be given the kitten role."""
    if is_bot:
        return False
    role_set = set(roles)
    return KITTEN_ROLE_ID not in role_set and any(map(is_pronouns_role, role_set))