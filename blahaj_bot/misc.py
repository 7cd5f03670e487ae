"""Crate lookups and nixpkgs pull request tracking."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from .embeds import Embed

CRATES_API_URL = "https://crates.io/api/v1"
CRATES_PUBLIC_URL = "https://lib.rs"
CRATE_COLOR = 0x00DEA586

BRANCHES = (
    "master",
    "staging",
    "nixpkgs-unstable",
    "nixos-unstable-small",
    "nixos-unstable",
)
OLD_PULL_REQUEST = "This pull request is very old. I can't track it!"


def _parse_timestamp(value: str) -> datetime:
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def _fill_crate(embed: Embed, name: str, payload: Mapping[str, Any]) -> None:
    info = payload["crate"]
    version = payload["versions"][0]
    yanked = " ❌" if version["yanked"] else ""

    categories = info["categories"]
    if categories:
        embed.add_field(
            "Categories",
            ", ".join(f"[**{c}**]({CRATES_PUBLIC_URL}/{c})" for c in categories),
            False,
        )

    homepage = info.get("homepage")
    repository = info.get("repository")
    if homepage is not None:
        embed.add_field("Homepage", homepage, True)
    elif repository is not None:
        embed.add_field("Repository", repository, True)
    else:
        embed.add_field("Homepage", "N/A", True)

    embed.description = info["description"]
    embed.timestamp = _parse_timestamp(version["updated_at"])
    license_name = version.get("license")
    embed.add_field("License", "N/A" if license_name is None else license_name, True)
    embed.footer = f"Latest Stable:{yanked} {name} {info['max_stable_version']}"

    publisher = version.get("published_by")
    if publisher is not None:
        embed.author_name = publisher["login"]
        embed.author_url = publisher["url"]
        embed.author_icon_url = publisher["avatar"]
        embed.thumbnail = publisher["avatar"]


def crate_embed(name: str, status: int, payload: Mapping[str, Any]) -> Embed:
    """Build the embed for crate ``name`` from a crates.io API response."""
    embed = Embed(
        url=f"{CRATES_PUBLIC_URL}/{name}",
        title=f"Rust Crate `{name}` Info",
        color=CRATE_COLOR,
    )
    try:
        if status == 200:
            _fill_crate(embed, name, payload)
        else:
            for item in payload["errors"]:
                embed.add_field("❌ Error", f"```{item['detail']}```", False)
    except (KeyError, IndexError, TypeError) as exc:
        raise ValueError(f"unexpected crates.io response: {exc!r}") from exc
    return embed


def nixpkgs_description(
    results: Mapping[str, bool] | Iterable[tuple[str, bool]],
) -> str:
    """One line per branch, marking whether it contains the pull request."""
    pairs = results.items() if isinstance(results, Mapping) else results
    return "".join(f"{branch}: {'✅' if merged else '❌'}\n" for branch, merged in pairs)


def nixpkgs_title(title: str, number: int) -> str:
    """Embed title for a tracked pull request."""
    return f"{title} - #{number}"