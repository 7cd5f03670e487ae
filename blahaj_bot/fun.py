"""Bottom translation, dice rolls and nix memes."""

from __future__ import annotations

import random
from collections.abc import Iterator

SEPARATOR = "👉👈"
TOPIFY_CHUNK = 1994
DECODE_FAILED = "I couldn't decode that message."
MEME_BASE_URL = (
    "https://raw.githubusercontent.com/gytis-ivaskevicius/"
    "high-quality-nix-content/master/memes"
)

# File names of the meme collection, in catalogue order.
MEMES: tuple[str, ...] = tuple(
    """
    the-declarative-trinity.webp my-nixos-setup.png before-and-after-nix.png
    hard-to-swallow-pills.png i-hate-docker.webp just-try-the-goddam-nix.webp
    nix-learning-curve.png nix-vs-gentoo.png nixos-deploy.png no-going-back.png
    random-repos.png whats-the-difference.webp nixos-dominos.png
    nix-path-supports-urls.jpg virtualbox-starts-compiling.jpg stop-using-nixos.webp
    config-not-entierly-declarative.png debian-and-arch-bad.png do-not-get-mad.png
    eelco-nixpill.png eelco-prism.apng fleyks.png mobile-nixos.png who-would-win.png
    nixos-shilling.png techy-kid.png nix-vs-fhs.png quick-install-nixos.webp
    homer-nix-bush.gif superiority-complex.png nix-programming-socks.png
    pinnacle-of-system-configuration.png thank-you-for-changing-my-life.png
    virgin-arch-vs-chad-nixos.png heaviest-objects-in-the-universe.png
    nagatoro-nix-pervert.png nix-20min-adventure.png nixenv-vs-nixshell.png
    org-vs-com.png hermetic-tooling.jpg nixos-at-home.jpg aarch64-joke.jpg
    dark-secret-nixpkgs.png electron.jpg pr-open.jpg stay-on-freenode.jpg
    they-dont-know-im-reproducible.png nix-god.jpg flake-magic.png
    averagenixfan.png legend-of-nixos.png
    """.split()
)

_ZERO_SYMBOL = "❤️"
_WEIGHTS = (("🫂", 200), ("💖", 50), ("✨", 10), ("🥺", 5), (",", 1))


class BottomDecodeError(ValueError):
    """Raised when text is not valid bottom encoding."""


def _encode_byte(value: int) -> str:
    if value == 0:
        return _ZERO_SYMBOL
    parts = []
    for symbol, weight in _WEIGHTS:
        count, value = divmod(value, weight)
        parts.append(symbol * count)
    return "".join(parts)


_ENCODE_TABLE = tuple(_encode_byte(value) + SEPARATOR for value in range(256))
_DECODE_TABLE = {_encode_byte(value): value for value in range(256)}


def bottom_encode(text: str) -> str:
    """Encode the UTF-8 bytes of ``text`` in bottom."""
    return "".join(_ENCODE_TABLE[byte] for byte in text.encode("utf-8"))


def bottom_decode(text: str) -> str:
    """Decode bottom-encoded ``text``; raise BottomDecodeError if it is not valid."""
    body = text
    while body.endswith(SEPARATOR):
        body = body[: -len(SEPARATOR)]
    try:
        data = bytes(_DECODE_TABLE[group] for group in body.split(SEPARATOR))
    except KeyError as exc:
        raise BottomDecodeError(f"cannot decode group {exc.args[0]!r}") from None
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise BottomDecodeError("decoded bytes are not valid UTF-8") from exc


def bottomify_message(text: str) -> str:
    """Reply for the bottomify command."""
    return f"```{bottom_encode(text)}```"


def _chunks(text: str, limit: int) -> Iterator[str]:
    data = text.encode("utf-8")
    start = 0
    while start < len(data):
        end = min(start + limit, len(data))
        # never split a multi-byte character
        while end < len(data) and data[end] & 0xC0 == 0x80:
            end -= 1
        yield data[start:end].decode("utf-8")
        start = end


def topify_messages(text: str) -> list[str]:
    """Replies for the topify command: the decoded text in fenced chunks."""
    try:
        decoded = bottom_decode(text)
    except BottomDecodeError:
        return [DECODE_FAILED]
    return [f"```{chunk}```" for chunk in _chunks(decoded, TOPIFY_CHUNK)]


def roll(sides: int | None = None, rng: random.Random | None = None) -> str:
    """Roll a die with ``sides`` sides (six by default) and describe the result."""
    count = 6 if sides is None else sides
    if count < 1:
        raise ValueError("a die needs at least one side")
    source = rng if rng is not None else random
    return f"You rolled a **{source.randint(1, count)}**"


def nix_meme_url(rng: random.Random | None = None) -> str:
    """URL of a randomly chosen nix meme."""
    source = rng if rng is not None else random
    return f"{MEME_BASE_URL}/{source.choice(MEMES)}"