"""Rewrite social-media links to their embed-friendly mirrors."""

from __future__ import annotations

import re

_LINK_RE = re.compile(
    r"(https?://(?:(www|vm)\.)?"
    r"(x\.com|twitter\.com|reddit\.com|instagram\.com|tiktok\.com|bsky\.app)/[^\s]+)"
)

_REPLACEMENTS = (
    ("https://x.com", "https://fxtwitter.com"),
    ("https://twitter.com", "https://fxtwitter.com"),
    ("https://www.reddit.com", "https://rxddit.com"),
    ("https://reddit.com", "https://rxddit.com"),
    ("https://www.instagram.com", "https://ddinstagram.com"),
    ("https://instagram.com", "https://ddinstagram.com"),
    ("https://www.tiktok.com", "https://tfxktok.com"),
    ("https://vm.tiktok.com", "https://vm.vxtiktok.com"),
    ("https://tiktok.com", "https://tfxktok.com"),
    ("https://bsky.app", "https://fxbsky.app"),
)


def find_links(content: str) -> list[str]:
    """Return every supported social-media link in ``content``, in order."""
    return [match.group(0) for match in _LINK_RE.finditer(content)]


def rewrite_link(url: str) -> str:
    """Point ``url`` at its mirror host."""
    for old, new in _REPLACEMENTS:
        url = url.replace(old, new)
    return url


def rewrite_links(content: str) -> list[str]:
    """Find the links in ``content`` and return their rewritten forms."""
    return [rewrite_link(url) for url in find_links(content)]