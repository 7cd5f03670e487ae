"""Expand links to line ranges on git hosts into inline code blocks."""

from __future__ import annotations

import re
import urllib.error
import urllib.request
from collections.abc import Callable
from dataclasses import dataclass

from .config import DEFAULT_USER_AGENT

MAX_CONTENT_LENGTH = 1950
_FETCH_TIMEOUT = 10.0

_CODE_LINK_RE = re.compile(
    r"https?://(?P<host>(git.*|codeberg\.org))/(?P<repo>[\w-]+/[\w.-]+)/"
    r"(blob|(src/(commit|branch)))?/(?P<reference>\S+?)/(?P<file>\S+)"
    r"#L(?P<start>\d+)(?:[~-]L?(?P<end>\d+)?)?"
)


def remove_query_string(value: str) -> str:
    """Drop everything from the first ``?`` on."""
    return value.split("?", 1)[0]


@dataclass(frozen=True)
class CodeReference:
    """A link to a range of lines in a file on a git host."""

    host: str
    repo: str
    reference: str
    file: str
    start: int
    end: int

    def raw_url(self) -> str:
        """URL of the raw file contents."""
        if self.host == "github.com":
            return f"https://raw.githubusercontent.com/{self.repo}/{self.reference}/{self.file}"
        kind = "commit" if len(self.reference.encode()) == 40 else "branch"
        return f"https://{self.host}/{self.repo}/raw/{kind}/{self.reference}/{self.file}"

    def language(self) -> str:
        """Code block language derived from the file extension."""
        return remove_query_string(self.file.split(".")[-1]).lower()


def find_code_references(message: str) -> list[CodeReference]:
    """Return every line-range link found in ``message``."""
    references = []
    for match in _CODE_LINK_RE.finditer(message):
        start = int(match["start"])
        end = int(match["end"]) if match["end"] is not None else start
        references.append(
            CodeReference(
                host=match["host"],
                repo=match["repo"],
                reference=match["reference"],
                file=match["file"],
                start=start,
                end=end,
            )
        )
    return references


def _lines(text: str) -> list[str]:
    if not text:
        return []
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


def select_lines(text: str, start: int, end: int) -> str:
    """Return lines ``start`` to ``end`` (1-based, inclusive) joined by newlines."""
    if start < 1:
        raise ValueError("line numbers start at 1")
    if end < start:
        raise ValueError("end line comes before start line")
    return "\n".join(_lines(text)[start - 1 : end])


def format_code_block(language: str, content: str) -> str:
    """Wrap ``content`` in a fenced block, truncating very long content."""
    if len(content.encode()) > MAX_CONTENT_LENGTH:
        truncated = "\n".join(_lines(content)[:MAX_CONTENT_LENGTH])
        return f"```{language}\n{truncated}\n```\n... (lines not displayed)"
    return f"```{language}\n{content}\n```"


def fetch_text(url: str) -> str:
    """Download ``url`` and return its body as text."""
    request = urllib.request.Request(url, headers={"User-Agent": DEFAULT_USER_AGENT})
    try:
        with urllib.request.urlopen(request, timeout=_FETCH_TIMEOUT) as response:
            if not 200 <= response.status < 300:
                raise OSError(f"Failed to fetch content from {url}")
            body = response.read()
    except urllib.error.URLError as exc:
        raise OSError(f"Failed to fetch content from {url}") from exc
    return body.decode("utf-8", errors="replace")


def expand_code_links(
    message: str, fetch: Callable[[str], str] = fetch_text
) -> list[str]:
    """Return a code block for every link in ``message`` that could be fetched."""
    blocks = []
    for ref in find_code_references(message):
        try:
            text = fetch(ref.raw_url())
            content = select_lines(text, ref.start, ref.end)
        except (OSError, ValueError):
            continue
        blocks.append(format_code_block(ref.language(), content))
    return blocks