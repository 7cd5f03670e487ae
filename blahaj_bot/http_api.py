"""A tiny HTTP endpoint that lists the members of a guild as JSON."""

from __future__ import annotations

import asyncio
import inspect
import json
import re
import sys
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from urllib.parse import urlsplit  # noqa: F401  (kept for callers building URLs)

from .kitten import GUILD_ID

HOST = "127.0.0.1"
READ_LIMIT = 1024
NOT_FOUND_BODY = '{"error": "Not found. Use /members?guild_id=YOUR_GUILD_ID"}'

_U64_RE = re.compile(r"\+?[0-9]+")
_U64_MAX = 2**64 - 1


@dataclass(frozen=True)
class Member:
    """A guild member as reported by the endpoint."""

    id: int | str
    username: str
    avatar_url: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {"id": str(self.id), "username": self.username, "avatar_url": self.avatar_url}


FetchMembers = Callable[[int], "Iterable[Member] | Awaitable[Iterable[Member]]"]


def extract_guild_id(request_line: str) -> int | None:
    """Read ``guild_id`` from the query of a request line, if it is a valid id."""
    _, sep, query = request_line.partition("?")
    if not sep:
        return None
    params = {}
    for param in query.split("&"):
        parts = param.split("=")
        if len(parts) >= 2:
            params[parts[0]] = parts[1]
    value = params.get("guild_id")
    if value is None or not _U64_RE.fullmatch(value):
        return None
    number = int(value)
    return number if number <= _U64_MAX else None


def members_body(guild_id: int, members: Iterable[Member]) -> str:
    """Pretty-printed JSON listing ``members`` of ``guild_id``."""
    payload = {"guild_id": str(guild_id), "members": [m.to_dict() for m in members]}
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _response(status: str, body: str) -> bytes:
    encoded = body.encode("utf-8")
    head = (
        f"HTTP/1.1 {status}\r\n"
        "Content-Type: application/json\r\n"
        f"Content-Length: {len(encoded)}\r\n\r\n"
    )
    return head.encode("utf-8") + encoded


async def handle_request(raw: bytes, fetch_members: FetchMembers) -> bytes:
    """Answer one raw HTTP request with a full response."""
    text = raw.decode("utf-8", errors="replace")
    request_line = text.split("\n", 1)[0]
    if request_line.endswith("\r"):
        request_line = request_line[:-1]

    if not request_line.startswith("GET /members"):
        return _response("404 Not Found", NOT_FOUND_BODY)

    guild_id = extract_guild_id(request_line)
    if guild_id is None:
        guild_id = GUILD_ID
    try:
        members = fetch_members(guild_id)
        if inspect.isawaitable(members):
            members = await members
        body = members_body(guild_id, members)
    except Exception as exc:  # any failure is reported to the client
        error_body = f'{{"error": "Failed to fetch members: {exc}"}}'
        return _response("500 Internal Server Error", error_body)
    return _response("200 OK", body)


async def serve(port: int, fetch_members: FetchMembers) -> None:
    """Listen on localhost ``port`` and answer requests until cancelled."""

    async def on_client(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        try:
            raw = await reader.read(READ_LIMIT)
            writer.write(await handle_request(raw, fetch_members))
            await writer.drain()
        except Exception as exc:
            print(f"Error handling connection: {exc}", file=sys.stderr)
        finally:
            writer.close()

    server = await asyncio.start_server(on_client, HOST, port)
    print(f"HTTP server listening on http://{HOST}:{port}")
    async with server:
        await server.serve_forever()