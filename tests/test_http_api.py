import json

import pytest

from blahaj_bot.http_api import (
    NOT_FOUND_BODY,
    Member,
    extract_guild_id,
    handle_request,
    members_body,
)

MEMBERS = [
    Member(1, "shark", "https://cdn.example.com/1.png"),
    Member("2", "blåhaj", None),
]


def _split(response):
    head, body = response.split(b"\r\n\r\n", 1)
    lines = head.decode().split("\r\n")
    headers = dict(line.split(": ", 1) for line in lines[1:])
    return lines[0], headers, body


def test_extract_guild_id_with_following_param():
    assert extract_guild_id("GET /members?guild_id=42&x=1 HTTP/1.1") == 42


def test_extract_guild_id_trailing_version_is_not_a_number():
    assert extract_guild_id("GET /members?guild_id=42 HTTP/1.1") is None


@pytest.mark.parametrize(
    "line",
    ["GET /members HTTP/1.1", "GET /members?guild_id=abc&", "GET /members?guild_id&", "GET /members?other=5&"],
)
def test_extract_guild_id_missing(line):
    assert extract_guild_id(line) is None


def test_extract_guild_id_last_duplicate_wins():
    assert extract_guild_id("GET /members?guild_id=1&guild_id=2&") == 2


def test_extract_guild_id_out_of_range():
    assert extract_guild_id(f"GET /members?guild_id={2**64}&") is None


def test_members_body_round_trip():
    body = members_body(7, MEMBERS)
    assert json.loads(body) == {
        "guild_id": "7",
        "members": [
            {"id": "1", "username": "shark", "avatar_url": "https://cdn.example.com/1.png"},
            {"id": "2", "username": "blåhaj", "avatar_url": None},
        ],
    }
    assert body.startswith("{\n  ")
    assert "blåhaj" in body


@pytest.mark.asyncio
async def test_members_default_guild():
    calls = []

    def fetch(guild_id):
        calls.append(guild_id)
        return MEMBERS

    response = await handle_request(b"GET /members HTTP/1.1\r\nHost: localhost\r\n\r\n", fetch)
    status, headers, body = _split(response)
    assert status == "HTTP/1.1 200 OK"
    assert headers["Content-Type"] == "application/json"
    assert int(headers["Content-Length"]) == len(body)
    assert calls == [1095080242219073606]
    assert json.loads(body)["guild_id"] == "1095080242219073606"


@pytest.mark.asyncio
async def test_members_with_async_fetch_and_query():
    async def fetch(guild_id):
        return [Member(guild_id, "echo")]

    response = await handle_request(b"GET /members?guild_id=99&a=b HTTP/1.1\r\n\r\n", fetch)
    status, _, body = _split(response)
    assert status == "HTTP/1.1 200 OK"
    assert json.loads(body) == members_body_dict(99)


def members_body_dict(guild_id):
    return json.loads(members_body(guild_id, [Member(guild_id, "echo")]))


@pytest.mark.asyncio
async def test_members_fetch_failure():
    def fetch(guild_id):
        raise RuntimeError("boom")

    response = await handle_request(b"GET /members HTTP/1.1\r\n\r\n", fetch)
    status, headers, body = _split(response)
    assert status == "HTTP/1.1 500 Internal Server Error"
    assert body.decode() == '{"error": "Failed to fetch members: boom"}'
    assert int(headers["Content-Length"]) == len(body)


@pytest.mark.asyncio
async def test_unknown_path():
    response = await handle_request(b"GET /other HTTP/1.1\r\n\r\n", lambda guild_id: [])
    status, headers, body = _split(response)
    assert status == "HTTP/1.1 404 Not Found"
    assert body.decode() == NOT_FOUND_BODY
    assert int(headers["Content-Length"]) == len(body)


@pytest.mark.asyncio
async def test_post_is_not_found():
    response = await handle_request(b"POST /members HTTP/1.1\r\n\r\n", lambda guild_id: MEMBERS)
    status, _, _ = _split(response)
    assert status == "HTTP/1.1 404 Not Found"


@pytest.mark.asyncio
async def test_content_length_counts_bytes():
    response = await handle_request(b"GET /members HTTP/1.1\r\n\r\n", lambda guild_id: MEMBERS)
    _, headers, body = _split(response)
    assert int(headers["Content-Length"]) == len(body)
    assert len(body) > len(body.decode())