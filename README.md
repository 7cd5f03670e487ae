# blahaj_bot

The building blocks of a community chat bot: message handlers, command
replies, moderation checks and a tiny HTTP endpoint that lists guild
members. The logic is kept apart from any chat client, so each piece can
be called and tested on its own. The package uses only the standard
library.

## Modules

- `blahaj_bot.config` – `Settings.from_env(environ=None)` reads
  `GITHUB_TOKEN` from the given mapping (the process environment by
  default) and raises `ConfigError` when it is missing. `Settings` also
  carries a `user_agent`, `"blahaj"` by default.
- `blahaj_bot.embeds` – `Embed` and `EmbedField`. `Embed.add_field(name,
  value, inline=False)` appends a field and returns the embed;
  `Embed.to_dict()` gives a JSON-ready dictionary that leaves out unset
  parts.
- `blahaj_bot.links` – finds links to x.com, twitter.com, reddit.com,
  instagram.com, tiktok.com and bsky.app (`find_links`) and points them at
  their embed-friendly mirrors (`rewrite_link`, `rewrite_links`).
- `blahaj_bot.code_expansion` – finds links to a line range of a file on a
  git host (`find_code_references`, returning `CodeReference` objects with
  `raw_url()` and `language()`), picks the lines out of the file
  (`select_lines`) and wraps them in a fenced block, truncating content
  over 1950 bytes (`format_code_block`). `expand_code_links(message,
  fetch=fetch_text)` does all of it and skips links that cannot be
  fetched; `fetch_text` downloads with `urllib`.
- `blahaj_bot.kitten` – welcome and role rules for new members:
  `should_welcome`, `welcome_message`, `is_pronouns_role` and
  `needs_kitten_role`.
- `blahaj_bot.moderation` – checks for the ban, kick and timeout
  commands: `Role`, `highest_role`, `hierarchy_refusal`,
  `missing_permission_message`, `default_reason`, `parse_duration`,
  `check_timeout_duration` (raises `ModerationError` for an invalid
  duration or one over 28 days) and `timeout_until`.
- `blahaj_bot.fun` – bottom encoding (`bottom_encode`, `bottom_decode`,
  which raises `BottomDecodeError`), the `bottomify_message` and
  `topify_messages` replies (the latter split into chunks of at most 1994
  bytes), dice rolls (`roll`) and random nix memes (`nix_meme_url`). Both
  random functions accept a `random.Random` for repeatable results.
- `blahaj_bot.misc` – `crate_embed(name, status, payload)` builds an
  embed from a crates.io API response; `nixpkgs_title` and
  `nixpkgs_description` format the result of tracking a nixpkgs pull
  request across branches.
- `blahaj_bot.user_info` – `botinfo_embed`, `ping_message`,
  `avatar_message` and `whois_embed`.
- `blahaj_bot.http_api` – `Member`, `extract_guild_id`, `members_body`,
  `handle_request(raw, fetch_members)` and `serve(port, fetch_members)`.
  The server listens on 127.0.0.1 and answers `GET /members?guild_id=...`
  with pretty-printed JSON; without a valid `guild_id` it uses the home
  guild. Other paths get a 404, and a failing `fetch_members` a 500.
  `fetch_members` may be a plain function or a coroutine function.

## Examples

```python
from blahaj_bot.links import rewrite_link

rewrite_link("https://x.com/someone/status/1")
# 'https://fxtwitter.com/someone/status/1'
```

```python
from blahaj_bot.moderation import parse_duration

parse_duration("12h")   # 43200
```

```python
from blahaj_bot.config import Settings

settings = Settings.from_env({"GITHUB_TOKEN": "token"})
```

```python
import asyncio
from blahaj_bot.http_api import Member, serve

def fetch_members(guild_id):
    return [Member(id=1, username="shark")]

asyncio.run(serve(8080, fetch_members))
```

## What it does not do

The package does not connect to a chat service. There is no bot process
and no command to run: logging in, receiving events, registering slash
commands, sending replies, and carrying out bans, kicks, timeouts or role
changes are left to the chat client that uses these functions. Likewise
it does not query crates.io or GitHub for crate or pull request data; it
formats responses that the caller has already fetched. Only
`code_expansion.fetch_text` makes network requests of its own.