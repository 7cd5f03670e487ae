"""A small model of a chat embed and its wire form."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class EmbedField:
    """One name/value field of an embed."""

    name: str
    value: str
    inline: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value, "inline": self.inline}


@dataclass
class Embed:
    """Rich message content; unset parts are left out of the wire form."""

    title: str | None = None
    description: str | None = None
    url: str | None = None
    color: int | None = None
    timestamp: datetime | None = None
    thumbnail: str | None = None
    author_name: str | None = None
    author_url: str | None = None
    author_icon_url: str | None = None
    footer: str | None = None
    fields: list[EmbedField] = field(default_factory=list)

    def add_field(self, name: str, value: str, inline: bool = False) -> Embed:
        """Append a field and return the embed, so calls can be chained."""
        self.fields.append(EmbedField(name, value, inline))
        return self

    def to_dict(self) -> dict[str, Any]:
        """Return the embed as a JSON-ready dictionary."""
        data: dict[str, Any] = {}
        for key in ("title", "description", "url", "color"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        if self.timestamp is not None:
            data["timestamp"] = self.timestamp.isoformat()
        if self.thumbnail is not None:
            data["thumbnail"] = {"url": self.thumbnail}
        if self.author_name is not None:
            author: dict[str, str] = {"name": self.author_name}
            if self.author_url is not None:
                author["url"] = self.author_url
            if self.author_icon_url is not None:
                author["icon_url"] = self.author_icon_url
            data["author"] = author
        if self.footer is not None:
            data["footer"] = {"text": self.footer}
        if self.fields:
            data["fields"] = [f.to_dict() for f in self.fields]
        return data