"""Minimal message formatter used when no host formatter is supplied."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Union

from .messages import flatten_messages

__all__ = [
    "MessageDescriptor",
    "DescriptorLike",
    "MessageFormatter",
    "CatalogFormatter",
    "descriptor_id",
]

_PLACEHOLDER_PATTERN = re.compile(r"\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}")


@dataclass(slots=True, frozen=True)
class MessageDescriptor:
    id: str
    default_message: str | None = None
    description: str | None = None


DescriptorLike = Union[MessageDescriptor, Mapping[str, Any]]


class MessageFormatter(Protocol):
    locale: str
    messages: Mapping[str, Any]

    def format_message(
        self, descriptor: DescriptorLike, values: Mapping[str, Any] | None = None
    ) -> Any:  # pragma: no cover - protocol stub
        ...


def descriptor_id(descriptor: DescriptorLike) -> str | None:
    if isinstance(descriptor, MessageDescriptor):
        return descriptor.id or None
    if isinstance(descriptor, Mapping):
        value = descriptor.get("id")
        return str(value) if value else None
    return None


def _default_message(descriptor: DescriptorLike) -> str | None:
    if isinstance(descriptor, MessageDescriptor):
        return descriptor.default_message
    if isinstance(descriptor, Mapping):
        value = descriptor.get("defaultMessage", descriptor.get("default_message"))
        return value if isinstance(value, str) else None
    return None


class CatalogFormatter:
    """Resolves ids against a (possibly nested) catalog and fills ``{name}`` placeholders.

    Lookup order is catalog entry, then the descriptor's default message,
    then the id itself. Placeholders without a value stay as written.
    """

    def __init__(self, locale: str, messages: Mapping[str, Any] | None = None) -> None:
        self.locale = locale
        self.messages: Mapping[str, Any] = messages or {}
        self._catalog = dict(flatten_messages(self.messages))

    def format_message(self, descriptor: DescriptorLike, values: Mapping[str, Any] | None = None) -> str:
        message_id = descriptor_id(descriptor)
        template = self._catalog.get(message_id) if message_id else None
        if template is None:
            template = _default_message(descriptor) or message_id or ""
        if not values:
            return template

        def _substitute(match: re.Match[str]) -> str:
            name = match.group(1)
            if name in values:
                return str(values[name])
            return match.group(0)

        return _PLACEHOLDER_PATTERN.sub(_substitute, template)
