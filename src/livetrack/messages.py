"""Helpers for nested message catalogs."""

from __future__ import annotations

from typing import Any, Mapping, Union

__all__ = ["Messages", "flatten_messages"]

Messages = Mapping[str, Union[str, "Messages"]]


def flatten_messages(tree: Mapping[str, Any] | None, prefix: str = "") -> list[tuple[str, str]]:
    """Return ``(dotted_key, text)`` pairs in pre-order of ``tree``.

    Nested mappings are descended into; lists and other non-string leaves
    are skipped.
    """

    results: list[tuple[str, str]] = []
    if not tree:
        return results

    for key, value in tree.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, str):
            results.append((full_key, value))
        elif isinstance(value, Mapping):
            results.extend(flatten_messages(value, full_key))
    return results
