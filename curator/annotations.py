"""Parsing of key:value annotation options."""

from __future__ import annotations

from typing import Iterable


def get_annotations(data: Iterable[str] | None) -> dict[str, str]:
    """Turn 'key:value' strings into a mapping, skipping entries without a colon.

    Only the first colon separates key from value.
    """
    annotations: dict[str, str] = {}
    for entry in data or ():
        key, sep, value = entry.partition(":")
        if not sep:
            continue
        annotations[key] = value
    return annotations