"""Helpers for tag lists, which are stored in order but compared as sets."""

from __future__ import annotations

from collections.abc import Iterable


def normalize_tags(tags: Iterable[str] | None) -> list[str]:
    """Return tags stripped, without blanks and without duplicates.

    The first occurrence of each tag wins so the caller's ordering is kept.

    Args:
        tags: Raw tags as submitted, or ``None``.

    Returns:
        Normalised list of tags (empty when ``tags`` is ``None``).
    """
    if tags is None:
        return []
    if isinstance(tags, str):
        tags = [tags]

    seen: set[str] = set()
    result: list[str] = []
    for tag in tags:
        cleaned = str(tag).strip()
        if not cleaned or cleaned in seen:
            continue
        seen.add(cleaned)
        result.append(cleaned)
    return result
