"""Tests for tag normalisation."""

from __future__ import annotations

from gamesocio.utils.tags import normalize_tags


def test_strips_and_drops_blank_tags():
    assert normalize_tags([" rpg ", "", "   ", "indie"]) == ["rpg", "indie"]


def test_duplicates_keep_first_occurrence():
    assert normalize_tags(["pixel", "rpg", "pixel", " rpg"]) == ["pixel", "rpg"]


def test_none_is_empty():
    assert normalize_tags(None) == []


def test_single_string_is_one_tag():
    assert normalize_tags("horror") == ["horror"]
