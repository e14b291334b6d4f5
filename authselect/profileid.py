"""Identifiers of custom profiles."""

from __future__ import annotations

__all__ = ["CUSTOM_PREFIX", "custom_id", "parse_custom", "is_custom"]

CUSTOM_PREFIX = "custom/"


def custom_id(name: str) -> str:
    """Return the profile id of the custom profile stored in ``name``."""
    return f"{CUSTOM_PREFIX}{name}"


def parse_custom(profile_id: str | None) -> str | None:
    """Return the directory name of a custom profile, or None if not custom."""
    if profile_id is None or not profile_id.startswith(CUSTOM_PREFIX):
        return None
    return profile_id[len(CUSTOM_PREFIX) :]


def is_custom(profile_id: str | None) -> bool:
    """Return True if ``profile_id`` names a custom profile."""
    return parse_custom(profile_id) is not None