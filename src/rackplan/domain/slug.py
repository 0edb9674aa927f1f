"""Slug generation and validation for device type identifiers.

Slugs are lowercase alphanumeric words joined by single hyphens, e.g.
``synology-ds920-plus``. They are the string keys placed devices use to
reference their catalog entry.
"""

from __future__ import annotations

import re
import time

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

__all__ = [
    "SLUG_PATTERN",
    "ensure_unique_slug",
    "generate_device_slug",
    "is_valid_slug",
    "slugify",
]


def slugify(text: str) -> str:
    """Convert any string to a valid slug.

    Examples:
        >>> slugify("Synology DS920+")
        'synology-ds920-plus'
        >>> slugify("  UniFi Dream Machine ")
        'unifi-dream-machine'
    """
    if not text:
        return ""
    slug = text.lower().strip().replace("+", "-plus")
    slug = re.sub(r"[^a-z0-9]+", "-", slug)
    return slug.strip("-")


def is_valid_slug(slug: str) -> bool:
    """Check that a slug is lowercase, hyphen-separated alphanumerics."""
    if not slug:
        return False
    return SLUG_PATTERN.match(slug) is not None


def generate_device_slug(
    manufacturer: str | None = None,
    model: str | None = None,
    name: str | None = None,
) -> str:
    """Generate a slug from device information.

    Uses manufacturer and model when both are given, then the name, and
    finally a timestamp so that a slug is always produced.

    Args:
        manufacturer: Device manufacturer, e.g. "Synology".
        model: Device model, e.g. "DS920+".
        name: Free-form device name.

    Returns:
        A valid slug.
    """
    if manufacturer and model:
        slug = slugify(f"{manufacturer}-{model}")
        if slug:
            return slug
    if name:
        slug = slugify(name)
        if slug:
            return slug
    return f"device-{int(time.time() * 1000)}"


def ensure_unique_slug(slug: str, existing: set[str] | frozenset[str]) -> str:
    """Append a numeric suffix until the slug is not in ``existing``.

    Examples:
        >>> ensure_unique_slug("my-slug", {"my-slug"})
        'my-slug-2'
        >>> ensure_unique_slug("my-slug", {"my-slug", "my-slug-2"})
        'my-slug-3'
    """
    if slug not in existing:
        return slug
    counter = 2
    while f"{slug}-{counter}" in existing:
        counter += 1
    return f"{slug}-{counter}"
