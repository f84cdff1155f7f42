"""Model-family categories and the substring classifier."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from enum import StrEnum


class CategoryKey(StrEnum):
    """Known model families, plus the catch-all bucket."""

    OPUS = "opus"
    SONNET = "sonnet"
    HAIKU = "haiku"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class CategoryInfo:
    """Display metadata for one model family."""

    key: CategoryKey
    display_name: str
    short_name: str
    color: str
    tier: int
    is_high_performance: bool = False


OPUS = CategoryInfo(CategoryKey.OPUS, "Claude 3 Opus", "Opus", "#EF4444", 3, True)
SONNET = CategoryInfo(CategoryKey.SONNET, "Claude 3.5 Sonnet", "Sonnet", "#3B82F6", 2, True)
HAIKU = CategoryInfo(CategoryKey.HAIKU, "Claude 3 Haiku", "Haiku", "#10B981", 1)
UNKNOWN = CategoryInfo(CategoryKey.UNKNOWN, "Unknown Model", "Unknown", "#6B7280", 0)

KNOWN_CATEGORIES: tuple[CategoryInfo, ...] = tuple(
    sorted((OPUS, SONNET, HAIKU), key=lambda info: info.tier, reverse=True)
)
CATEGORY_BY_KEY: dict[str, CategoryInfo] = {
    info.key.value: info for info in (*KNOWN_CATEGORIES, UNKNOWN)
}

# Checked in order; first substring hit wins. Family names come first so that
# "claude-3-opus" is never swallowed by the generic "claude-3" fallback.
CATEGORY_PATTERNS: tuple[tuple[str, CategoryInfo], ...] = (
    ("opus", OPUS),
    ("sonnet", SONNET),
    ("haiku", HAIKU),
    ("claude-3-5", SONNET),
    ("claude-3", SONNET),
    ("20241022", SONNET),
    ("20240620", SONNET),
)


@functools.lru_cache(maxsize=512)
def classify(raw: str) -> CategoryInfo:
    """Map a free-form model identifier to its category (never fails)."""
    normalized = raw.strip().casefold()
    if not normalized:
        return UNKNOWN
    for needle, info in CATEGORY_PATTERNS:
        if needle in normalized:
            return info
    return UNKNOWN


def category_info(key: str) -> CategoryInfo:
    """Look up a category by key, falling back to unknown."""
    return CATEGORY_BY_KEY.get(key.strip().lower(), UNKNOWN)
