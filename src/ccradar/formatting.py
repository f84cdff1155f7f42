"""Plain-text rendering helpers for CLI output."""

from __future__ import annotations

from datetime import datetime

PLACEHOLDER = "—"


def format_duration(seconds: float | None) -> str:
    """Render a duration as ``1d 1h``, ``2h 30m``, ``45m`` or ``30s``."""
    if seconds is None or seconds <= 0:
        return PLACEHOLDER

    total = int(seconds)
    days, rest = divmod(total, 24 * 3600)
    hours, rest = divmod(rest, 3600)
    minutes, secs = divmod(rest, 60)

    if days > 0:
        return f"{days}d {hours}h"
    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m"
    return f"{secs}s"


def format_rate(rate: float | None) -> str:
    if rate is None:
        return PLACEHOLDER
    return f"{rate:.1f} tokens/min"


def format_tokens(count: int) -> str:
    return f"{count:,}"


def format_clock(moment: datetime | None) -> str:
    """Local wall-clock time, e.g. ``14:05``."""
    if moment is None:
        return PLACEHOLDER
    return moment.astimezone().strftime("%H:%M")


def format_percentage(ratio: float) -> str:
    return f"{ratio * 100:.1f}%"


def format_age(seconds: float) -> str:
    """Relative age such as ``2h 5m ago``; under a minute is ``Just now``."""
    if seconds < 60:
        return "Just now"
    return f"{format_duration(seconds)} ago"
