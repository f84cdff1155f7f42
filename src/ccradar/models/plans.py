"""Quota plans and token-limit resolution."""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ccradar.models.sessions import Session


class QuotaPlan(StrEnum):
    """Token budget selector for a 5-hour session."""

    PRO = "pro"
    MAX5 = "max5"
    MAX20 = "max20"
    CUSTOM_MAX = "custom_max"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def description(self) -> str:
        limit = PLAN_LIMITS.get(self)
        if limit is None:
            return "Automatically detect your token limit"
        return f"~{limit:,} tokens per 5-hour session"

    @property
    def token_limit(self) -> int:
        """Fixed budget for this plan (0 for auto-detect)."""
        return PLAN_LIMITS.get(self, 0)


_DISPLAY_NAMES: dict[QuotaPlan, str] = {
    QuotaPlan.PRO: "Claude Pro",
    QuotaPlan.MAX5: "Claude Max 5",
    QuotaPlan.MAX20: "Claude Max 20",
    QuotaPlan.CUSTOM_MAX: "Auto-Detect",
}

# Tokens per 5-hour window, ascending.
PLAN_LIMITS: dict[QuotaPlan, int] = {
    QuotaPlan.PRO: 44_000,
    QuotaPlan.MAX5: 220_000,
    QuotaPlan.MAX20: 880_000,
}
FIXED_TIERS: tuple[int, ...] = tuple(sorted(PLAN_LIMITS.values()))


def resolve_token_limit(plan: QuotaPlan, history: Iterable[Session] = ()) -> int:
    """Return the token budget for ``plan``.

    Fixed plans ignore ``history``. ``CUSTOM_MAX`` picks the smallest fixed
    tier that covers the busiest session seen so far, or the largest tier
    when usage already exceeds all of them.
    """
    if plan is not QuotaPlan.CUSTOM_MAX:
        return plan.token_limit

    peak = max((session.token_count for session in history), default=0)
    for tier in FIXED_TIERS:
        if tier >= peak:
            return tier
    return FIXED_TIERS[-1]
