"""Aggregate usage statistics across sessions."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timedelta

from ccradar.models.analytics import UsageStatistics
from ccradar.models.sessions import Session

_STREAK_LOOKBACK_DAYS = 30


def calculate_statistics(sessions: Sequence[Session], now: datetime) -> UsageStatistics:
    """Totals, averages, peak session and day streak."""
    if not sessions:
        return UsageStatistics()

    total_tokens = sum(session.token_count for session in sessions)
    total_cost = sum(session.cost for session in sessions)
    peak = max(sessions, key=lambda session: session.token_count)

    return UsageStatistics(
        total_sessions=len(sessions),
        total_tokens_used=total_tokens,
        total_cost=total_cost,
        average_tokens_per_session=total_tokens // len(sessions),
        average_cost_per_session=total_cost / len(sessions),
        peak_usage_day=peak.start_time,
        current_streak=current_streak(sessions, now),
    )


def current_streak(sessions: Sequence[Session], now: datetime) -> int:
    """Consecutive days with at least one session start, counting back from today.

    A quiet today does not break the streak; the first quiet earlier day does.
    """
    active_days = {session.start_time.astimezone(now.tzinfo).date() for session in sessions}
    today = now.date()
    streak = 0
    for offset in range(_STREAK_LOOKBACK_DAYS):
        day = today - timedelta(days=offset)
        if day in active_days:
            streak += 1
        elif offset > 0:
            break
    return streak
