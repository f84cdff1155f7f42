"""Multi-session burn rate over a trailing lookback window."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta

from ccradar.models.sessions import Session

LOOKBACK = timedelta(minutes=60)


def aggregate_burn_rate(
    sessions: Iterable[Session],
    now: datetime,
    lookback: timedelta = LOOKBACK,
) -> float | None:
    """Tokens per minute right now, time-weighted across recent sessions.

    Each session is assumed to consume uniformly over its full duration; only
    the part overlapping ``[now - lookback, now]`` contributes. Returns
    ``None`` when no session touches the lookback window.
    """
    window_start = now - lookback
    total_tokens = 0.0
    total_minutes = 0.0

    for session in sessions:
        overlap_start = max(session.start_time, window_start)
        overlap_end = min(session.end_time, now)
        if overlap_end <= overlap_start:
            continue

        overlap_minutes = (overlap_end - overlap_start).total_seconds() / 60.0
        session_minutes = session.duration.total_seconds() / 60.0
        if session_minutes > 0:
            total_tokens += session.token_count * (overlap_minutes / session_minutes)
        total_minutes += overlap_minutes

    if total_minutes <= 0:
        return None
    return total_tokens / total_minutes


def attach_burn_rate(
    sessions: Sequence[Session], now: datetime
) -> tuple[list[Session], float | None]:
    """Return sessions with the aggregated rate attached to the active one.

    The input sessions are left untouched.
    """
    rate = aggregate_burn_rate(sessions, now)
    updated: list[Session] = []
    for session in sessions:
        if rate is not None and session.is_active(now):
            updated.append(session.with_burn_rate(rate))
        else:
            updated.append(session)
    return updated, rate
