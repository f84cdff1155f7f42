"""Derived per-session metrics: progress, time left, breakdown, status.

Every function here is a pure derivation from one ``Session`` (with its
attached burn rate) and an explicit ``now``. Inconsistent inputs are clamped
rather than rejected: a token count above the limit reads as 100% progress,
and category shares are bounded to ``[0, 100]`` even when the category totals
do not add up to the session total.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from ccradar.models.categories import UNKNOWN, category_info
from ccradar.models.sessions import (
    AlertKind,
    CategoryBreakdown,
    Session,
    SessionHealth,
    SessionStatus,
    Severity,
    UsageAlert,
)

CRITICAL_PROGRESS = 0.85
HIGH_PROGRESS = 0.60
MEDIUM_PROGRESS = 0.30
HIGH_BURN_RATE = 100.0  # tokens/min

EXPIRED_MESSAGE = "Session expired"
CRITICAL_MESSAGE = "Limit approaching — slow down"
HIGH_MESSAGE = "High burn rate detected"
MEDIUM_MESSAGE = "Steady usage pace"
LOW_MESSAGE = "Smooth sailing…"

APPROACHING_WINDOW = timedelta(minutes=10)

ALERT_THRESHOLD = 0.8
EXPIRY_ALERT_WINDOW = timedelta(minutes=5)


def progress(session: Session) -> float:
    """Share of the token limit used, clamped to ``[0.0, 1.0]``."""
    if session.token_limit <= 0:
        return 0.0
    return min(max(session.token_count / session.token_limit, 0.0), 1.0)


def remaining_tokens(session: Session) -> int:
    return max(0, session.token_limit - session.token_count)


def time_remaining(session: Session, now: datetime) -> float | None:
    """Seconds until the budget runs out at the current burn rate."""
    rate = session.burn_rate
    if not session.is_active(now) or rate is None or rate <= 0:
        return None
    return remaining_tokens(session) / rate * 60.0


def predicted_end_time(session: Session, now: datetime) -> datetime | None:
    """Instant at which the budget runs out, if the rate holds."""
    seconds = time_remaining(session, now)
    if seconds is None:
        return None
    return now + timedelta(seconds=seconds)


def time_until_session_end(session: Session, now: datetime) -> float:
    """Seconds until the window closes (0 once it has)."""
    return max(0.0, (session.end_time - now).total_seconds())


def category_breakdown(session: Session) -> list[CategoryBreakdown]:
    """Per-category share of the session, largest first."""
    total = session.token_count
    if total <= 0:
        return []

    breakdown = []
    for category, tokens in session.category_usage.items():
        count = min(max(tokens, 0), total)
        breakdown.append(
            CategoryBreakdown(
                category=category,
                token_count=count,
                percentage=min(max(100.0 * count / total, 0.0), 100.0),
            )
        )
    breakdown.sort(key=lambda item: item.token_count, reverse=True)
    return breakdown


def primary_category(session: Session) -> str:
    """Most-used category; ties go to the higher tier."""
    if not session.category_usage:
        return UNKNOWN.key.value
    best = max(
        session.category_usage.items(),
        key=lambda item: (item[1], category_info(item[0]).tier),
    )
    return best[0]


def status(session: Session, now: datetime) -> SessionStatus:
    """Status message and severity.

    Usage above 85% is always critical. Below that, a burn rate over
    100 tokens/min escalates to high regardless of the usage bracket.
    """
    if not session.is_active(now):
        return SessionStatus(message=EXPIRED_MESSAGE, severity=Severity.NEUTRAL)

    used = progress(session)
    rate = session.burn_rate
    if used > CRITICAL_PROGRESS:
        return SessionStatus(message=CRITICAL_MESSAGE, severity=Severity.CRITICAL)
    if rate is not None and rate > HIGH_BURN_RATE:
        return SessionStatus(message=HIGH_MESSAGE, severity=Severity.HIGH)
    if used < MEDIUM_PROGRESS:
        return SessionStatus(message=LOW_MESSAGE, severity=Severity.LOW)
    if used < HIGH_PROGRESS:
        return SessionStatus(message=MEDIUM_MESSAGE, severity=Severity.MEDIUM)
    return SessionStatus(message=HIGH_MESSAGE, severity=Severity.HIGH)


def severity_color(severity: Severity) -> str:
    return severity.color


def session_health(session: Session, now: datetime) -> SessionHealth:
    """Window state: expiring soon first, then usage thresholds."""
    if not session.is_active(now):
        return SessionHealth.EXPIRED
    if session.end_time - now < APPROACHING_WINDOW:
        return SessionHealth.APPROACHING

    used = progress(session)
    if used >= 0.90:
        return SessionHealth.CRITICAL
    if used >= 0.70:
        return SessionHealth.WARNING
    return SessionHealth.ACTIVE


def alerts(
    session: Session, now: datetime, threshold: float = ALERT_THRESHOLD
) -> list[UsageAlert]:
    """Threshold alerts for an active session.

    Raises a token warning once the budget share reaches ``threshold``
    and an expiry alert when under five minutes of tokens remain at the
    current burn rate.
    """
    if not session.is_active(now):
        return []

    raised: list[UsageAlert] = []
    used = progress(session)
    if used >= threshold:
        raised.append(
            UsageAlert(
                kind=AlertKind.TOKEN_WARNING,
                title="Token Usage Warning",
                body=f"You've used {int(used * 100)}% of your tokens",
            )
        )
    seconds_left = time_remaining(session, now)
    if seconds_left is not None and seconds_left < EXPIRY_ALERT_WINDOW.total_seconds():
        raised.append(
            UsageAlert(
                kind=AlertKind.SESSION_EXPIRY,
                title="Session Expiring Soon",
                body=f"Your session expires in {int(seconds_left / 60)} minutes",
            )
        )
    return raised
