"""Group usage records into hour-aligned 5-hour session windows."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from ccradar.models.categories import classify
from ccradar.models.plans import QuotaPlan, resolve_token_limit
from ccradar.models.sessions import SESSION_DURATION, Session
from ccradar.models.usage import UsageRecord


@dataclass
class _WindowStats:
    """Accumulated totals while a window is open."""

    start_time: datetime
    end_time: datetime
    token_count: int = 0
    cost: float = 0.0
    record_count: int = 0
    category_usage: dict[str, int] = field(default_factory=dict)

    def add(self, record: UsageRecord) -> None:
        tokens = record.total_tokens
        self.token_count += tokens
        self.cost += record.cost
        self.record_count += 1
        key = classify(record.model).key.value
        self.category_usage[key] = self.category_usage.get(key, 0) + tokens

    def close(self) -> Session:
        return Session(
            id=_session_id(self.start_time),
            start_time=self.start_time,
            end_time=self.end_time,
            token_count=self.token_count,
            cost=self.cost,
            record_count=self.record_count,
            category_usage=dict(self.category_usage),
        )


def floor_to_hour(moment: datetime) -> datetime:
    """Truncate to the start of the UTC hour containing ``moment``."""
    return moment.astimezone(UTC).replace(minute=0, second=0, microsecond=0)


def build_sessions(records: Iterable[UsageRecord], plan: QuotaPlan) -> list[Session]:
    """Build session windows from usage records, most recent first.

    A record joins the open window while its timestamp is before the window
    end; otherwise the window closes and a new one starts at the record's own
    hour. Token limits are resolved once all windows are closed so that
    auto-detection sees the complete history.
    """
    ordered = sorted(records, key=lambda record: record.timestamp)
    if not ordered:
        return []

    closed: list[Session] = []
    current = _open_window(ordered[0].timestamp)
    for record in ordered:
        if record.timestamp >= current.end_time:
            closed.append(current.close())
            current = _open_window(record.timestamp)
        current.add(record)
    closed.append(current.close())

    token_limit = resolve_token_limit(plan, closed)
    sessions = [session.model_copy(update={"token_limit": token_limit}) for session in closed]
    sessions.sort(key=lambda session: session.start_time, reverse=True)
    return sessions


def build_hour_aligned_sessions(
    records: Iterable[UsageRecord], plan: QuotaPlan
) -> list[Session]:
    """Strict hour-aligned variant; shares the algorithm of ``build_sessions``."""
    return build_sessions(records, plan)


def _open_window(timestamp: datetime) -> _WindowStats:
    start = floor_to_hour(timestamp)
    return _WindowStats(start_time=start, end_time=start + SESSION_DURATION)


def _session_id(start_time: datetime) -> str:
    return f"session-{start_time.isoformat()}"
