"""Session-level models."""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

SESSION_DURATION = timedelta(hours=5)


class Session(BaseModel):
    """A fixed 5-hour, hour-aligned usage window."""

    model_config = ConfigDict(frozen=True)

    id: str
    start_time: datetime
    end_time: datetime
    token_count: int = 0
    token_limit: int = 0
    cost: float = 0.0
    record_count: int = 0
    category_usage: dict[str, int] = Field(default_factory=dict)
    burn_rate: float | None = None

    @property
    def duration(self) -> timedelta:
        return self.end_time - self.start_time

    def is_active(self, now: datetime) -> bool:
        """True while ``now`` falls inside ``[start_time, end_time)``."""
        return self.start_time <= now < self.end_time

    def with_burn_rate(self, burn_rate: float | None) -> Session:
        """Return a copy carrying ``burn_rate`` (tokens/minute)."""
        return self.model_copy(update={"burn_rate": burn_rate})


class CategoryBreakdown(BaseModel):
    """Share of a session's tokens attributed to one model family."""

    model_config = ConfigDict(frozen=True)

    category: str
    token_count: int = 0
    percentage: float = 0.0


class Severity(StrEnum):
    """Ordered status severity driving message and color."""

    NEUTRAL = "neutral"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def color(self) -> str:
        return SEVERITY_COLORS[self]


SEVERITY_COLORS: dict[Severity, str] = {
    Severity.NEUTRAL: "#8FBC8F",
    Severity.LOW: "#27AE60",
    Severity.MEDIUM: "#F1C40F",
    Severity.HIGH: "#E67E22",
    Severity.CRITICAL: "#E74C3C",
}


class SessionStatus(BaseModel):
    """User-facing status line for a session."""

    model_config = ConfigDict(frozen=True)

    message: str
    severity: Severity

    @property
    def color(self) -> str:
        return self.severity.color


class SessionHealth(StrEnum):
    """Coarse window state: time left in the window and share of budget used."""

    ACTIVE = "active"
    EXPIRED = "expired"
    APPROACHING = "approaching"
    WARNING = "warning"
    CRITICAL = "critical"


class AlertKind(StrEnum):
    TOKEN_WARNING = "token_warning"
    SESSION_EXPIRY = "session_expiry"


class UsageAlert(BaseModel):
    """A threshold crossing worth surfacing to the user."""

    model_config = ConfigDict(frozen=True)

    kind: AlertKind
    title: str
    body: str
