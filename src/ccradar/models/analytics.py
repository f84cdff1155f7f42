"""Analytics models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from ccradar.models.plans import QuotaPlan
from ccradar.models.projects import ProjectUsage
from ccradar.models.sessions import Session, UsageAlert


class UsageStatistics(BaseModel):
    """Aggregate numbers across all sessions of one load pass."""

    total_sessions: int = 0
    total_tokens_used: int = 0
    total_cost: float = 0.0
    average_tokens_per_session: int = 0
    average_cost_per_session: float = 0.0
    peak_usage_day: datetime | None = None
    current_streak: int = 0


class UsageSnapshot(BaseModel):
    """Everything a dashboard needs for one refresh."""

    generated_at: datetime
    plan: QuotaPlan
    record_count: int = 0
    sessions: list[Session] = Field(default_factory=list)
    current_session: Session | None = None
    burn_rate: float | None = None
    statistics: UsageStatistics = Field(default_factory=UsageStatistics)
    projects: list[ProjectUsage] = Field(default_factory=list)
    alerts: list[UsageAlert] = Field(default_factory=list)
