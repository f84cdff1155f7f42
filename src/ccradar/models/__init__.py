"""Pydantic models for ccradar."""

from ccradar.models.analytics import UsageSnapshot, UsageStatistics
from ccradar.models.categories import (
    CATEGORY_PATTERNS,
    KNOWN_CATEGORIES,
    CategoryInfo,
    CategoryKey,
    category_info,
    classify,
)
from ccradar.models.plans import FIXED_TIERS, PLAN_LIMITS, QuotaPlan, resolve_token_limit
from ccradar.models.projects import ProjectUsage
from ccradar.models.sessions import (
    SESSION_DURATION,
    AlertKind,
    CategoryBreakdown,
    Session,
    SessionHealth,
    SessionStatus,
    Severity,
    UsageAlert,
)
from ccradar.models.usage import UsageRecord

__all__ = [
    "AlertKind",
    "CategoryBreakdown",
    "CategoryInfo",
    "CategoryKey",
    "ProjectUsage",
    "QuotaPlan",
    "Session",
    "SessionHealth",
    "SessionStatus",
    "Severity",
    "UsageAlert",
    "UsageRecord",
    "UsageSnapshot",
    "UsageStatistics",
    "CATEGORY_PATTERNS",
    "FIXED_TIERS",
    "KNOWN_CATEGORIES",
    "PLAN_LIMITS",
    "SESSION_DURATION",
    "category_info",
    "classify",
    "resolve_token_limit",
]
