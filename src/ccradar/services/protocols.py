"""Protocol definitions for services."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from result import Result

from ccradar.models.analytics import UsageSnapshot
from ccradar.models.usage import UsageRecord


class UsageLoaderProtocol(Protocol):
    """Interface for anything that supplies usage records."""

    def load(self) -> list[UsageRecord]: ...


class UsageServiceProtocol(Protocol):
    """Interface for the refresh pipeline."""

    async def refresh(self, now: datetime | None = None) -> Result[UsageSnapshot, str]: ...
