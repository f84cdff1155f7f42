"""Usage service: load records and run the session pipeline."""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from result import Err, Ok, Result

from ccradar.models.analytics import UsageSnapshot
from ccradar.services import metrics
from ccradar.services.burn_rate import attach_burn_rate
from ccradar.services.projects import project_usage
from ccradar.services.statistics import calculate_statistics
from ccradar.services.windows import build_sessions

if TYPE_CHECKING:
    from ccradar.config import Config
    from ccradar.services.protocols import UsageLoaderProtocol

logger = logging.getLogger(__name__)


class UsageService:
    """Service producing one dashboard snapshot per refresh."""

    def __init__(self, loader: UsageLoaderProtocol, config: Config) -> None:
        self._loader = loader
        self._config = config

    async def refresh(self, now: datetime | None = None) -> Result[UsageSnapshot, str]:
        """Reload usage data and rebuild sessions.

        Returns:
            Ok with a UsageSnapshot, or Err if the records could not be loaded.
        """
        try:
            records = await asyncio.to_thread(self._loader.load)
        except Exception as exc:
            logger.exception("Failed to load usage data")
            return Err(f"Failed to load usage data: {exc}")

        moment = now or datetime.now(UTC)
        plan = self._config.plan
        sessions = build_sessions(records, plan)
        sessions, burn_rate = attach_burn_rate(sessions, moment)
        current = next((session for session in sessions if session.is_active(moment)), None)
        alerts = (
            metrics.alerts(current, moment, self._config.alert_threshold) if current else []
        )

        if current is None:
            logger.debug("No active session at %s", moment.isoformat())
        elif burn_rate is not None:
            logger.debug("Multi-session burn rate: %.1f tokens/min", burn_rate)
        for alert in alerts:
            logger.info("%s: %s", alert.title, alert.body)

        return Ok(
            UsageSnapshot(
                generated_at=moment,
                plan=plan,
                record_count=len(records),
                sessions=sessions,
                current_session=current,
                burn_rate=burn_rate,
                statistics=calculate_statistics(sessions, moment),
                projects=project_usage(records),
                alerts=alerts,
            )
        )
