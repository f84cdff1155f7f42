"""Service container with DI wiring."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ccradar.data.loader import UsageLoader
from ccradar.services.usage_service import UsageService

if TYPE_CHECKING:
    from ccradar.config import Config


@dataclass
class ServiceContainer:
    """Holds all application services. Built once at startup, immutable."""

    config: Config
    loader: UsageLoader
    usage_service: UsageService

    @classmethod
    def create(cls, config: Config) -> ServiceContainer:
        """Factory that wires all dependencies."""
        loader = UsageLoader(config)
        return cls(
            config=config,
            loader=loader,
            usage_service=UsageService(loader, config),
        )
