"""Protocol module smoke test."""

from __future__ import annotations

from ccradar.config import Config
from ccradar.data.loader import UsageLoader
from ccradar.services import protocols
from ccradar.services.usage_service import UsageService


def test_protocols_module_imports() -> None:
    assert hasattr(protocols, "UsageLoaderProtocol")
    assert hasattr(protocols, "UsageServiceProtocol")


def test_implementations_satisfy_protocols() -> None:
    config = Config(claude_dirs=())
    loader: protocols.UsageLoaderProtocol = UsageLoader(config)
    service: protocols.UsageServiceProtocol = UsageService(loader, config)
    assert callable(loader.load)
    assert callable(service.refresh)
