"""Shared fixtures for ccradar tests."""

from __future__ import annotations

import shutil
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import TypeAlias

import pytest

from ccradar.config import Config
from ccradar.models.plans import QuotaPlan
from ccradar.models.sessions import Session
from ccradar.models.usage import UsageRecord

SAMPLE_PROJECTS_PATH = Path(__file__).parent / "data" / "projects"

RecordFactory: TypeAlias = "Callable[..., UsageRecord]"
SessionFactory: TypeAlias = "Callable[..., Session]"


@pytest.fixture
def base_time() -> datetime:
    """2025-06-30 14:23:45 UTC, deliberately off the hour."""
    return datetime(2025, 6, 30, 14, 23, 45, tzinfo=UTC)


@pytest.fixture
def make_record() -> RecordFactory:
    """Factory for usage records split evenly between input and output."""

    def _make(
        timestamp: datetime,
        tokens: int = 100,
        model: str = "claude-3-5-sonnet-20241022",
        **overrides: object,
    ) -> UsageRecord:
        fields: dict[str, object] = {
            "timestamp": timestamp,
            "input_tokens": tokens // 2,
            "output_tokens": tokens - tokens // 2,
            "model": model,
            "cost": tokens * 0.003 / 1000,
        }
        fields.update(overrides)
        return UsageRecord(**fields)  # type: ignore[arg-type]

    return _make


@pytest.fixture
def make_session() -> SessionFactory:
    """Factory for sessions with explicit bounds."""

    def _make(
        start_time: datetime,
        end_time: datetime | None = None,
        token_count: int = 0,
        token_limit: int = 44_000,
        **overrides: object,
    ) -> Session:
        return Session(
            id=f"test-{start_time.isoformat()}",
            start_time=start_time,
            end_time=end_time or start_time + timedelta(hours=5),
            token_count=token_count,
            token_limit=token_limit,
            cost=token_count * 0.003 / 1000,
            **overrides,  # type: ignore[arg-type]
        )

    return _make


@pytest.fixture
def tmp_claude_dir(tmp_path: Path) -> Path:
    """Create a temporary Claude directory with sample transcripts."""
    claude_dir = tmp_path / ".claude"
    shutil.copytree(SAMPLE_PROJECTS_PATH, claude_dir / "projects")
    return claude_dir


@pytest.fixture
def test_config(tmp_claude_dir: Path) -> Config:
    """Config pointing at temporary test data."""
    return Config(claude_dirs=(tmp_claude_dir,), plan=QuotaPlan.PRO)
