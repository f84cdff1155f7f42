"""Project-level models."""

from __future__ import annotations

from datetime import datetime
from pathlib import PurePosixPath

from pydantic import BaseModel, ConfigDict


class ProjectUsage(BaseModel):
    """Token usage attributed to one project directory."""

    model_config = ConfigDict(frozen=True)

    project: str
    total_tokens: int = 0
    cost: float = 0.0
    session_count: int = 0
    last_used: datetime
    average_tokens_per_session: int = 0
    percentage: float = 0.0

    @property
    def name(self) -> str:
        """Last path component, or the raw key when it is not a path."""
        return PurePosixPath(self.project).name or self.project
