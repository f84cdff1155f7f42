"""Configuration for ccradar."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from ccradar.models.plans import QuotaPlan
from ccradar.services.metrics import ALERT_THRESHOLD

CLAUDE_DIR_ENV = "CCRADAR_CLAUDE_DIR"


def _default_claude_dirs() -> tuple[Path, ...]:
    override = os.environ.get(CLAUDE_DIR_ENV, "").strip()
    if override:
        return (Path(override).expanduser(),)
    home = Path.home()
    return (home / ".claude", home / ".config" / "claude")


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    claude_dirs: tuple[Path, ...] = field(default_factory=_default_claude_dirs)
    plan: QuotaPlan = QuotaPlan.PRO
    max_file_size: int = 100_000_000
    max_total_bytes: int = 500_000_000
    alert_threshold: float = ALERT_THRESHOLD

    @property
    def projects_dirs(self) -> tuple[Path, ...]:
        return tuple(claude_dir / "projects" for claude_dir in self.claude_dirs)
