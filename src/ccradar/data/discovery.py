"""Discover Claude usage JSONL files under the configured data directories."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ccradar.config import Config

logger = logging.getLogger(__name__)


@dataclass
class DiscoveredFile:
    """A usage log file selected for loading."""

    file_path: Path
    projects_dir: Path
    file_size: int
    mtime_ms: int

    @property
    def project(self) -> str:
        """First directory component below ``projects/``."""
        relative = self.file_path.relative_to(self.projects_dir)
        return relative.parts[0] if len(relative.parts) > 1 else ""


def discover_usage_files(config: Config) -> list[DiscoveredFile]:
    """Find ``*.jsonl`` files recursively, honoring size and memory budgets.

    Files larger than ``max_file_size`` are skipped, as is any file that
    would push the running total past ``max_total_bytes``.
    """
    files: list[DiscoveredFile] = []
    budget_used = 0

    for projects_dir in config.projects_dirs:
        if not projects_dir.is_dir():
            logger.info("Claude projects directory not found: %s", projects_dir)
            continue

        for path in sorted(projects_dir.rglob("*.jsonl")):
            if _is_hidden(path, projects_dir) or not path.is_file():
                continue
            try:
                stat = path.stat()
            except OSError:
                logger.warning("Could not stat usage file: %s", path)
                continue

            if stat.st_size > config.max_file_size:
                logger.warning("Skipping large file (%d bytes): %s", stat.st_size, path)
                continue
            if budget_used + stat.st_size > config.max_total_bytes:
                logger.warning(
                    "Skipping file due to memory budget (%d/%d bytes): %s",
                    budget_used,
                    config.max_total_bytes,
                    path,
                )
                continue

            budget_used += stat.st_size
            files.append(
                DiscoveredFile(
                    file_path=path,
                    projects_dir=projects_dir,
                    file_size=stat.st_size,
                    mtime_ms=int(stat.st_mtime * 1000),
                )
            )

    logger.debug("Discovered %d usage files (%d bytes)", len(files), budget_used)
    return files


def _is_hidden(path: Path, root: Path) -> bool:
    return any(part.startswith(".") for part in path.relative_to(root).parts)
