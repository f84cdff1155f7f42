"""Stream-parse Claude JSONL transcripts into deduplicated usage records."""

from __future__ import annotations

import json
import math
import logging
from collections.abc import Generator
from datetime import UTC, datetime
from pathlib import Path

from pydantic import ValidationError

from ccradar.config import Config
from ccradar.data.discovery import discover_usage_files
from ccradar.models.usage import UsageRecord
from ccradar.services.cost import estimate_cost

logger = logging.getLogger(__name__)


class UsageLoader:
    """Load usage records from every discovered transcript file."""

    def __init__(self, config: Config) -> None:
        self._config = config

    def load(self) -> list[UsageRecord]:
        """Load all records, dropping repeats of the same message/request pair.

        Returns:
            Records sorted ascending by timestamp.
        """
        seen: set[str] = set()
        records: list[UsageRecord] = []
        files = discover_usage_files(self._config)

        for discovered in files:
            loaded = 0
            for record in parse_usage_file(discovered.file_path, project=discovered.project):
                key = record.dedup_key
                if key is not None:
                    if key in seen:
                        continue
                    seen.add(key)
                records.append(record)
                loaded += 1
            logger.debug("Loaded %d records from %s", loaded, discovered.file_path)

        records.sort(key=lambda record: record.timestamp)
        logger.info("Loaded %d usage records from %d files", len(records), len(files))
        return records


def parse_usage_file(path: Path, *, project: str = "") -> Generator[UsageRecord]:
    """Yield one record per JSONL line that carries token usage."""
    try:
        file = open(path, encoding="utf-8")
    except OSError:
        logger.warning("Could not open usage file: %s", path)
        return

    with file:
        for line_num, line in enumerate(file, 1):
            line = line.strip()
            if not line:
                continue
            try:
                raw = json.loads(line)
            except ValueError:
                logger.warning("Invalid JSON at %s:%d", path, line_num)
                continue
            if not isinstance(raw, dict):
                continue

            try:
                record = parse_usage_entry(raw, project=project)
            except (ValidationError, OverflowError) as exc:
                logger.warning("Rejected usage entry at %s:%d: %s", path, line_num, exc)
                continue
            if record is not None:
                yield record


def parse_usage_entry(raw: dict[str, object], *, project: str = "") -> UsageRecord | None:
    """Build a record from one decoded log line, or ``None`` if it has no usage."""
    timestamp = parse_timestamp(raw.get("timestamp"))
    if timestamp is None:
        return None

    message = raw.get("message")
    if not isinstance(message, dict):
        message = {}

    usage = raw.get("usage")
    if not isinstance(usage, dict):
        usage = message.get("usage")
    if not isinstance(usage, dict):
        return None

    input_tokens = _int(usage.get("input_tokens", 0))
    output_tokens = _int(usage.get("output_tokens", 0))
    cache_creation_tokens = _int(usage.get("cache_creation_input_tokens", 0))
    cache_read_tokens = _int(usage.get("cache_read_input_tokens", 0))
    if not (input_tokens or output_tokens or cache_creation_tokens or cache_read_tokens):
        return None

    model = _as_str(raw.get("model")) or _as_str(message.get("model"))
    cost = _float(raw.get("costUSD"))
    if cost is None:
        cost = _float(raw.get("cost"))
    if cost is None:
        cost = estimate_cost(
            model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            cache_read_tokens=cache_read_tokens,
            cache_creation_tokens=cache_creation_tokens,
        )["total_cost"]

    return UsageRecord(
        timestamp=timestamp,
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        cache_creation_tokens=cache_creation_tokens,
        cache_read_tokens=cache_read_tokens,
        model=model,
        cost=cost,
        message_id=_as_optional_str(raw.get("message_id")) or _as_optional_str(message.get("id")),
        request_id=_as_optional_str(raw.get("requestId"))
        or _as_optional_str(raw.get("request_id")),
        project=_as_optional_str(raw.get("cwd")) or project or None,
    )


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _as_str(value: object) -> str:
    return value if isinstance(value, str) else ""


def _as_optional_str(value: object) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def _int(val: object) -> int:
    if isinstance(val, bool):
        return int(val)
    if isinstance(val, int):
        return val
    if isinstance(val, str):
        try:
            val = float(val)
        except ValueError:
            return 0
    if isinstance(val, float):
        return int(val) if math.isfinite(val) else 0
    return 0


def _float(val: object) -> float | None:
    if isinstance(val, bool):
        return None
    if isinstance(val, int | float):
        number = float(val)
        return number if math.isfinite(number) else None
    return None
