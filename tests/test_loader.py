"""Tests for usage-file discovery and JSONL loading."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

import pytest
from pydantic import ValidationError

from ccradar.config import Config
from ccradar.data.discovery import discover_usage_files
from ccradar.data.loader import (
    UsageLoader,
    parse_timestamp,
    parse_usage_entry,
    parse_usage_file,
)
from ccradar.models.plans import QuotaPlan
from ccradar.services.windows import build_sessions


class TestDiscovery:
    def test_finds_jsonl_files_recursively(self, test_config: Config) -> None:
        files = discover_usage_files(test_config)
        assert [f.file_path.name for f in files] == ["session-001.jsonl", "session-002.jsonl"]
        assert [f.project for f in files] == ["-Users-test-myproject", "-Users-test-other"]
        assert all(f.file_size > 0 for f in files)

    def test_skips_hidden_and_non_jsonl(self, test_config: Config, tmp_claude_dir: Path) -> None:
        hidden = tmp_claude_dir / "projects" / ".trash"
        hidden.mkdir()
        (hidden / "old.jsonl").write_text("{}\n")
        (tmp_claude_dir / "projects" / "notes.txt").write_text("hello")
        names = [f.file_path.name for f in discover_usage_files(test_config)]
        assert "old.jsonl" not in names
        assert "notes.txt" not in names

    def test_nested_subagent_files_keep_top_level_project(
        self, test_config: Config, tmp_claude_dir: Path
    ) -> None:
        nested = tmp_claude_dir / "projects" / "-Users-test-other" / "subagents"
        nested.mkdir()
        (nested / "agent-1.jsonl").write_text("\n")
        files = {f.file_path.name: f for f in discover_usage_files(test_config)}
        assert files["agent-1.jsonl"].project == "-Users-test-other"

    def test_skips_files_over_size_limit(self, tmp_claude_dir: Path) -> None:
        config = Config(claude_dirs=(tmp_claude_dir,), max_file_size=10)
        assert discover_usage_files(config) == []

    def test_respects_total_budget(self, tmp_claude_dir: Path) -> None:
        first = tmp_claude_dir / "projects" / "-Users-test-myproject" / "session-001.jsonl"
        config = Config(claude_dirs=(tmp_claude_dir,), max_total_bytes=first.stat().st_size)
        files = discover_usage_files(config)
        assert [f.file_path for f in files] == [first]

    def test_missing_directory(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        config = Config(claude_dirs=(tmp_path / "nonexistent",))
        with caplog.at_level(logging.INFO):
            assert discover_usage_files(config) == []
        assert "not found" in caplog.text


class TestUsageLoader:
    def test_loads_and_deduplicates(self, test_config: Config) -> None:
        records = UsageLoader(test_config).load()
        assert [r.message_id for r in records] == ["msg_001", "msg_002", "msg_003"]
        assert [r.total_tokens for r in records] == [850, 500, 2000]

    def test_record_fields(self, test_config: Config) -> None:
        first, second, third = UsageLoader(test_config).load()
        assert first.timestamp == datetime(2025, 6, 30, 14, 23, 45, 123000, tzinfo=UTC)
        assert first.request_id == "req_001"
        assert first.model == "claude-3-5-sonnet-20241022"
        assert first.cost == pytest.approx(0.01)
        assert first.cache_read_tokens == 500
        assert first.cache_creation_tokens == 200
        assert first.project == "/Users/test/myproject"
        assert second.cost == pytest.approx(300 / 1e6 * 15 + 200 / 1e6 * 75)
        assert third.project == "-Users-test-other"

    def test_invalid_json_is_logged_and_skipped(
        self, test_config: Config, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING):
            UsageLoader(test_config).load()
        assert "Invalid JSON" in caplog.text

    def test_corrupt_line_does_not_abort_load(
        self, test_config: Config, tmp_claude_dir: Path
    ) -> None:
        path = tmp_claude_dir / "projects" / "-Users-test-other" / "session-002.jsonl"
        with path.open("a", encoding="utf-8") as file:
            file.write(
                '\n{"timestamp": "2025-06-30T21:00:00Z", "usage": {"input_tokens": Infinity}}\n'
            )
        assert len(UsageLoader(test_config).load()) == 3

    def test_no_data_yields_empty_list(self, tmp_path: Path) -> None:
        assert UsageLoader(Config(claude_dirs=(tmp_path,))).load() == []

    def test_loaded_records_build_sessions(self, test_config: Config) -> None:
        sessions = build_sessions(UsageLoader(test_config).load(), QuotaPlan.PRO)
        assert [s.token_count for s in sessions] == [2000, 1350]
        assert sessions[1].category_usage == {"sonnet": 850, "opus": 500}
        assert sessions[0].start_time == datetime(2025, 6, 30, 20, tzinfo=UTC)


class TestParseUsageEntry:
    def _entry(self, **overrides: object) -> dict[str, object]:
        entry: dict[str, object] = {
            "timestamp": "2025-06-30T14:00:00Z",
            "requestId": "req",
            "message": {"id": "msg", "model": "claude-3-haiku", "usage": {"input_tokens": 5}},
        }
        entry.update(overrides)
        return entry

    def test_prefers_top_level_usage_and_model(self) -> None:
        record = parse_usage_entry(
            self._entry(usage={"output_tokens": 7}, model="claude-3-opus", costUSD=1.5)
        )
        assert record is not None
        assert (record.input_tokens, record.output_tokens) == (0, 7)
        assert record.model == "claude-3-opus"
        assert record.cost == 1.5

    def test_alternate_id_fields(self) -> None:
        record = parse_usage_entry(
            {
                "timestamp": "2025-06-30T14:00:00Z",
                "message_id": "m-1",
                "request_id": "r-1",
                "usage": {"input_tokens": 1},
            }
        )
        assert record is not None
        assert record.dedup_key == "m-1:r-1"

    def test_missing_ids_have_no_dedup_key(self) -> None:
        record = parse_usage_entry(self._entry(requestId=None))
        assert record is not None
        assert record.dedup_key is None

    @pytest.mark.parametrize(
        "overrides",
        [
            {"timestamp": None},
            {"timestamp": "yesterday"},
            {"message": {"id": "msg"}},
            {"message": {"usage": {"input_tokens": 0, "output_tokens": 0}}},
        ],
    )
    def test_entries_without_usable_data(self, overrides: dict[str, object]) -> None:
        assert parse_usage_entry(self._entry(**overrides)) is None

    def test_negative_usage_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            parse_usage_entry(self._entry(usage={"input_tokens": -5}))

    def test_file_skips_rejected_lines(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.jsonl"
        lines = [
            self._entry(usage={"input_tokens": -5}),
            self._entry(usage={"input_tokens": 3}),
            ["not", "an", "object"],
        ]
        path.write_text("\n".join(json.dumps(line) for line in lines))
        records = list(parse_usage_file(path))
        assert [r.input_tokens for r in records] == [3]

    def test_non_finite_numbers_do_not_abort_the_file(self, tmp_path: Path) -> None:
        path = tmp_path / "inf.jsonl"
        good = json.dumps(self._entry(usage={"input_tokens": 3}))
        lines = [
            good,
            '{"timestamp": "2025-06-30T14:00:00Z", "usage": {"input_tokens": Infinity}}',
            '{"timestamp": "2025-06-30T14:00:00Z", "usage": {"input_tokens": 1e400}}',
            '{"timestamp": "2025-06-30T14:00:00Z", "usage": {"input_tokens": "1e400"}}',
            '{"timestamp": "2025-06-30T14:00:00Z", "usage": {"input_tokens": 2}, "costUSD": NaN}',
            json.dumps(self._entry(usage={"input_tokens": 4})),
        ]
        path.write_text("\n".join(lines))
        records = list(parse_usage_file(path))
        assert [r.input_tokens for r in records] == [3, 2, 4]
        assert records[1].cost == pytest.approx(2 / 1e6 * 3.0)

    def test_huge_integers_are_rejected_not_raised(self, tmp_path: Path) -> None:
        path = tmp_path / "huge.jsonl"
        huge = '{"timestamp": "2025-06-30T14:00:00Z", "usage": {"input_tokens": 1' + "0" * 400 + "}}"
        path.write_text("\n".join([huge, json.dumps(self._entry(usage={"input_tokens": 4}))]))
        assert [r.input_tokens for r in parse_usage_file(path)] == [4]

    def test_unreadable_file_yields_nothing(self, tmp_path: Path) -> None:
        assert list(parse_usage_file(tmp_path / "missing.jsonl")) == []


def test_parse_timestamp_variants() -> None:
    assert parse_timestamp("2025-06-30T14:00:00Z") == datetime(2025, 6, 30, 14, tzinfo=UTC)
    assert parse_timestamp("2025-06-30T14:00:00") == datetime(2025, 6, 30, 14, tzinfo=UTC)
    parsed = parse_timestamp("2025-06-30T16:00:00+02:00")
    assert parsed is not None and parsed == datetime(2025, 6, 30, 14, tzinfo=UTC)
    assert parse_timestamp("") is None
    assert parse_timestamp(12345) is None
