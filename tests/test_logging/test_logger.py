"""Tests for ExplorationLogger, PdfRecord and compute_shannon_entropy."""

from __future__ import annotations

import logging
import math

import numpy as np
import pytest

from pdf_explore.config import ExplorationConfig
from pdf_explore.logging.logger import ExplorationLogger, compute_shannon_entropy
from pdf_explore.logging.types import PdfRecord


def _make_record(**overrides: object) -> PdfRecord:
    """Create a PdfRecord with sensible defaults, overridable."""
    defaults: dict[str, object] = {
        "timestamp_ns": 1000000000,
        "total_ms": 0.25,
        "generator": "softmax",
        "num_actions": 4,
        "enforced": False,
        "min_prob": 0.0,
        "top_action": 2,
        "top_prob": 0.7,
        "min_entry": 0.05,
        "shannon_entropy": 0.9,
        "config_hash": "abcdef1234567890",
    }
    defaults.update(overrides)
    return PdfRecord(**defaults)  # type: ignore[arg-type]


def _make_logger(log_level: str, diagnostic_mode: bool = False) -> ExplorationLogger:
    config = ExplorationConfig(
        _env_file=None,
        log_level=log_level,
        diagnostic_mode=diagnostic_mode,  # type: ignore[call-arg]
    )
    return ExplorationLogger(config)


class TestPdfRecord:
    def test_frozen(self) -> None:
        record = _make_record()
        with pytest.raises(AttributeError):
            record.top_action = 0  # type: ignore[misc]

    def test_slots(self) -> None:
        assert hasattr(_make_record(), "__slots__")


class TestExplorationLogger:
    def test_log_level_none_no_output(self, caplog: pytest.LogCaptureFixture) -> None:
        log = _make_logger("none")
        with caplog.at_level(logging.DEBUG, logger="pdf_explore"):
            log.log_pdf(_make_record())
        assert len(caplog.records) == 0

    def test_log_level_summary_output(self, caplog: pytest.LogCaptureFixture) -> None:
        log = _make_logger("summary")
        with caplog.at_level(logging.DEBUG, logger="pdf_explore"):
            log.log_pdf(_make_record())
        assert len(caplog.records) == 1
        msg = caplog.records[0].message
        assert "generator=softmax" in msg
        assert "top=2" in msg
        assert "p=0.7000" in msg
        assert "FLOOR" not in msg

    def test_summary_floor_flag(self, caplog: pytest.LogCaptureFixture) -> None:
        log = _make_logger("summary")
        with caplog.at_level(logging.DEBUG, logger="pdf_explore"):
            log.log_pdf(_make_record(enforced=True, min_prob=0.2))
        assert "[FLOOR 0.2]" in caplog.records[0].message

    def test_log_level_full_json(self, caplog: pytest.LogCaptureFixture) -> None:
        log = _make_logger("full")
        with caplog.at_level(logging.DEBUG, logger="pdf_explore"):
            log.log_pdf(_make_record())
        msg = caplog.records[0].message
        assert "pdf_record:" in msg
        assert '"top_action": 2' in msg

    def test_per_call_config_takes_precedence(self, caplog: pytest.LogCaptureFixture) -> None:
        log = _make_logger("summary")
        quiet = ExplorationConfig(
            _env_file=None,
            log_level="none",
            diagnostic_mode=True,  # type: ignore[call-arg]
        )
        with caplog.at_level(logging.DEBUG, logger="pdf_explore"):
            log.log_pdf(_make_record(), quiet)
        assert len(caplog.records) == 0
        assert len(log.get_diagnostic_data()) == 1

    def test_diagnostic_mode_stores_records(self) -> None:
        log = _make_logger("none", diagnostic_mode=True)
        for action in range(3):
            log.log_pdf(_make_record(top_action=action))
        data = log.get_diagnostic_data()
        assert [r.top_action for r in data] == [0, 1, 2]

    def test_diagnostic_data_is_copy(self) -> None:
        log = _make_logger("none", diagnostic_mode=True)
        log.log_pdf(_make_record())
        log.get_diagnostic_data().clear()
        assert len(log.get_diagnostic_data()) == 1

    def test_no_storage_without_diagnostic_mode(self) -> None:
        log = _make_logger("none")
        log.log_pdf(_make_record())
        assert log.get_diagnostic_data() == []
        assert log.get_summary_stats() == {}

    def test_summary_stats(self) -> None:
        log = _make_logger("none", diagnostic_mode=True)
        log.log_pdf(_make_record(top_prob=0.6, total_ms=1.0, min_entry=0.1))
        log.log_pdf(_make_record(top_prob=0.8, total_ms=3.0, enforced=True, generator="bag"))
        stats = log.get_summary_stats()
        assert stats["total_calls"] == 2
        assert stats["mean_top_prob"] == pytest.approx(0.7)
        assert stats["max_total_ms"] == 3.0
        assert stats["min_entry"] == 0.05
        assert stats["enforced_rate"] == 0.5
        assert stats["generators"] == {"softmax": 1, "bag": 1}


class TestShannonEntropy:
    def test_uniform(self) -> None:
        assert compute_shannon_entropy(np.full(4, 0.25)) == pytest.approx(math.log(4))

    def test_degenerate(self) -> None:
        assert compute_shannon_entropy(np.array([0.0, 1.0, 0.0])) == 0.0

    def test_accepts_lists(self) -> None:
        assert compute_shannon_entropy([0.5, 0.5]) == pytest.approx(math.log(2))
