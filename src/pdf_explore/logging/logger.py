"""Diagnostic logger for pipeline calls.

Uses the standard ``logging`` module with the ``"pdf_explore"`` logger.
Supports three verbosity levels and an in-memory diagnostic mode for
post-hoc analysis.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:
    from pdf_explore.config import ExplorationConfig
    from pdf_explore.logging.types import PdfRecord

logger = logging.getLogger("pdf_explore")


def compute_shannon_entropy(pdf: np.ndarray) -> float:
    """Compute Shannon entropy H = -sum(p_i * ln(p_i)) of a distribution.

    Zero entries contribute nothing. Returns 0.0 for a distribution with a
    single non-zero entry.

    Args:
        pdf: 1-D probability array.

    Returns:
        Shannon entropy in nats.
    """
    probs = np.asarray(pdf, dtype=np.float64)
    positive = probs[probs > 0]
    entropy = -float(np.sum(positive * np.log(positive)))
    # Guard against floating-point artifacts producing tiny negatives.
    return max(0.0, entropy)


class ExplorationLogger:
    """Per-call diagnostic logger.

    Log levels:
        ``"none"``: No logging output. Records are still stored if
        ``diagnostic_mode=True``.

        ``"summary"``: One line per call with generator, size, top action,
        entropy and timing.

        ``"full"``: Full JSON dump of all record fields.
    """

    def __init__(self, config: ExplorationConfig) -> None:
        self._log_level = config.log_level
        self._diagnostic_mode = config.diagnostic_mode
        self._records: list[PdfRecord] = []

    def log_pdf(self, record: PdfRecord, config: ExplorationConfig | None = None) -> None:
        """Log a single pipeline call.

        Args:
            record: Immutable record of the call.
            config: Per-call config whose ``log_level`` and ``diagnostic_mode``
                take precedence over the ones given at construction.
        """
        log_level = self._log_level if config is None else config.log_level
        diagnostic_mode = self._diagnostic_mode if config is None else config.diagnostic_mode

        if diagnostic_mode:
            self._records.append(record)

        if log_level == "none":
            return

        if log_level == "summary":
            logger.info(
                "generator=%s actions=%d top=%d p=%.4f min=%.4f entropy=%.3f%s total=%.3fms",
                record.generator,
                record.num_actions,
                record.top_action,
                record.top_prob,
                record.min_entry,
                record.shannon_entropy,
                f" [FLOOR {record.min_prob:g}]" if record.enforced else "",
                record.total_ms,
            )
        elif log_level == "full":
            logger.info("pdf_record: %s", json.dumps(asdict(record), default=str))

    def get_diagnostic_data(self) -> list[PdfRecord]:
        """Return all stored records (requires ``diagnostic_mode=True``)."""
        return list(self._records)

    def get_summary_stats(self) -> dict[str, Any]:
        """Compute summary statistics over all stored records.

        Returns:
            Dictionary with aggregate stats, or empty dict if no records.
        """
        if not self._records:
            return {}

        n = len(self._records)
        entropies = [r.shannon_entropy for r in self._records]
        top_probs = [r.top_prob for r in self._records]
        total_times = [r.total_ms for r in self._records]
        enforced_count = sum(1 for r in self._records if r.enforced)

        generators: dict[str, int] = {}
        for r in self._records:
            generators[r.generator] = generators.get(r.generator, 0) + 1

        return {
            "total_calls": n,
            "mean_entropy": sum(entropies) / n,
            "mean_top_prob": sum(top_probs) / n,
            "min_entry": min(r.min_entry for r in self._records),
            "mean_total_ms": sum(total_times) / n,
            "max_total_ms": max(total_times),
            "enforced_count": enforced_count,
            "enforced_rate": enforced_count / n,
            "generators": generators,
        }
