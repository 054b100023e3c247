"""Exploration pipeline: generator -> optional minimum probability floor.

Runs the configured generator on a caller-owned buffer, optionally applies
the minimum probability enforcer, turns failure statuses into exceptions and
records a diagnostic entry per call::

    pipeline = ExplorationPipeline(ExplorationConfig(generator="softmax"))
    result = pipeline.compute([0.2, 1.3, -0.4], num_actions=3)
    result.pdf  # array of 3 probabilities summing to 1

Drawing an action from the resulting PDF is left to the caller.
"""

from __future__ import annotations

import hashlib
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

from pdf_explore.buffers import as_range, check_bounds, read_values
from pdf_explore.config import ExplorationConfig, resolve_config, resolve_dtype
from pdf_explore.enforcement import MinimumProbabilityEnforcer
from pdf_explore.generators import GeneratorRegistry
from pdf_explore.logging.logger import ExplorationLogger, compute_shannon_entropy
from pdf_explore.logging.types import PdfRecord
from pdf_explore.status import ExplorationStatus, raise_for_status

if TYPE_CHECKING:
    from pdf_explore.buffers import PdfBuffer
    from pdf_explore.generators.base import PdfGenerator

logger = logging.getLogger("pdf_explore")


def _config_hash(config: ExplorationConfig) -> str:
    """Return the first 16 hex characters of the SHA-256 of the config dump."""
    raw = config.model_dump_json().encode("utf-8")
    return hashlib.sha256(raw).hexdigest()[:16]


@dataclass(frozen=True, slots=True)
class PdfResult:
    """Result of one pipeline call.

    Attributes:
        pdf: Float64 copy of the final distribution.
        generator: Name of the generator that produced it.
        enforced: True if the minimum probability floor was applied.
        diagnostics: Additional info (status, config hash, timing).
    """

    pdf: np.ndarray
    generator: str
    enforced: bool
    diagnostics: dict[str, Any]


class ExplorationPipeline:
    """Builds exploration PDFs from configuration.

    The default generator and config hash are computed once; calls with
    per-call overrides resolve a fresh config and build what they need from
    it. The working precision is fixed for the pipeline's lifetime.
    """

    def __init__(self, config: ExplorationConfig | None = None) -> None:
        """Initialize the pipeline.

        Args:
            config: Default configuration. Loaded from the environment when
                ``None``.

        Raises:
            ConfigValidationError: If ``config.precision`` is unsupported.
            KeyError: If ``config.generator`` is not registered.
        """
        self._default_config = config if config is not None else ExplorationConfig()
        resolve_dtype(self._default_config.precision)
        self._default_generator = GeneratorRegistry.build(self._default_config)
        self._default_config_hash = _config_hash(self._default_config)
        self._logger = ExplorationLogger(self._default_config)

        logger.info(
            "ExplorationPipeline initialized: generator=%s, enforce_minimum=%s, precision=%s",
            self._default_config.generator,
            self._default_config.enforce_minimum,
            self._default_config.precision,
        )

    @property
    def config(self) -> ExplorationConfig:
        """Default configuration of this pipeline."""
        return self._default_config

    @property
    def diagnostics(self) -> ExplorationLogger:
        """Logger holding the diagnostic records of this pipeline."""
        return self._logger

    def compute(
        self,
        signal: Any,
        num_actions: int,
        overrides: dict[str, Any] | None = None,
    ) -> PdfResult:
        """Build a PDF over *num_actions* actions in a fresh float64 buffer.

        See ``fill()`` for arguments and errors.
        """
        return self.fill(signal, np.zeros(num_actions, dtype=np.float64), overrides)

    def fill(
        self,
        signal: Any,
        pdf: PdfBuffer,
        overrides: dict[str, Any] | None = None,
    ) -> PdfResult:
        """Build a PDF from *signal* in the caller's buffer.

        Args:
            signal: Generator input: top action index (``epsilon_greedy``),
                scores (``softmax``) or votes (``bag``).
            pdf: Destination buffer, mutated in place.
            overrides: Per-call config overrides with the ``explore_`` prefix.

        Returns:
            PdfResult with a copy of the final distribution.

        Raises:
            BadRangeError: If a buffer range is inverted.
            EmptyPdfError: If there are no actions.
            ConfigValidationError: If *overrides* are invalid.
        """
        timestamp_ns = time.time_ns()
        start = time.perf_counter()

        config = resolve_config(self._default_config, overrides)
        generator, config_hash = self._components_for(config)

        status = generator.generate(signal, pdf, config)
        raise_for_status(status, config.generator)

        if config.enforce_minimum:
            status = MinimumProbabilityEnforcer(config).enforce(pdf)
            raise_for_status(status, "enforce_minimum_probability")

        total_ms = (time.perf_counter() - start) * 1000.0

        rng = as_range(pdf)
        check_bounds(rng)
        values = read_values(rng, np.float64)

        record = self._make_record(values, config, config_hash, timestamp_ns, total_ms)
        self._logger.log_pdf(record, config)

        return PdfResult(
            pdf=values,
            generator=config.generator,
            enforced=config.enforce_minimum,
            diagnostics={
                "status": ExplorationStatus.OK,
                "config_hash": config_hash,
                "total_ms": total_ms,
            },
        )

    def _components_for(self, config: ExplorationConfig) -> tuple[PdfGenerator, str]:
        """Return the generator and config hash for a resolved config."""
        if config is self._default_config:
            return self._default_generator, self._default_config_hash
        return GeneratorRegistry.build(config), _config_hash(config)

    @staticmethod
    def _make_record(
        values: np.ndarray,
        config: ExplorationConfig,
        config_hash: str,
        timestamp_ns: int,
        total_ms: float,
    ) -> PdfRecord:
        top_action = int(np.argmax(values))
        return PdfRecord(
            timestamp_ns=timestamp_ns,
            total_ms=total_ms,
            generator=config.generator,
            num_actions=len(values),
            enforced=config.enforce_minimum,
            min_prob=config.min_prob if config.enforce_minimum else 0.0,
            top_action=top_action,
            top_prob=float(values[top_action]),
            min_entry=float(values.min()),
            shannon_entropy=compute_shannon_entropy(values),
            config_hash=config_hash,
        )
