"""Bag (ensemble vote) PDF generator.

Each action's probability is its share of the votes cast by an ensemble of
policies. Votes are summed exactly before any division.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import numpy as np

from pdf_explore.buffers import as_range, check_bounds, read_input, write_values
from pdf_explore.config import resolve_dtype
from pdf_explore.generators.base import PdfGenerator
from pdf_explore.generators.registry import GeneratorRegistry
from pdf_explore.status import ExplorationStatus

if TYPE_CHECKING:
    from numpy.typing import DTypeLike

    from pdf_explore.buffers import NumericInput, PdfBuffer
    from pdf_explore.config import ExplorationConfig

logger = logging.getLogger("pdf_explore")


def generate_bag(
    votes: NumericInput,
    pdf: PdfBuffer,
    *,
    dtype: DTypeLike = np.float32,
) -> ExplorationStatus:
    """Fill *pdf* with the vote shares in *votes*.

    With no votes at all, action 0 gets probability 1 and every other
    action 0. Otherwise ``pdf[i] = votes[i] / total`` for the first
    ``min(M, N)`` positions; PDF positions past that are left as they were.

    Args:
        votes: M non-negative vote counts, read once.
        pdf: Destination buffer of N actions, mutated in place.
        dtype: Working float dtype.

    Returns:
        ``OK``, ``BAD_RANGE`` if *pdf* is inverted, or ``EMPTY_PDF`` if N is 0.

    Raises:
        IndexError: If a range reaches outside its buffer.
    """
    rng = as_range(pdf)
    if rng.is_inverted:
        return ExplorationStatus.BAD_RANGE

    num_actions = len(rng)
    if num_actions == 0:
        return ExplorationStatus.EMPTY_PDF
    check_bounds(rng)

    counts = read_input(votes, np.int64)
    total = int(counts.sum())

    if total == 0:
        logger.debug("bag: no votes cast, defaulting to action 0")
        out = np.zeros(num_actions, dtype=dtype)
        out[0] = 1.0
        write_values(rng, out)
        return ExplorationStatus.OK

    ftype = np.dtype(dtype).type
    overlap = min(len(counts), num_actions)
    shares = counts[:overlap].astype(dtype) / ftype(total)

    write_values(rng, shares)
    return ExplorationStatus.OK


@GeneratorRegistry.register("bag")
class BagGenerator(PdfGenerator):
    """Bag generator; the signal is the per-action vote counts."""

    def generate(
        self, signal: Any, pdf: PdfBuffer, config: ExplorationConfig
    ) -> ExplorationStatus:
        return generate_bag(signal, pdf, dtype=resolve_dtype(config.precision))
