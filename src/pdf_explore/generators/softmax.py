"""Softmax PDF generator.

Converts continuous scores into a distribution with weights
``exp(lambda * (score - max_score))``. Shifting by the maximum keeps every
exponent <= 0 for lambda >= 0, so large scores cannot overflow.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import numpy as np

from pdf_explore.buffers import (
    as_range,
    check_bounds,
    is_inverted,
    read_input,
    sequential_sum,
    write_values,
)
from pdf_explore.config import resolve_dtype
from pdf_explore.generators.base import PdfGenerator
from pdf_explore.generators.registry import GeneratorRegistry
from pdf_explore.status import ExplorationStatus

if TYPE_CHECKING:
    from numpy.typing import DTypeLike

    from pdf_explore.buffers import NumericInput, PdfBuffer
    from pdf_explore.config import ExplorationConfig

logger = logging.getLogger("pdf_explore")


def generate_softmax(
    lambda_: float,
    scores: NumericInput,
    pdf: PdfBuffer,
    *,
    dtype: DTypeLike = np.float32,
) -> ExplorationStatus:
    """Fill *pdf* with the softmax of *scores*.

    Only the first ``min(M, N)`` positions are used when the score and PDF
    lengths differ; PDF positions past that overlap are set to exactly 0.
    ``lambda_ = 0`` gives a uniform distribution over the overlap.

    Args:
        lambda_: Inverse temperature.
        scores: M scores, read once.
        pdf: Destination buffer of N actions, mutated in place.
        dtype: Working float dtype.

    Returns:
        ``OK``, ``BAD_RANGE`` if *scores* or *pdf* is inverted, or
        ``EMPTY_PDF`` if the overlap is empty.

    Raises:
        IndexError: If a range reaches outside its buffer.
    """
    rng = as_range(pdf)
    if is_inverted(scores) or rng.is_inverted:
        return ExplorationStatus.BAD_RANGE

    values = read_input(scores, dtype)
    num_actions = len(rng)
    overlap = min(len(values), num_actions)
    if overlap == 0:
        return ExplorationStatus.EMPTY_PDF
    check_bounds(rng)

    if len(values) != num_actions:
        logger.debug(
            "softmax: %d scores for %d actions, zeroing %d trailing entries",
            len(values),
            num_actions,
            num_actions - overlap,
        )

    ftype = np.dtype(dtype).type
    values = values[:overlap]
    weights = np.exp(ftype(lambda_) * (values - values.max()))
    norm = sequential_sum(weights)

    out = np.zeros(num_actions, dtype=dtype)
    out[:overlap] = weights / norm

    write_values(rng, out)
    return ExplorationStatus.OK


@GeneratorRegistry.register("softmax")
class SoftmaxGenerator(PdfGenerator):
    """Softmax generator; the signal is the score sequence.

    Uses ``config.softmax_lambda`` as the inverse temperature.
    """

    def generate(
        self, signal: Any, pdf: PdfBuffer, config: ExplorationConfig
    ) -> ExplorationStatus:
        return generate_softmax(
            config.softmax_lambda,
            signal,
            pdf,
            dtype=resolve_dtype(config.precision),
        )
