"""Epsilon-greedy PDF generator.

Spreads ``epsilon`` uniformly over all actions and gives the remaining
``1 - epsilon`` to a single top action.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import numpy as np

from pdf_explore.buffers import as_range, check_bounds, write_values
from pdf_explore.config import resolve_dtype
from pdf_explore.generators.base import PdfGenerator
from pdf_explore.generators.registry import GeneratorRegistry
from pdf_explore.status import ExplorationStatus

if TYPE_CHECKING:
    from numpy.typing import DTypeLike

    from pdf_explore.buffers import PdfBuffer
    from pdf_explore.config import ExplorationConfig

logger = logging.getLogger("pdf_explore")


def generate_epsilon_greedy(
    epsilon: float,
    top_action: int,
    pdf: PdfBuffer,
    *,
    dtype: DTypeLike = np.float32,
) -> ExplorationStatus:
    """Fill *pdf* with an epsilon-greedy distribution.

    Every action gets ``epsilon / N``; the top action additionally gets
    ``1 - epsilon``. A *top_action* past the last action is clamped to the
    last action. *epsilon* is not range-checked.

    Args:
        epsilon: Total exploration mass.
        top_action: Index of the exploited action.
        pdf: Destination buffer of N actions, mutated in place.
        dtype: Working float dtype.

    Returns:
        ``OK``, ``BAD_RANGE`` if *pdf* is inverted, or ``EMPTY_PDF`` if N is 0.

    Raises:
        ValueError: If *top_action* is negative.
        IndexError: If *pdf* is a range reaching outside its buffer.
    """
    rng = as_range(pdf)
    if rng.is_inverted:
        return ExplorationStatus.BAD_RANGE

    num_actions = len(rng)
    if num_actions == 0:
        return ExplorationStatus.EMPTY_PDF
    if top_action < 0:
        raise ValueError(f"top_action must be non-negative, got {top_action}")
    check_bounds(rng)

    if top_action >= num_actions:
        logger.debug(
            "top_action %d out of range for %d actions, using %d",
            top_action,
            num_actions,
            num_actions - 1,
        )
        top_action = num_actions - 1

    ftype = np.dtype(dtype).type
    eps = ftype(epsilon)
    values = np.full(num_actions, eps / ftype(num_actions), dtype=dtype)
    values[top_action] += ftype(1.0) - eps

    write_values(rng, values)
    return ExplorationStatus.OK


@GeneratorRegistry.register("epsilon_greedy")
class EpsilonGreedyGenerator(PdfGenerator):
    """Epsilon-greedy generator; the signal is the top action index.

    Uses ``config.epsilon`` as the exploration mass.
    """

    def generate(
        self, signal: Any, pdf: PdfBuffer, config: ExplorationConfig
    ) -> ExplorationStatus:
        return generate_epsilon_greedy(
            config.epsilon,
            int(signal),
            pdf,
            dtype=resolve_dtype(config.precision),
        )
