"""Minimum probability enforcement.

Post-processes an existing PDF so that every eligible action keeps at least
``min_prob / N`` probability, taking the mass from the actions above that
floor. An action is eligible if its probability is positive, or exactly zero
when ``update_zero_elements`` is set.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from pdf_explore.buffers import (
    as_range,
    check_bounds,
    read_values,
    sequential_sum,
    write_masked,
)
from pdf_explore.config import resolve_dtype
from pdf_explore.status import ExplorationStatus

if TYPE_CHECKING:
    from numpy.typing import DTypeLike

    from pdf_explore.buffers import PdfBuffer
    from pdf_explore.config import ExplorationConfig

logger = logging.getLogger("pdf_explore")

# min_prob above this means uniform exploration; touched mass above it means
# the floor over-allocated the probability budget.
_UNIFORM_THRESHOLD = 0.999



def _eligible(native: np.ndarray, update_zero_elements: bool) -> np.ndarray:
    """Mask of entries allowed to receive floor mass (exact ``== 0`` test)."""
    eligible = native > 0
    if update_zero_elements:
        eligible |= native == 0
    return eligible


def _spread_uniformly(
    values: np.ndarray, native: np.ndarray, update_zero_elements: bool
) -> np.ndarray:
    """Give every eligible entry ``1 / support_size``.

    Returns:
        Mask of the entries that were written.
    """
    ftype = values.dtype.type
    if update_zero_elements:
        support_size = len(values)
        targets = np.ones(len(values), dtype=bool)
    else:
        support_size = len(values) - int(np.count_nonzero(native == 0))
        targets = native > 0

    if support_size == 0:
        return np.zeros(len(values), dtype=bool)

    logger.debug("enforce: uniform exploration over %d actions", support_size)
    values[targets] = ftype(1.0) / ftype(support_size)
    return targets


def _reapply_floor(
    values: np.ndarray, native: np.ndarray, floor: np.floating, update_zero_elements: bool
) -> np.ndarray:
    """Raise every eligible entry at or below *floor* to *floor*.

    Returns:
        Mask of the entries that were raised.
    """
    raised = _eligible(native, update_zero_elements) & (native <= float(floor))
    values[raised] = floor
    native[raised] = floor
    return raised


def _raise_to_floor(
    values: np.ndarray,
    floor: np.floating,
    update_zero_elements: bool,
    native: np.ndarray | None = None,
) -> np.ndarray:
    """Apply *floor* and renormalize the remaining mass.

    Args:
        values: Working copy of the PDF, updated in place.
        floor: Per-action floor in the working dtype.
        update_zero_elements: Whether exactly-zero entries are eligible.
        native: The caller's values at their own precision, used for the
            comparisons, updated in place. Defaults to *values*.

    Returns:
        Mask of the entries that were written.
    """
    if native is None:
        native = values
    ftype = values.dtype.type
    touched = _eligible(native, update_zero_elements) & (native <= float(floor))
    above = native > float(floor)
    num_touched = int(np.count_nonzero(touched))

    untouched_mass = sequential_sum(values[~touched])
    touched_mass = sequential_sum(np.full(num_touched, floor, dtype=values.dtype))
    values[touched] = floor
    native[touched] = floor

    if not touched_mass > 0:
        return touched

    if float(touched_mass) > _UNIFORM_THRESHOLD:
        # The floor alone overflows the budget; share what is left instead.
        corrected = (ftype(1.0) - untouched_mass) / ftype(num_touched)
        logger.debug(
            "enforce: floor over-allocated (%.6f), corrected to %.6f",
            float(touched_mass),
            float(corrected),
        )
        return touched | _reapply_floor(values, native, corrected, update_zero_elements)

    if not untouched_mass > 0:
        return touched

    ratio = (ftype(1.0) - touched_mass) / untouched_mass
    values[above] *= ratio
    return touched | above


def enforce_minimum_probability(
    min_prob: float,
    update_zero_elements: bool,
    pdf: PdfBuffer,
    *,
    dtype: DTypeLike = np.float32,
) -> ExplorationStatus:
    """Guarantee every eligible action at least ``min_prob / N`` probability.

    If ``min_prob > 0.999`` the eligible actions are set to a uniform
    distribution over the support (all N actions when
    *update_zero_elements*, otherwise the non-zero ones). Otherwise eligible
    entries at or below the floor are raised to it and the entries above the
    floor are scaled down so the total stays 1. A PDF that already satisfies
    the floor is left as it is.

    Args:
        min_prob: Total floor mass, divided evenly over the N actions.
        update_zero_elements: Whether exactly-zero entries are eligible.
        pdf: Buffer of N actions, mutated in place.
        dtype: Working float dtype.

    Returns:
        ``OK``, ``BAD_RANGE`` if *pdf* is inverted, or ``EMPTY_PDF`` if N is 0.

    Raises:
        IndexError: If *pdf* is a range reaching outside its buffer.
    """
    rng = as_range(pdf)
    if rng.is_inverted:
        return ExplorationStatus.BAD_RANGE

    num_actions = len(rng)
    if num_actions == 0:
        return ExplorationStatus.EMPTY_PDF
    check_bounds(rng)

    ftype = np.dtype(dtype).type
    min_prob_t = ftype(min_prob)
    native = read_values(rng, np.float64)
    values = native.astype(dtype)

    if float(min_prob_t) > _UNIFORM_THRESHOLD:
        written = _spread_uniformly(values, native, update_zero_elements)
    else:
        floor = min_prob_t / ftype(num_actions)
        written = _raise_to_floor(values, floor, update_zero_elements, native)

    write_masked(rng, values, written)
    return ExplorationStatus.OK


class MinimumProbabilityEnforcer:
    """Applies ``enforce_minimum_probability`` with parameters from config.

    Reads ``min_prob``, ``update_zero_elements`` and ``precision`` once at
    construction.
    """

    def __init__(self, config: ExplorationConfig) -> None:
        self._min_prob = config.min_prob
        self._update_zero_elements = config.update_zero_elements
        self._dtype = resolve_dtype(config.precision)

    @property
    def min_prob(self) -> float:
        return self._min_prob

    def enforce(self, pdf: PdfBuffer) -> ExplorationStatus:
        """Enforce the configured floor on *pdf* in place."""
        return enforce_minimum_probability(
            self._min_prob,
            self._update_zero_elements,
            pdf,
            dtype=self._dtype,
        )
