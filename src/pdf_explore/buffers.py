"""Buffer capabilities shared by the generators and the enforcer.

A PDF is any indexable, mutable, sized numeric sequence (``list``,
``array.array``, ``numpy.ndarray``) or a ``BufferRange`` view of positions
``[first, last)`` of one. Scores and votes are read-only and may be any
iterable of numbers; they are consumed in a single pass.

Values are copied into a numpy working array, transformed there, and written
back element by element (or by slice assignment for ndarrays), so the caller's
container type and length never change.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Protocol, Union, runtime_checkable

import numpy as np
from numpy.typing import DTypeLike


@runtime_checkable
class MutableNumericSequence(Protocol):
    """Indexable, mutable, known-length numeric sequence."""

    def __len__(self) -> int: ...

    def __getitem__(self, index: Any) -> Any: ...

    def __setitem__(self, index: Any, value: Any) -> None: ...


@dataclass(frozen=True, slots=True)
class BufferRange:
    """View of positions ``[first, last)`` of a buffer.

    ``last=None`` means the end of the buffer. A range with ``last < first``
    is inverted; operations report it as ``BAD_RANGE`` rather than raising.

    Attributes:
        buffer: Underlying sequence. Must be mutable when used as a PDF.
        first: Index of the first position in the view.
        last: One past the last position, or ``None`` for ``len(buffer)``.
    """

    buffer: Any
    first: int = 0
    last: int | None = None

    @property
    def stop(self) -> int:
        """Resolved end position."""
        return len(self.buffer) if self.last is None else self.last

    @property
    def is_inverted(self) -> bool:
        """True if the range ends before it starts."""
        return self.stop < self.first

    def __len__(self) -> int:
        return max(0, self.stop - self.first)


PdfBuffer = Union[MutableNumericSequence, BufferRange]
NumericInput = Union[Iterable[float], BufferRange]


def as_range(pdf: PdfBuffer) -> BufferRange:
    """Wrap a plain sequence in a whole-buffer ``BufferRange``.

    Args:
        pdf: A sequence or an existing range.

    Returns:
        *pdf* itself if it is already a range, otherwise a range over all of it.
    """
    if isinstance(pdf, BufferRange):
        return pdf
    return BufferRange(pdf)


def is_inverted(source: Any) -> bool:
    """Return True if *source* is a ``BufferRange`` that ends before it starts."""
    return isinstance(source, BufferRange) and source.is_inverted


def check_bounds(rng: BufferRange) -> None:
    """Ensure a non-inverted range lies inside its buffer.

    Raises:
        IndexError: If the range starts before 0 or ends past the buffer.
    """
    size = len(rng.buffer)
    if rng.first < 0 or rng.stop > size:
        raise IndexError(
            f"Range [{rng.first}, {rng.stop}) is outside a buffer of length {size}"
        )


def read_values(rng: BufferRange, dtype: DTypeLike) -> np.ndarray:
    """Copy the values of *rng* into a new 1-D array of *dtype*.

    Args:
        rng: A non-inverted, in-bounds range.
        dtype: Working dtype of the returned array.

    Returns:
        A fresh array; mutating it never touches the caller's buffer.
    """
    buffer = rng.buffer
    if isinstance(buffer, np.ndarray):
        return np.array(buffer[rng.first : rng.stop], dtype=dtype)
    return np.array([buffer[i] for i in range(rng.first, rng.stop)], dtype=dtype)


def write_values(rng: BufferRange, values: np.ndarray, offset: int = 0) -> None:
    """Write *values* into *rng* starting *offset* positions past ``rng.first``.

    Args:
        rng: Destination range.
        values: 1-D array of values to store.
        offset: Position within the range of the first written value.
    """
    start = rng.first + offset
    buffer = rng.buffer
    if isinstance(buffer, np.ndarray):
        buffer[start : start + len(values)] = values
        return
    for i, value in enumerate(values.tolist()):
        buffer[start + i] = value


def write_masked(rng: BufferRange, values: np.ndarray, mask: np.ndarray) -> None:
    """Write only the positions of *values* selected by *mask* into *rng*.

    Args:
        rng: Destination range.
        values: 1-D array covering the whole range.
        mask: Boolean array of the same length; False positions are not written.
    """
    buffer = rng.buffer
    if isinstance(buffer, np.ndarray):
        view = buffer[rng.first : rng.stop]
        view[mask] = values[mask]
        return
    for i in np.flatnonzero(mask).tolist():
        buffer[rng.first + i] = values[i].item()


def read_input(source: NumericInput, dtype: DTypeLike) -> np.ndarray:
    """Materialize a read-only input (scores or votes) as a 1-D array.

    Args:
        source: A ``BufferRange`` (must not be inverted), an ndarray, or any
            iterable of numbers. Iterables are consumed once.
        dtype: Dtype of the returned array.

    Returns:
        A 1-D array holding the input values in order.
    """
    if isinstance(source, BufferRange):
        check_bounds(source)
        return read_values(source, dtype)
    if isinstance(source, np.ndarray):
        return np.array(source, dtype=dtype).reshape(-1)
    return np.fromiter(source, dtype=dtype)


def sequential_sum(values: np.ndarray) -> np.floating:
    """Left-to-right sum in the array's own dtype.

    ``ndarray.sum`` uses pairwise summation, which rounds differently from a
    running accumulator once there are more than a handful of terms.
    """
    if len(values) == 0:
        return values.dtype.type(0.0)
    return values.cumsum(dtype=values.dtype)[-1]
