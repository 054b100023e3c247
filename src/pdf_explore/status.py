"""Status codes returned by the core PDF operations."""

from __future__ import annotations

from enum import IntEnum

from pdf_explore.exceptions import BadRangeError, EmptyPdfError


class ExplorationStatus(IntEnum):
    """Outcome of a generator or enforcement call.

    The numeric values match the codes used by reference exploration
    libraries, so statuses can be exchanged with them as plain integers.
    """

    OK = 0
    BAD_RANGE = 1
    EMPTY_PDF = 2


def raise_for_status(status: ExplorationStatus, operation: str) -> None:
    """Raise the exception matching a non-OK *status*.

    Args:
        status: Status returned by a core operation.
        operation: Name of the operation, used in the error message.

    Raises:
        BadRangeError: If *status* is ``BAD_RANGE``.
        EmptyPdfError: If *status* is ``EMPTY_PDF``.
    """
    if status == ExplorationStatus.BAD_RANGE:
        raise BadRangeError(f"{operation}: buffer range ends before it starts", status)
    if status == ExplorationStatus.EMPTY_PDF:
        raise EmptyPdfError(f"{operation}: no actions to build a distribution over", status)
