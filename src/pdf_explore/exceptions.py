"""Exception hierarchy for pdf-explore.

The core operations report failures as ``ExplorationStatus`` codes. These
exceptions are raised at the orchestration boundary (the pipeline and
``raise_for_status``), and all derive from ExplorationError so callers can
catch them broadly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pdf_explore.status import ExplorationStatus


class ExplorationError(Exception):
    """Base exception for all pdf-explore errors."""


class _StatusError(ExplorationError):
    """An error that corresponds to a non-OK ExplorationStatus code."""

    def __init__(self, message: str, status: ExplorationStatus) -> None:
        super().__init__(message)
        self.status = status


class BadRangeError(_StatusError):
    """A buffer range ends before it starts.

    Raised when an input or output ``BufferRange`` is inverted
    (``last < first``).
    """


class EmptyPdfError(_StatusError):
    """There are no actions to build a distribution over.

    Raised when the PDF range (or, for softmax, the overlap of scores and
    PDF) has zero length.
    """


class ConfigValidationError(ExplorationError):
    """Configuration field validation failed.

    Raised when per-call overrides contain unknown keys, attempt to override
    non-overridable fields, or name an unsupported precision.
    """
