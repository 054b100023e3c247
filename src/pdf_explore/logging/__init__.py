"""Diagnostic logging subsystem for pdf-explore.

Provides immutable per-call PDF records and a configurable logger that
supports none/summary/full verbosity and in-memory diagnostic mode.
"""

from pdf_explore.logging.logger import ExplorationLogger, compute_shannon_entropy
from pdf_explore.logging.types import PdfRecord

__all__ = [
    "ExplorationLogger",
    "PdfRecord",
    "compute_shannon_entropy",
]
