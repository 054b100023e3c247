"""Data types for the diagnostic logging subsystem."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PdfRecord:
    """Immutable record of one pipeline call.

    Attributes:
        timestamp_ns: Wall-clock time of the call (nanoseconds since epoch).
        total_ms: Time spent generating and enforcing (milliseconds).
        generator: Name of the generator used.
        num_actions: Length of the PDF.
        enforced: True if the minimum probability floor was applied.
        min_prob: Floor mass in effect (0.0 when not enforced).
        top_action: Index of the most probable action (first on ties).
        top_prob: Probability of ``top_action``.
        min_entry: Smallest probability in the PDF.
        shannon_entropy: Shannon entropy of the PDF (nats).
        config_hash: 16-char SHA-256 prefix of the active config.
    """

    # Timing
    timestamp_ns: int
    total_ms: float

    # Generation
    generator: str
    num_actions: int
    enforced: bool
    min_prob: float

    # Resulting distribution
    top_action: int
    top_prob: float
    min_entry: float
    shannon_entropy: float

    # Config snapshot
    config_hash: str
