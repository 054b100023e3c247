"""Base class for PDF generators.

A generator turns one exploration signal (a top action, a score sequence,
or a vote sequence) into a probability distribution written into a
caller-owned buffer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pdf_explore.buffers import PdfBuffer
    from pdf_explore.config import ExplorationConfig
    from pdf_explore.status import ExplorationStatus


class PdfGenerator(ABC):
    """Abstract base class for PDF generators.

    Implementations are stateless: every parameter comes from the signal
    and the config passed to ``generate()``, so one instance can serve any
    number of calls.
    """

    @abstractmethod
    def generate(
        self, signal: Any, pdf: PdfBuffer, config: ExplorationConfig
    ) -> ExplorationStatus:
        """Write a distribution derived from *signal* into *pdf*.

        Args:
            signal: Generator-specific input (see each implementation).
            pdf: Destination buffer, mutated in place.
            config: Active configuration for this call.

        Returns:
            ``ExplorationStatus.OK`` on success, otherwise the failure code.
            On failure the contents of *pdf* are undefined.
        """
