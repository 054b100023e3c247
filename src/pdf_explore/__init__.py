"""pdf-explore: probability distributions for exploration over discrete actions.

Generators build a PDF over N actions from an exploration signal
(epsilon-greedy, softmax, ensemble votes), and the minimum probability
enforcer guarantees every eligible action a floor probability. Drawing an
action from the PDF is left to the caller.
"""

from __future__ import annotations

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("pdf-explore")
except PackageNotFoundError:
    __version__ = "0.0.0"

from pdf_explore.buffers import BufferRange, MutableNumericSequence
from pdf_explore.config import ExplorationConfig, resolve_config, validate_overrides
from pdf_explore.enforcement import MinimumProbabilityEnforcer, enforce_minimum_probability
from pdf_explore.exceptions import (
    BadRangeError,
    ConfigValidationError,
    EmptyPdfError,
    ExplorationError,
)
from pdf_explore.generators import (
    BagGenerator,
    EpsilonGreedyGenerator,
    GeneratorRegistry,
    PdfGenerator,
    SoftmaxGenerator,
    generate_bag,
    generate_epsilon_greedy,
    generate_softmax,
)
from pdf_explore.pipeline import ExplorationPipeline, PdfResult
from pdf_explore.status import ExplorationStatus, raise_for_status

__all__ = [
    "BadRangeError",
    "BagGenerator",
    "BufferRange",
    "ConfigValidationError",
    "EmptyPdfError",
    "EpsilonGreedyGenerator",
    "ExplorationConfig",
    "ExplorationError",
    "ExplorationPipeline",
    "ExplorationStatus",
    "GeneratorRegistry",
    "MinimumProbabilityEnforcer",
    "MutableNumericSequence",
    "PdfGenerator",
    "PdfResult",
    "SoftmaxGenerator",
    "__version__",
    "enforce_minimum_probability",
    "generate_bag",
    "generate_epsilon_greedy",
    "generate_softmax",
    "raise_for_status",
    "resolve_config",
    "validate_overrides",
]
