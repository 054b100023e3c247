"""PDF generator subsystem for pdf-explore.

Builds a distribution over actions from an exploration signal. Supports
epsilon-greedy, softmax, and ensemble vote ("bag") generators.
"""

from pdf_explore.generators.bag import BagGenerator, generate_bag
from pdf_explore.generators.base import PdfGenerator
from pdf_explore.generators.epsilon_greedy import EpsilonGreedyGenerator, generate_epsilon_greedy
from pdf_explore.generators.registry import GeneratorRegistry
from pdf_explore.generators.softmax import SoftmaxGenerator, generate_softmax

__all__ = [
    "BagGenerator",
    "EpsilonGreedyGenerator",
    "GeneratorRegistry",
    "PdfGenerator",
    "SoftmaxGenerator",
    "generate_bag",
    "generate_epsilon_greedy",
    "generate_softmax",
]
