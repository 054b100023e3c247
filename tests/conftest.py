"""Shared pytest fixtures for pdf-explore tests.

Provides configuration objects isolated from the environment and a few
reusable score and PDF arrays.
"""

from __future__ import annotations

import numpy as np
import pytest

from pdf_explore.config import ExplorationConfig


@pytest.fixture()
def config() -> ExplorationConfig:
    """Default config, ignoring any .env file."""
    return ExplorationConfig(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture()
def silent_config() -> ExplorationConfig:
    """Config with no log output for noise-free tests."""
    return ExplorationConfig(_env_file=None, log_level="none")  # type: ignore[call-arg]


@pytest.fixture()
def diagnostic_config() -> ExplorationConfig:
    """Config that keeps every record in memory and logs nothing."""
    return ExplorationConfig(
        _env_file=None,
        log_level="none",
        diagnostic_mode=True,  # type: ignore[call-arg]
    )


@pytest.fixture()
def sample_scores() -> np.ndarray:
    """Scores for five actions; action 3 is best.

    All values are exactly representable in single precision.
    """
    return np.array([0.5, -1.25, 2.0, 3.5, 0.0])


@pytest.fixture()
def rng() -> np.random.Generator:
    """Seeded generator for reproducible random inputs."""
    return np.random.default_rng(seed=12345)
