"""Configuration system for pdf-explore.

Uses pydantic-settings for declarative, layered configuration:
init kwargs -> environment variables (EXPLORE_*) -> .env file -> field defaults.

Per-call overrides are applied via resolve_config() which creates a new
config instance without mutating the defaults. The working precision is
fixed for the lifetime of a pipeline and cannot be overridden per call.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pdf_explore.exceptions import ConfigValidationError

_OVERRIDE_PREFIX = "explore_"

# Fields that can be overridden per call via ``overrides``.
_PER_CALL_FIELDS: frozenset[str] = frozenset(
    {
        "generator",
        "epsilon",
        "softmax_lambda",
        "enforce_minimum",
        "min_prob",
        "update_zero_elements",
        "log_level",
        "diagnostic_mode",
    }
)

# All known config field names (populated after class definition).
_ALL_FIELDS: frozenset[str] = frozenset()

_DTYPES: dict[str, type[np.floating[Any]]] = {
    "float32": np.float32,
    "float64": np.float64,
}


class ExplorationConfig(BaseSettings):
    """Configuration for pdf-explore.

    Resolution order: init kwargs -> env vars (EXPLORE_*) -> .env file -> defaults.

    ``epsilon`` and ``min_prob`` are passed through to the core operations
    without range validation; the operations define the behaviour at and
    beyond their bounds.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXPLORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Numeric precision (NOT per-call overridable) ---

    precision: str = Field(
        default="float32",
        description="Working float dtype for PDF arithmetic: 'float32' or 'float64'",
    )

    # --- Generation (per-call overridable) ---

    generator: str = Field(
        default="epsilon_greedy",
        description="Registered generator name: 'epsilon_greedy', 'softmax', 'bag'",
    )
    epsilon: float = Field(
        default=0.05,
        description="Exploration mass spread uniformly by epsilon-greedy",
    )
    softmax_lambda: float = Field(
        default=1.0,
        description="Inverse temperature applied to scores by softmax",
    )

    # --- Minimum probability enforcement (per-call overridable) ---

    enforce_minimum: bool = Field(
        default=False,
        description="Apply the minimum probability floor after generation",
    )
    min_prob: float = Field(
        default=0.1,
        description="Total floor mass; each eligible action keeps min_prob / N",
    )
    update_zero_elements: bool = Field(
        default=True,
        description="Also raise actions with exactly zero probability to the floor",
    )

    # --- Logging (per-call overridable) ---

    log_level: str = Field(
        default="summary",
        description="Logging verbosity: 'none', 'summary', 'full'",
    )
    diagnostic_mode: bool = Field(
        default=False,
        description="Store all PDF records in memory for analysis",
    )


_ALL_FIELDS = frozenset(ExplorationConfig.model_fields.keys())


def resolve_dtype(precision: str) -> type[np.floating[Any]]:
    """Map a precision name to its numpy dtype.

    Args:
        precision: ``"float32"`` or ``"float64"``.

    Returns:
        The numpy scalar type.

    Raises:
        ConfigValidationError: If *precision* is not supported.
    """
    try:
        return _DTYPES[precision]
    except KeyError:
        available = ", ".join(sorted(_DTYPES))
        raise ConfigValidationError(
            f"Unknown precision '{precision}'. Available: {available}"
        ) from None


def _strip_prefix(key: str) -> str:
    """Strip the 'explore_' prefix from an override key."""
    if key.startswith(_OVERRIDE_PREFIX):
        return key[len(_OVERRIDE_PREFIX) :]
    return key


def validate_overrides(overrides: dict[str, Any]) -> None:
    """Validate all explore_* keys in *overrides* without creating a config.

    Args:
        overrides: Dictionary of per-call overrides, potentially with the
            explore_ prefix.

    Raises:
        ConfigValidationError: If any explore_* key is unknown or non-overridable.
    """
    for key in overrides:
        if not key.startswith(_OVERRIDE_PREFIX):
            continue
        field_name = _strip_prefix(key)
        if field_name not in _ALL_FIELDS:
            raise ConfigValidationError(
                f"Unknown config field: '{key}' (no field '{field_name}' exists)"
            )
        if field_name not in _PER_CALL_FIELDS:
            raise ConfigValidationError(
                f"Field '{field_name}' is fixed per pipeline and cannot be "
                f"overridden per call"
            )


def resolve_config(
    defaults: ExplorationConfig,
    overrides: dict[str, Any] | None,
) -> ExplorationConfig:
    """Create a new config instance merging defaults with per-call overrides.

    Override keys use the 'explore_' prefix (e.g., 'explore_epsilon': 0.2).
    Keys without the prefix are silently ignored.

    Args:
        defaults: The base configuration.
        overrides: Per-call overrides.

    Returns:
        *defaults* itself when there is nothing to override, otherwise a new
        ExplorationConfig with overrides applied.

    Raises:
        ConfigValidationError: If any explore_* key is unknown or non-overridable.
    """
    if not overrides:
        return defaults

    validate_overrides(overrides)

    updates: dict[str, Any] = {
        _strip_prefix(key): value
        for key, value in overrides.items()
        if key.startswith(_OVERRIDE_PREFIX)
    }
    if not updates:
        return defaults

    # model_copy(update=...) skips validation; model_validate coerces types.
    merged = defaults.model_dump()
    merged.update(updates)
    return ExplorationConfig.model_validate(merged)
