"""Merge caller-supplied review options over the defaults."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import InvalidConfigError
from .models import AnalysisConfig

DEFAULT_CONFIG = AnalysisConfig()


def parse_config(options: Mapping[str, Any] | AnalysisConfig | None) -> AnalysisConfig:
    """Validate a partial options mapping.

    Only the keys present in ``options`` count as set (see
    ``model_fields_set``); the rest fall back to the model defaults.

    Raises:
        InvalidConfigError: If an option has the wrong type or value.
    """
    if options is None:
        return AnalysisConfig()
    if isinstance(options, AnalysisConfig):
        return options
    if not isinstance(options, Mapping):
        raise InvalidConfigError(
            f"config must be a mapping, not {type(options).__name__}"
        )
    try:
        return AnalysisConfig.model_validate(dict(options))
    except PydanticValidationError as e:
        raise InvalidConfigError(f"Invalid review config: {e}") from e


def merge_config(
    default: AnalysisConfig,
    override: Mapping[str, Any] | AnalysisConfig | None,
) -> AnalysisConfig:
    """Fully populated config: fields set in ``override`` win over ``default``."""
    parsed = parse_config(override)
    updates = {name: getattr(parsed, name) for name in parsed.model_fields_set}
    if not updates:
        return default
    return default.model_copy(update=updates)


def resolve_config(*overrides: Mapping[str, Any] | AnalysisConfig | None) -> AnalysisConfig:
    """Layer several partial configs over the defaults, later ones winning."""
    config = DEFAULT_CONFIG
    for override in overrides:
        config = merge_config(config, override)
    return config
