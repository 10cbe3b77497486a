"""Engine configuration.

All thresholds and language-model call options live in a single
:class:`EngineConfig`.  The defaults reproduce the engine's documented
behavior; a YAML file can override any subset of them::

    # vtrans.yaml
    semantic_threshold: 0.75
    translation_max_tokens: 4000

Load it with :func:`load_config`, or point the ``VTRANS_CONFIG``
environment variable at it and call :func:`load_config` without
arguments.
"""
from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from vtrans.errors import ConfigError

CONFIG_ENV_VAR = "VTRANS_CONFIG"

_UNIT_FIELDS = ("semantic_threshold", "round_trip_threshold", "default_confidence")


@dataclass(frozen=True)
class EngineConfig:
    """Tunable constants of the translation engine.

    Parameters
    ----------
    semantic_threshold:
        Minimum equivalence for a heuristic validation to be valid.
    round_trip_threshold:
        Minimum preservation score for a round trip to be acceptable.
    min_length_ratio, max_length_ratio:
        Translated/original length ratios outside this range raise a
        validation warning.
    default_confidence:
        Confidence assumed when a language-model reply omits one.
    translation_temperature, translation_max_tokens:
        Options passed to the language model for translations.
    validation_temperature, validation_max_tokens:
        Options passed to the language model for equivalence ratings.
    """

    semantic_threshold: float = 0.7
    round_trip_threshold: float = 0.9
    min_length_ratio: float = 0.3
    max_length_ratio: float = 3.0
    default_confidence: float = 0.7
    translation_temperature: float = 0.3
    translation_max_tokens: int = 2000
    validation_temperature: float = 0.2
    validation_max_tokens: int = 1000

    def __post_init__(self) -> None:
        for name in _UNIT_FIELDS:
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigError(f"{name} must be between 0 and 1, got {value!r}")
        if not 0.0 < self.min_length_ratio <= self.max_length_ratio:
            raise ConfigError(
                "Length ratio bounds must satisfy 0 < min_length_ratio <= max_length_ratio, "
                f"got {self.min_length_ratio!r} and {self.max_length_ratio!r}"
            )
        for name in ("translation_max_tokens", "validation_max_tokens"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive, got {getattr(self, name)!r}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EngineConfig":
        """Build a config from a mapping, rejecting unknown keys.

        Raises
        ------
        ConfigError
            If *data* has unknown keys or values of the wrong type or range.
        """
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}")
        values: dict[str, Any] = {}
        for key, value in data.items():
            expected = int if known[key].type in ("int", int) else float
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{key} must be a number, got {value!r}")
            if expected is int and not isinstance(value, int):
                raise ConfigError(f"{key} must be an integer, got {value!r}")
            values[key] = expected(value)
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_config(path: str | Path | None = None) -> EngineConfig:
    """Load an :class:`EngineConfig` from a YAML file.

    Parameters
    ----------
    path:
        YAML file to read.  When ``None``, the file named by the
        ``VTRANS_CONFIG`` environment variable is used; if that is unset
        too, the defaults are returned.

    Raises
    ------
    ConfigError
        If the file cannot be read, is not valid YAML, or holds invalid
        settings.
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if not env_path:
            return EngineConfig()
        path = env_path

    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {config_path}: {exc}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

    if data is None:
        return EngineConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must hold a mapping")
    return EngineConfig.from_dict(data)


__all__ = [
    "CONFIG_ENV_VAR",
    "EngineConfig",
    "load_config",
]
