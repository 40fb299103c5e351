"""Scenario configuration loaded from YAML files.

This module provides a generic YAML loader with dot-notation access and the
validated SimulationConfig built from it.

Typical usage example:
    from airtraffic.core.config import ConfigLoader, SimulationConfig

    loader = ConfigLoader.load("config/scenario.yaml")
    config = SimulationConfig.from_loader(loader)
    registry = build_registry(config.capacity, config.aircraft)
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from airtraffic.airspace.aircraft import INITIAL_FUEL, AircraftSpec
from airtraffic.physics.vectors import Vector3
from airtraffic.simulation.collision import COLLISION_THRESHOLD
from airtraffic.simulation.fuel import BURN_RATE
from airtraffic.simulation.pilots import parse_corrections

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when configuration operations fail."""


class ConfigLoader:
    """Configuration loader for YAML files.

    Provides loading, nested access, and default values for configuration.

    Examples:
        >>> config = ConfigLoader.load("config/scenario.yaml")
        >>> steps = config.get("simulation.steps", default=0)
    """

    def __init__(self, data: dict[str, Any]) -> None:
        """Initialize with configuration data.

        Args:
            data: Configuration dictionary.
        """
        self._data = data

    @classmethod
    def load(cls, path: str | Path) -> "ConfigLoader":
        """Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file.

        Returns:
            ConfigLoader instance with loaded data.

        Raises:
            ConfigError: If the file is missing, unreadable, or not a mapping.
        """
        path = Path(path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load configuration: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be a mapping: {path}")

        logger.info("Loaded configuration from: %s", path)
        return cls(data)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value using dot notation.

        Args:
            key: Configuration key (supports dot notation, e.g. "fuel.burn_rate").
            default: Default value if key not found.

        Returns:
            Configuration value or default.
        """
        value = self._data

        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value using dot notation.

        Args:
            key: Configuration key (supports dot notation).
            value: Value to set.
        """
        keys = key.split(".")
        data = self._data

        for k in keys[:-1]:
            if k not in data:
                data[k] = {}
            data = data[k]

        data[keys[-1]] = value

    def get_section(self, key: str) -> dict[str, Any]:
        """Get an entire configuration section.

        Raises:
            ConfigError: If section not found or not a dict.
        """
        value = self.get(key)

        if value is None:
            raise ConfigError(f"Configuration section not found: {key}")

        if not isinstance(value, dict):
            raise ConfigError(f"Configuration key is not a section: {key}")

        return value

    def save(self, path: str | Path) -> None:
        """Save configuration to a YAML file.

        Args:
            path: Path to save configuration.

        Raises:
            ConfigError: If save fails.
        """
        path = Path(path)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)

            with path.open("w", encoding="utf-8") as f:
                yaml.safe_dump(self._data, f, default_flow_style=False, sort_keys=False)

        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to save configuration: {e}") from e

        logger.info("Saved configuration to: %s", path)

    def merge(self, other: "ConfigLoader") -> None:
        """Merge another configuration into this one.

        Note:
            Other config values override existing ones.
        """
        self._data = self._merge_dicts(self._data, other._data)

    def _merge_dicts(self, base: dict, override: dict) -> dict:
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value

        return result

    def to_dict(self) -> dict[str, Any]:
        """Get the configuration as a dictionary."""
        return self._data.copy()


@dataclass
class SimulationConfig:
    """Validated scenario parameters.

    Attributes:
        capacity: Registry capacity.
        steps: Number of simulation steps.
        aircraft: Aircraft to register, in order.
        collision_threshold: Conflict distance.
        initial_fuel: Fuel given to each aircraft.
        burn_rate: Fuel per unit of L1 velocity per step.
        corrections: Velocity schedule, step index -> aircraft id -> velocity.
    """

    capacity: int
    steps: int
    aircraft: list[AircraftSpec] = field(default_factory=list)
    collision_threshold: float = COLLISION_THRESHOLD
    initial_fuel: float = INITIAL_FUEL
    burn_rate: float = BURN_RATE
    corrections: dict[int, dict[int, Vector3]] = field(default_factory=dict)

    @classmethod
    def from_loader(cls, loader: ConfigLoader) -> "SimulationConfig":
        """Build and validate a scenario from loaded YAML.

        Capacity is not checked against the aircraft count here; that check
        belongs to registry construction.

        Args:
            loader: Loaded scenario configuration.

        Returns:
            SimulationConfig instance.

        Raises:
            ConfigError: If a required key is missing or a value is invalid.
        """
        capacity = loader.get("simulation.capacity")
        if capacity is None:
            raise ConfigError("Missing required key: simulation.capacity")

        steps = loader.get("simulation.steps", 0)
        if isinstance(steps, bool) or not isinstance(steps, int) or steps < 0:
            raise ConfigError(f"simulation.steps must be a non-negative integer, got: {steps!r}")

        raw_aircraft = loader.get("aircraft") or []
        if not isinstance(raw_aircraft, list):
            raise ConfigError("aircraft must be a list")

        aircraft = []
        for i, entry in enumerate(raw_aircraft):
            if not isinstance(entry, dict):
                raise ConfigError(f"aircraft[{i}] must be a mapping")
            try:
                aircraft.append(AircraftSpec.from_dict(entry))
            except KeyError as e:
                raise ConfigError(f"aircraft[{i}] is missing key: {e.args[0]}") from e
            except (TypeError, ValueError) as e:
                raise ConfigError(f"aircraft[{i}] is invalid: {e}") from e

        raw_corrections = loader.get("corrections") or {}
        if not isinstance(raw_corrections, dict):
            raise ConfigError("corrections must be a mapping")
        try:
            corrections = parse_corrections(raw_corrections)
        except ValueError as e:
            raise ConfigError(f"corrections are invalid: {e}") from e

        try:
            return cls(
                capacity=capacity,
                steps=steps,
                aircraft=aircraft,
                collision_threshold=float(
                    loader.get("simulation.collision_threshold", COLLISION_THRESHOLD)
                ),
                initial_fuel=float(loader.get("fuel.initial", INITIAL_FUEL)),
                burn_rate=float(loader.get("fuel.burn_rate", BURN_RATE)),
                corrections=corrections,
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid numeric setting: {e}") from e
