"""Pytest configuration and fixtures for all tests."""

import logging

import pytest

from airtraffic.airspace.aircraft import AircraftSpec
from airtraffic.airspace.registry import AirspaceRegistry
from airtraffic.core import logging_system
from airtraffic.physics.vectors import Vector3


@pytest.fixture
def restore_root_logging():
    """Undo initialize_logging() after a test.

    Removes the console and file handlers it installs and resets the
    module state, leaving pytest's own capture handlers alone.
    """
    root = logging.getLogger()
    saved_level = root.level
    yield
    logging_system.shutdown_logging()
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)
    logging_system._logging_config = {}


def make_spec(
    aircraft_id: int,
    position: tuple[float, float, float] = (0.0, 0.0, 0.0),
    velocity: tuple[float, float, float] = (0.0, 0.0, 0.0),
) -> AircraftSpec:
    """Build an AircraftSpec from plain tuples."""
    return AircraftSpec(aircraft_id, Vector3(*position), Vector3(*velocity))


@pytest.fixture
def spec_factory():
    """Factory for AircraftSpec instances."""
    return make_spec


@pytest.fixture
def registry() -> AirspaceRegistry:
    """Empty registry with room for a handful of aircraft."""
    return AirspaceRegistry(capacity=8)


@pytest.fixture
def head_on_pair(registry: AirspaceRegistry) -> AirspaceRegistry:
    """Two aircraft that meet within the collision threshold on step 0."""
    registry.register(make_spec(1, (0.0, 0.0, 0.0), (1.0, 0.0, 0.0)))
    registry.register(make_spec(2, (2.5, 0.0, 0.0), (-1.0, 0.0, 0.0)))
    return registry
