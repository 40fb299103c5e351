"""Tests for aircraft records."""

import pytest

from airtraffic.airspace.aircraft import INITIAL_FUEL, Aircraft, AircraftSpec
from airtraffic.physics.vectors import Vector3


class TestAircraftSpec:
    """Test AircraftSpec parsing."""

    def test_from_dict(self) -> None:
        """Test building a spec from a scenario mapping."""
        spec = AircraftSpec.from_dict({"id": 7, "position": [1, 2, 3], "velocity": [0, -1, 0.5]})
        assert spec.id == 7
        assert spec.position == Vector3(1.0, 2.0, 3.0)
        assert spec.velocity == Vector3(0.0, -1.0, 0.5)

    def test_from_dict_missing_key(self) -> None:
        """Test that a missing velocity raises KeyError."""
        with pytest.raises(KeyError):
            AircraftSpec.from_dict({"id": 7, "position": [1, 2, 3]})

    @pytest.mark.parametrize("bad_id", ["7", 7.0, True, None])
    def test_from_dict_rejects_non_integer_id(self, bad_id) -> None:
        """Test that ids must be integers."""
        with pytest.raises(ValueError):
            AircraftSpec.from_dict({"id": bad_id, "position": [0, 0, 0], "velocity": [0, 0, 0]})

    def test_spec_is_immutable(self) -> None:
        """Test that specs are frozen."""
        spec = AircraftSpec(1, Vector3.zero(), Vector3.zero())
        with pytest.raises(AttributeError):
            spec.id = 2  # type: ignore[misc]


class TestAircraft:
    """Test Aircraft creation and state."""

    def test_from_spec_sets_initial_fuel(self) -> None:
        """Test that new aircraft start with 5000 fuel."""
        spec = AircraftSpec(3, Vector3(1.0, 1.0, 1.0), Vector3(2.0, 0.0, 0.0))
        aircraft = Aircraft.from_spec(spec)
        assert aircraft.fuel == INITIAL_FUEL == 5000.0
        assert aircraft.position == spec.position
        assert aircraft.velocity == spec.velocity

    def test_moving_aircraft_leaves_spec_unchanged(self) -> None:
        """Test that advancing the aircraft does not touch its spec."""
        spec = AircraftSpec(3, Vector3(1.0, 1.0, 1.0), Vector3(2.0, 0.0, 0.0))
        aircraft = Aircraft.from_spec(spec)
        aircraft.position = aircraft.position + aircraft.velocity
        assert aircraft.position == Vector3(3.0, 1.0, 1.0)
        assert spec.position == Vector3(1.0, 1.0, 1.0)

    def test_get_state(self) -> None:
        """Test dictionary export."""
        aircraft = Aircraft(5, Vector3(1.0, 2.0, 3.0), Vector3(0.0, 0.0, -1.0), fuel=42.0)
        assert aircraft.get_state() == {
            "id": 5,
            "position": [1.0, 2.0, 3.0],
            "velocity": [0.0, 0.0, -1.0],
            "fuel": 42.0,
        }
