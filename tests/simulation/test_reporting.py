"""Tests for event stream consumers."""

import logging

from airtraffic.core.event_bus import EventBus
from airtraffic.simulation.engine import SimulationEngine
from airtraffic.simulation.events import CollisionEvent, StatusEvent
from airtraffic.simulation.fuel import FuelBand
from airtraffic.simulation.reporting import EventLogger, RunSummary


class TestEventLogger:
    """Test event logging."""

    def test_logs_collisions_and_statuses(self, caplog) -> None:
        """Test each event kind produces one log record at its level."""
        log = logging.getLogger("test_events")
        handler = EventLogger(log)

        with caplog.at_level(logging.INFO, logger="test_events"):
            handler.handle(CollisionEvent(step_index=3, aircraft_a=1, aircraft_b=2))
            handler.handle(StatusEvent(step_index=3, aircraft_id=1, band=FuelBand.MODERATE))

        assert [r.levelno for r in caplog.records] == [logging.WARNING, logging.INFO]
        assert "Collision detected between aircraft 1 and 2" in caplog.records[0].getMessage()
        assert "Aircraft 1 fuel efficiency: Moderate" in caplog.records[1].getMessage()

    def test_attach_to_engine_bus(self, head_on_pair, caplog) -> None:
        """Test attaching to a bus logs the engine's events."""
        log = logging.getLogger("test_events_attached")
        bus = EventBus()
        EventLogger(log).attach(bus)

        with caplog.at_level(logging.INFO, logger="test_events_attached"):
            SimulationEngine(head_on_pair, event_bus=bus).run_step()

        messages = [r.getMessage() for r in caplog.records if r.name == "test_events_attached"]
        assert len(messages) == 3


class TestRunSummary:
    """Test run aggregation."""

    def test_summary_of_head_on_run(self, head_on_pair) -> None:
        """Test steps, collisions and final bands are aggregated."""
        bus = EventBus()
        summary = RunSummary()
        summary.attach(bus)

        SimulationEngine(head_on_pair, event_bus=bus).run(3)

        assert summary.steps == 3
        assert summary.collisions == 1
        assert summary.collision_pairs == {(1, 2): 1}
        assert summary.final_bands == {1: FuelBand.EFFICIENT, 2: FuelBand.EFFICIENT}

    def test_band_counts_include_empty_bands(self) -> None:
        """Test every band is listed, in band order."""
        summary = RunSummary()
        summary.record(StatusEvent(step_index=0, aircraft_id=1, band=FuelBand.INEFFICIENT))
        summary.record(StatusEvent(step_index=0, aircraft_id=2, band=FuelBand.INEFFICIENT))

        assert summary.band_counts() == {
            FuelBand.EFFICIENT: 0,
            FuelBand.MODERATE: 0,
            FuelBand.INEFFICIENT: 2,
        }

    def test_later_status_overrides(self) -> None:
        """Test the final band is the last one reported."""
        summary = RunSummary()
        summary.record(StatusEvent(step_index=0, aircraft_id=1, band=FuelBand.EFFICIENT))
        summary.record(StatusEvent(step_index=1, aircraft_id=1, band=FuelBand.MODERATE))

        assert summary.final_bands == {1: FuelBand.MODERATE}
        assert summary.steps == 2

    def test_shared_ids_counted_per_aircraft(self, registry, spec_factory) -> None:
        """Test aircraft sharing an id are each counted in the band totals."""
        for x in (0.0, 10.0, 20.0):
            registry.register(spec_factory(7, (x, 0.0, 0.0), (0.0, 0.0, 0.0)))
        bus = EventBus()
        summary = RunSummary()
        summary.attach(bus)

        SimulationEngine(registry, event_bus=bus).run(2)

        assert len(summary.final_statuses) == 3
        assert sum(summary.band_counts().values()) == 3
        assert summary.band_counts()[FuelBand.EFFICIENT] == 3

    def test_final_statuses_keep_only_latest_step(self) -> None:
        """Test statuses from earlier steps are replaced, not accumulated."""
        summary = RunSummary()
        summary.record(StatusEvent(step_index=0, aircraft_id=1, band=FuelBand.EFFICIENT))
        summary.record(StatusEvent(step_index=0, aircraft_id=1, band=FuelBand.EFFICIENT))
        summary.record(StatusEvent(step_index=1, aircraft_id=1, band=FuelBand.MODERATE))
        summary.record(StatusEvent(step_index=1, aircraft_id=1, band=FuelBand.INEFFICIENT))

        assert [s.band for s in summary.final_statuses] == [
            FuelBand.MODERATE,
            FuelBand.INEFFICIENT,
        ]
        assert summary.band_counts()[FuelBand.EFFICIENT] == 0
