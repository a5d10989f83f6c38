"""Tests for fleetsim.models.enums."""
from fleetsim.models.enums import (
    FatigueLevel,
    TrafficLevel,
    OrderStatus,
    OrderPriority,
    SimulationStatus,
)


class TestTrafficLevel:

    def test_values_match_stored_strings(self):
        assert {t.value for t in TrafficLevel} == {"Low", "Medium", "High"}

    def test_only_high_has_surcharge(self):
        assert TrafficLevel.HIGH.has_fuel_surcharge is True
        assert TrafficLevel.MEDIUM.has_fuel_surcharge is False
        assert TrafficLevel.LOW.has_fuel_surcharge is False

    def test_lookup_by_value(self):
        assert TrafficLevel("High") is TrafficLevel.HIGH


class TestOrderStatus:

    def test_all_statuses(self):
        expected = {"pending", "assigned", "in_transit", "delivered", "cancelled", "failed"}
        assert {s.value for s in OrderStatus} == expected


class TestFatigueLevel:

    def test_all_levels(self):
        assert {f.value for f in FatigueLevel} == {"normal", "tired", "exhausted"}


class TestOrderPriority:

    def test_all_priorities(self):
        assert {p.value for p in OrderPriority} == {"low", "medium", "high", "urgent"}


class TestSimulationStatus:

    def test_all_statuses(self):
        expected = {"running", "completed", "failed", "cancelled"}
        assert {s.value for s in SimulationStatus} == expected

    def test_only_running_is_not_final(self):
        assert SimulationStatus.RUNNING.is_final is False
        assert all(
            s.is_final for s in SimulationStatus if s != SimulationStatus.RUNNING
        )
