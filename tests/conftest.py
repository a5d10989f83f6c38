"""Root conftest.py -- shared fixtures for all test modules."""
import os

import pytest

# Set env vars BEFORE any fleetsim imports so Celery never needs a real broker
os.environ.setdefault("CELERY_BROKER_URL", "memory://")
os.environ.setdefault("CELERY_RESULT_BACKEND", "cache+memory://")

from fleetsim.core.config import get_settings, Settings
from fleetsim.models import Driver, Order, Route, TrafficLevel


# =========================================================================
# Settings
# =========================================================================
@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Clear LRU cache before each test to prevent stale settings."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    return get_settings()


# =========================================================================
# Record Factories
# =========================================================================
@pytest.fixture
def make_driver():
    def _make(
        name: str = "Test Driver",
        driver_id: str = None,
        shift_hours: float = 8,
        past_week_hours: list = None,
        current_day_hours: float = 0.0,
        is_active: bool = True,
        efficiency: float = 100.0,
        total_deliveries: int = 0,
        on_time_deliveries: int = 0,
    ) -> Driver:
        kwargs = {}
        if driver_id is not None:
            kwargs["id"] = driver_id
        return Driver(
            name=name,
            shift_hours=shift_hours,
            past_week_hours=list(past_week_hours) if past_week_hours is not None else [6.0] * 7,
            current_day_hours=current_day_hours,
            is_active=is_active,
            efficiency=efficiency,
            total_deliveries=total_deliveries,
            on_time_deliveries=on_time_deliveries,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_route():
    def _make(
        route_id: int = 1,
        distance_km: float = 10.0,
        traffic_level: TrafficLevel = TrafficLevel.LOW,
        base_time_min: int = 60,
        is_active: bool = True,
    ) -> Route:
        return Route(
            route_id=route_id,
            distance_km=distance_km,
            traffic_level=traffic_level,
            base_time_min=base_time_min,
            is_active=is_active,
        )

    return _make


@pytest.fixture
def make_order():
    def _make(
        order_id: int = 1,
        value_rs: float = 500.0,
        route_id: int = 1,
        delivery_time: str = "01:00",
    ) -> Order:
        return Order(
            order_id=order_id,
            value_rs=value_rs,
            route_id=route_id,
            delivery_time=delivery_time,
        )

    return _make


@pytest.fixture
def sample_fleet(make_driver, make_route, make_order):
    """
    Three drivers, three routes, four orders.

    Eligible order (efficiency desc, on-time desc): asha, chitra, bala.
    Non-fatigued estimates: route 1 -> 72 min, route 2 -> 30 min, route 3 -> 50 min.
    """
    drivers = [
        make_driver(name="Asha", driver_id="asha", efficiency=100, on_time_deliveries=10),
        make_driver(name="Bala", driver_id="bala", efficiency=90, on_time_deliveries=20),
        make_driver(name="Chitra", driver_id="chitra", efficiency=100, on_time_deliveries=5),
    ]
    routes = [
        make_route(route_id=1, distance_km=10, traffic_level=TrafficLevel.HIGH, base_time_min=60),
        make_route(route_id=2, distance_km=5, traffic_level=TrafficLevel.LOW, base_time_min=30),
        make_route(route_id=3, distance_km=20, traffic_level=TrafficLevel.MEDIUM, base_time_min=45),
    ]
    orders = [
        make_order(order_id=4, value_rs=800, route_id=1, delivery_time="02:00"),
        make_order(order_id=1, value_rs=1200, route_id=1, delivery_time="01:15"),
        make_order(order_id=3, value_rs=2000, route_id=3, delivery_time="00:50"),
        make_order(order_id=2, value_rs=500, route_id=2, delivery_time="00:45"),
    ]
    return drivers, routes, orders


@pytest.fixture
def sample_inputs() -> dict:
    return {
        "available_drivers": 3,
        "route_start_time": "09:00",
        "max_hours_per_driver": 8,
        "simulation_name": "Weekday baseline",
    }
