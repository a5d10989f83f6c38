"""End-to-end tests for SimulationRunner."""
import pytest

from fleetsim.core.exceptions import SimulationValidationError
from fleetsim.models import OrderStatus, RunInputs, SimulationStatus, TrafficLevel
from fleetsim.services.simulation import OnTimeEvaluator, ProfitCalculator, SimulationRunner


@pytest.fixture
def runner():
    return SimulationRunner()


class TestSampleFleet:

    @pytest.fixture
    def outcome(self, runner, sample_fleet, sample_inputs):
        drivers, routes, orders = sample_fleet
        return runner.run(sample_inputs, drivers, routes, orders, executed_by="ops")

    def test_completes(self, outcome):
        run = outcome.run
        assert run.status == SimulationStatus.COMPLETED
        assert run.error_message is None
        assert run.executed_by == "ops"
        assert run.execution_time_ms >= 0

    def test_orders_processed_in_id_order(self, outcome):
        processed = outcome.run.orders_processed
        assert [p.order_id for p in processed] == [1, 2, 3, 4]
        assert [p.driver_id for p in processed] == ["asha", "chitra", "bala", "asha"]

    def test_on_time_outcomes(self, outcome):
        processed = outcome.run.orders_processed
        assert [p.was_on_time for p in processed] == [True, False, True, False]
        assert [p.estimated_minutes for p in processed] == [72, 30, 50, 72]

    def test_results(self, outcome):
        results = outcome.run.results
        assert results.total_orders == 4
        assert results.on_time_count == 2
        assert results.late_count == 2
        assert results.unassigned_count == 0
        assert results.efficiency_score == 50
        assert results.total_profit == 4455
        assert results.penalties == 100
        assert results.bonuses == 320
        assert results.driver_utilization == 13
        assert results.average_delivery_time == 56.0

    def test_fuel_breakdown(self, outcome):
        breakdown = outcome.run.results.fuel_cost_breakdown
        assert breakdown.total == 265
        assert breakdown.by_traffic_level == {
            TrafficLevel.LOW: 25,
            TrafficLevel.MEDIUM: 100,
            TrafficLevel.HIGH: 140,
        }

    def test_roi(self, outcome):
        assert outcome.run.roi == 1221

    def test_driver_hours_committed(self, outcome):
        hours = {d.id: d.current_day_hours for d in outcome.drivers}
        assert hours["asha"] == pytest.approx(2.4)
        assert hours["chitra"] == pytest.approx(0.5)
        assert hours["bala"] == pytest.approx(50 / 60)

    def test_orders_carry_outcome(self, outcome):
        orders = {o.order_id: o for o in outcome.orders}
        assert orders[1].status == OrderStatus.ASSIGNED
        assert orders[1].assigned_driver_id == "asha"
        assert orders[1].profit == 1250
        assert orders[2].penalty == 50
        assert orders[3].bonus == 200

    def test_route_stats_updated(self, outcome):
        routes = {r.route_id: r for r in outcome.routes}
        assert routes[1].total_deliveries == 2
        assert routes[1].average_delivery_time == 98.0
        assert routes[2].average_delivery_time == 45.0
        assert routes[3].average_delivery_time == 50.0

    def test_metadata(self, outcome, sample_inputs):
        metadata = outcome.run.metadata
        assert metadata.algorithm_used == "round-robin-assignment"
        assert metadata.configuration_hash == outcome.run.inputs.configuration_hash()
        assert len(metadata.configuration_hash) == 64

    def test_caller_collections_untouched(self, outcome, sample_fleet):
        drivers, routes, orders = sample_fleet
        assert all(d.current_day_hours == 0.0 for d in drivers)
        assert all(r.total_deliveries == 0 for r in routes)
        assert all(o.status == OrderStatus.PENDING for o in orders)


class TestDeterminism:

    def test_same_inputs_same_results(self, sample_fleet, sample_inputs):
        drivers, routes, orders = sample_fleet
        first = SimulationRunner().run(sample_inputs, drivers, routes, orders).run
        second = SimulationRunner().run(sample_inputs, drivers, routes, orders).run

        assert first.results == second.results
        assert first.metadata.configuration_hash == second.metadata.configuration_hash
        assert [p.driver_id for p in first.orders_processed] == \
            [p.driver_id for p in second.orders_processed]

    def test_hash_changes_with_inputs(self, sample_fleet, sample_inputs):
        drivers, routes, orders = sample_fleet
        first = SimulationRunner().run(sample_inputs, drivers, routes, orders).run
        second = SimulationRunner().run(
            {**sample_inputs, "max_hours_per_driver": 6}, drivers, routes, orders
        ).run
        assert first.metadata.configuration_hash != second.metadata.configuration_hash


class TestDriverSelection:

    def test_available_drivers_limits_pool(self, runner, sample_fleet, sample_inputs):
        drivers, routes, orders = sample_fleet
        run = runner.run({**sample_inputs, "available_drivers": 1}, drivers, routes, orders).run

        assert {p.driver_id for p in run.orders_processed} == {"asha"}
        assert run.results.driver_utilization == 40

    def test_all_drivers_inactive(self, runner, make_driver, make_route, make_order, sample_inputs):
        drivers = [make_driver(driver_id=f"d{i}", is_active=False) for i in range(5)]
        orders = [make_order(order_id=i) for i in range(1, 5)]

        outcome = runner.run(sample_inputs, drivers, [make_route()], orders)

        assert outcome.run.status == SimulationStatus.COMPLETED
        assert all(o.status == OrderStatus.FAILED for o in outcome.orders)
        assert outcome.run.results.efficiency_score == 0
        assert outcome.run.results.unassigned_count == 4
        assert outcome.run.results.total_profit == 0

    def test_no_orders(self, runner, sample_fleet, sample_inputs):
        drivers, routes, _ = sample_fleet
        run = runner.run(sample_inputs, drivers, routes, []).run

        assert run.status == SimulationStatus.COMPLETED
        assert run.results.total_orders == 0
        assert run.results.efficiency_score == 0
        assert run.results.driver_utilization == 0
        assert run.profit_per_order == 0.0

    def test_fatigued_driver_gets_wider_window(self, runner, make_driver, make_route,
                                               make_order, sample_inputs):
        driver = make_driver(past_week_hours=[9, 0, 0, 0, 0, 0, 0])
        route = make_route(traffic_level=TrafficLevel.MEDIUM, base_time_min=60)
        order = make_order(delivery_time="01:36")

        processed = runner.run(sample_inputs, [driver], [route], [order]).run.orders_processed

        assert processed[0].estimated_minutes == 86
        assert processed[0].was_on_time is True


class TestFailures:

    def test_unknown_route_stops_run(self, runner, make_driver, make_route, make_order,
                                     sample_inputs):
        orders = [
            make_order(order_id=1, route_id=1),
            make_order(order_id=2, route_id=99),
            make_order(order_id=3, route_id=1),
        ]
        run = runner.run(sample_inputs, [make_driver()], [make_route()], orders).run

        assert run.status == SimulationStatus.FAILED
        assert "99" in run.error_message
        assert [p.order_id for p in run.orders_processed] == [1]
        assert run.results.total_orders == 1

    def test_unexpected_error_is_recorded(self, sample_fleet, sample_inputs):
        class BrokenCalculator(ProfitCalculator):
            def compute(self, order, route, is_on_time):
                raise ZeroDivisionError("boom")

        drivers, routes, orders = sample_fleet
        run = SimulationRunner(profit_calculator=BrokenCalculator()).run(
            sample_inputs, drivers, routes, orders
        ).run

        assert run.status == SimulationStatus.FAILED
        assert run.error_message == "Unexpected error: boom"
        assert run.orders_processed == []

    def test_finished_run_is_frozen(self, runner, sample_fleet, sample_inputs):
        drivers, routes, orders = sample_fleet
        run = runner.run(sample_inputs, drivers, routes, orders).run

        with pytest.raises(ValueError):
            run.add_processed_order(run.orders_processed[0])


class TestCancellation:

    def test_cancel_before_run(self, runner, sample_fleet, sample_inputs):
        drivers, routes, orders = sample_fleet
        runner.cancel()
        assert runner.cancel_requested

        run = runner.run(sample_inputs, drivers, routes, orders).run

        assert run.status == SimulationStatus.CANCELLED
        assert run.orders_processed == []
        assert not runner.cancel_requested

    def test_cancel_before_run_with_no_orders(self, runner, sample_fleet, sample_inputs):
        drivers, routes, _ = sample_fleet
        runner.cancel()

        run = runner.run(sample_inputs, drivers, routes, []).run

        assert run.status == SimulationStatus.CANCELLED
        assert run.results.total_orders == 0
        assert not runner.cancel_requested

    def test_next_run_is_unaffected(self, runner, sample_fleet, sample_inputs):
        drivers, routes, orders = sample_fleet
        runner.cancel()
        runner.run(sample_inputs, drivers, routes, orders)

        run = runner.run(sample_inputs, drivers, routes, orders).run
        assert run.status == SimulationStatus.COMPLETED
        assert len(run.orders_processed) == 4

    def test_cancel_between_orders(self, sample_fleet, sample_inputs):
        holder = {}

        class CancellingEvaluator(OnTimeEvaluator):
            def is_on_time(self, actual_minutes, route, fatigued):
                holder["runner"].cancel()
                return super().is_on_time(actual_minutes, route, fatigued)

        runner = SimulationRunner(evaluator=CancellingEvaluator())
        holder["runner"] = runner
        drivers, routes, orders = sample_fleet

        outcome = runner.run(sample_inputs, drivers, routes, orders, close_day=True)

        assert outcome.run.status == SimulationStatus.CANCELLED
        assert [p.order_id for p in outcome.run.orders_processed] == [1]
        assert outcome.run.results.total_orders == 1
        # Day is not closed for a cancelled run
        asha = next(d for d in outcome.drivers if d.id == "asha")
        assert asha.current_day_hours == pytest.approx(1.2)


class TestCloseDay:

    def test_rolls_hours_into_week(self, runner, sample_fleet, sample_inputs):
        drivers, routes, orders = sample_fleet
        outcome = runner.run(sample_inputs, drivers, routes, orders, close_day=True)

        asha = next(d for d in outcome.drivers if d.id == "asha")
        assert asha.past_week_hours[:6] == [6.0] * 6
        assert asha.past_week_hours[6] == pytest.approx(2.4)
        assert asha.current_day_hours == 0.0

    def test_off_by_default(self, runner, sample_fleet, sample_inputs):
        drivers, routes, orders = sample_fleet
        outcome = runner.run(sample_inputs, drivers, routes, orders)

        asha = next(d for d in outcome.drivers if d.id == "asha")
        assert asha.past_week_hours == [6.0] * 7


class TestValidation:

    def test_invalid_inputs(self, runner, sample_fleet, sample_inputs):
        drivers, routes, orders = sample_fleet
        with pytest.raises(SimulationValidationError):
            runner.run({**sample_inputs, "available_drivers": 0}, drivers, routes, orders)

    def test_invalid_driver_reports_position(self, runner, sample_fleet, sample_inputs):
        drivers, routes, orders = sample_fleet
        drivers[1].past_week_hours = [1, 2, 3, 4, 5, 6]

        with pytest.raises(SimulationValidationError) as exc_info:
            runner.run(sample_inputs, drivers, routes, orders)

        fields = [v.field for v in exc_info.value.violations]
        assert fields
        assert all(f.startswith("drivers[1].") for f in fields)

    def test_duplicate_route_ids(self, runner, make_driver, make_route, make_order, sample_inputs):
        routes = [make_route(route_id=1), make_route(route_id=1, distance_km=3)]
        with pytest.raises(SimulationValidationError):
            runner.run(sample_inputs, [make_driver()], routes, [make_order()])

    def test_accepts_plain_dicts(self, runner):
        outcome = runner.run(
            {"availableDrivers": 1, "routeStartTime": "08:30", "maxHoursPerDriver": 8},
            [{"name": "Devi", "shiftHours": 8, "pastWeekHours": [5] * 7}],
            [{"routeId": 1, "distanceKm": 4, "trafficLevel": "Low", "baseTimeMin": 20}],
            [{"orderId": 1, "valueRs": 300, "routeId": 1, "deliveryTime": "00:25"}],
        )

        assert outcome.run.status == SimulationStatus.COMPLETED
        assert outcome.run.results.on_time_count == 1
        assert outcome.run.results.total_profit == 280

    def test_accepts_run_inputs_record(self, runner, sample_fleet):
        drivers, routes, orders = sample_fleet
        inputs = RunInputs(available_drivers=2, route_start_time="10:00", max_hours_per_driver=4)
        run = runner.run(inputs, drivers, routes, orders).run

        assert run.inputs.available_drivers == 2
        assert {p.driver_id for p in run.orders_processed} == {"asha", "chitra"}
