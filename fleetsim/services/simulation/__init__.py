"""
Delivery fleet simulation engine.

Assigns orders to drivers round-robin under daily hour caps, projects
delivery times and profit per order, and folds everything into run-level
statistics.
"""

from fleetsim.services.simulation.fatigue import FatigueTracker
from fleetsim.services.simulation.timing import DeliveryTimeEstimator, OnTimeEvaluator
from fleetsim.services.simulation.profit import ProfitCalculator, ProfitBreakdown
from fleetsim.services.simulation.constraints import ConstraintFilter
from fleetsim.services.simulation.scheduler import AssignmentScheduler, Assignment
from fleetsim.services.simulation.stats import StatsAggregator
from fleetsim.services.simulation.runner import SimulationRunner, SimulationOutcome

__all__ = [
    # Drivers
    "FatigueTracker",
    "ConstraintFilter",
    # Timing
    "DeliveryTimeEstimator",
    "OnTimeEvaluator",
    # Money
    "ProfitCalculator",
    "ProfitBreakdown",
    # Assignment
    "AssignmentScheduler",
    "Assignment",
    # Results
    "StatsAggregator",
    "SimulationRunner",
    "SimulationOutcome",
]
