"""
FleetSim - same-day delivery fleet simulation engine.
"""

__version__ = "1.0.0"
