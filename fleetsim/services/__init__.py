"""
FleetSim services: simulation engine, reporting and background tasks.
"""
