"""
Core package for FleetSim.
"""
from fleetsim.core.config import settings, get_settings
from fleetsim.core.celery_app import celery_app

__all__ = ["settings", "get_settings", "celery_app"]
