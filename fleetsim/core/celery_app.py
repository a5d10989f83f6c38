"""
Celery application configuration for FleetSim.

Celery is used to run independent simulation runs side by side. Each task
receives its own snapshot of drivers, routes and orders.

Usage:
    # Start worker (from project root):
    celery -A fleetsim.core.celery_app worker --loglevel=info
"""
from celery import Celery

from fleetsim.core.config import settings

# Create Celery application
celery_app = Celery(
    "fleetsim",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=["fleetsim.services.tasks"],
)

celery_app.conf.update(
    # Task settings
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="Asia/Kolkata",
    enable_utc=True,

    # Task execution
    task_acks_late=True,
    task_reject_on_worker_lost=True,

    # Result backend
    result_expires=86400,  # 24 hours

    # Worker settings
    worker_prefetch_multiplier=1,
    worker_concurrency=4,

    # Task routing
    task_default_queue="simulation",
    task_routes={
        "fleetsim.services.tasks.run_simulation": {"queue": "simulation"},
    },

    # Task time limits
    task_soft_time_limit=settings.simulation_time_limit,
    task_time_limit=settings.simulation_time_limit + 30,
)

celery_app.conf.task_queues = {
    "simulation": {
        "exchange": "simulation",
        "routing_key": "simulation",
    },
}
