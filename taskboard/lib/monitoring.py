# taskboard/lib/monitoring.py
from fastapi import FastAPI
from prometheus_client.registry import CollectorRegistry as Registry
from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator
from taskboard.core.logging import log

# Create a separate registry
registry = Registry()

task_writes = Counter(
    'taskboard_task_writes_total',
    'Task store writes by operation and outcome',
    ['operation', 'outcome'],
    registry=registry
)


def record_write(operation: str, outcome: str) -> None:
    """Count one create/update/delete attempt."""
    task_writes.labels(operation=operation, outcome=outcome).inc()


def register_monitoring(app: FastAPI):
    """
    Registers Prometheus monitoring on the FastAPI app and exposes /metrics.
    """
    instrumentator = Instrumentator(
        excluded_handlers=["/metrics"],  # Don't monitor the metrics endpoint itself
        registry=registry
    ).instrument(app)

    instrumentator.expose(app, include_in_schema=False, should_gzip=True)

    log("MONITORING", "Prometheus instrumentation registered at /metrics.")
