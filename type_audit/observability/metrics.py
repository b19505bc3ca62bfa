"""
Prometheus metrics collection for record type auditing

This module provides counters for records inspected, records rejected
and property values whose type could not be resolved.
"""
from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    CollectorRegistry,
    generate_latest,
)


# Global registry for metrics
REGISTRY = CollectorRegistry()


# =======================
# AGGREGATION METRICS
# =======================

# Records inspected by an aggregator
records_observed_total = Counter(
    name="type_audit_records_observed_total",
    documentation="Total number of records inspected",
    labelnames=["source_id"],
    registry=REGISTRY,
)

# Records that could not be introspected
records_rejected_total = Counter(
    name="type_audit_records_rejected_total",
    documentation="Total number of records rejected as not introspectable",
    labelnames=["source_id"],
    registry=REGISTRY,
)

# Property values recovered to the null label
type_resolution_failures_total = Counter(
    name="type_audit_type_resolution_failures_total",
    documentation="Total number of property values whose type could not be resolved",
    labelnames=["source_id"],
    registry=REGISTRY,
)

# Distinct properties seen in the latest session per source
properties_discovered = Gauge(
    name="type_audit_properties_discovered",
    documentation="Distinct property names discovered in the latest aggregation session",
    labelnames=["source_id"],
    registry=REGISTRY,
)

# Whole-stream aggregation duration
aggregation_duration_seconds = Histogram(
    name="type_audit_aggregation_duration_seconds",
    documentation="Time spent aggregating a record stream in seconds",
    labelnames=["source_id"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 10.0, 30.0, 60.0],
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


class track_duration:
    """
    Context manager for tracking operation duration

    Usage:
        with track_duration(aggregation_duration_seconds, source_id="events"):
            # do work
            pass
    """

    def __init__(self, histogram: Histogram, **labels):
        self.histogram = histogram
        self.labels = labels
        self.timer = None

    def __enter__(self):
        """Start timer"""
        self.timer = self.histogram.labels(**self.labels).time()
        self.timer.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Stop timer"""
        self.timer.__exit__(exc_type, exc_val, exc_tb)
        return False


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """
    Increment a counter metric

    Args:
        counter: Prometheus Counter metric
        value: Amount to increment (default: 1.0)
        **labels: Label values for the metric
    """
    counter.labels(**labels).inc(value)


def set_gauge(gauge: Gauge, value: float, **labels) -> None:
    gauge.labels(**labels).set(value)


def get_sample_value(name: str, labels: dict[str, str]) -> float:
    """
    Read the current value of a sample from the registry.

    Args:
        name: Sample name (e.g. "type_audit_records_observed_total")
        labels: Label values identifying the sample

    Returns:
        Current value, or 0.0 if the sample does not exist yet
    """
    value = REGISTRY.get_sample_value(name, labels)
    return value if value is not None else 0.0
