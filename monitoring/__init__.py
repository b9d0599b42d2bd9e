"""Monitoring module - Prometheus metrics for envconfig."""

from monitoring.recorders import Metrics, track_time
from monitoring.exporter import write_metrics_file

__all__ = [
    "Metrics",
    "track_time",
    "write_metrics_file",
]
