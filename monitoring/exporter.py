"""Prometheus textfile export for short-lived runs."""

from prometheus_client import write_to_textfile

from envconfig.utils.logging import get_logger
from monitoring.definitions import REGISTRY

logger = get_logger(__name__)


def write_metrics_file(path: str) -> bool:
    """
    Write all envconfig metrics to a node_exporter textfile.

    Returns False and logs a warning if the file cannot be written.

    Usage:
        from monitoring import write_metrics_file

        write_metrics_file("/var/lib/node_exporter/envconfig.prom")
    """
    try:
        write_to_textfile(path, REGISTRY)
    except OSError as e:
        logger.warning(f"Could not write metrics to {path}: {e}")
        return False
    logger.info(f"Metrics written to {path}")
    return True
