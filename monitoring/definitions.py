"""Prometheus metric definitions."""

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram

# A private registry keeps the textfile export limited to envconfig metrics.
REGISTRY = CollectorRegistry()

# ============================================================
# RESOLUTION CACHE METRICS
# ============================================================

CACHE_LOOKUPS = Counter(
    "envconfig_cache_lookups_total",
    "Resolution cache lookups",
    ["table", "result"],
    registry=REGISTRY,
)

# ============================================================
# SECRET PROVIDER METRICS
# ============================================================

SECRET_FETCHES = Counter(
    "envconfig_secret_fetches_total",
    "Secret values fetched from the provider",
    ["status"],
    registry=REGISTRY,
)

SECRET_FETCH_LATENCY = Histogram(
    "envconfig_secret_fetch_latency_seconds",
    "Time to fetch a secret from the provider",
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
    registry=REGISTRY,
)

# ============================================================
# TEMPLATE METRICS
# ============================================================

PLACEHOLDERS = Counter(
    "envconfig_placeholders_total",
    "Placeholders processed",
    ["kind", "status"],
    registry=REGISTRY,
)

RENDER_DURATION = Gauge(
    "envconfig_render_duration_seconds",
    "Duration of the last template render",
    registry=REGISTRY,
)

LAST_RENDER_FAILURES = Gauge(
    "envconfig_last_render_failures",
    "Unresolved placeholders in the last template render",
    registry=REGISTRY,
)
