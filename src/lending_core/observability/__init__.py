# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Observability and metrics for the lending core.

Classes:
    UnifiedMetricsCollector: Metrics collector with dict store and Prometheus mirror.
    MetricDefinition: Schema of a pre-defined metric.

Protocols:
    MetricsCollectorProtocol: Protocol for metrics collection backends.

Functions:
    get_metrics_collector: Get the global metrics collector singleton.
    reset_metrics_collector: Reset the global metrics collector singleton.
"""

from .collector import (
    METRIC_DEFINITIONS,
    MetricDefinition,
    UnifiedMetricsCollector,
    get_metrics_collector,
    reset_metrics_collector,
)
from .constants import (
    CACHE_EVICTIONS_TOTAL,
    CACHE_HITS_TOTAL,
    CACHE_MISSES_TOTAL,
    LATENCY_BUCKETS,
    METRIC_PREFIX,
    RESERVATION_ATTEMPTS_TOTAL,
    RESERVATIONS_ACTIVE,
    RESERVATIONS_CLOSED_TOTAL,
    RESERVE_LATENCY_SECONDS,
    RESOURCES_REGISTERED_TOTAL,
    SEARCH_REQUESTS_TOTAL,
)
from .protocols import MetricsCollectorProtocol

__all__ = [
    "CACHE_EVICTIONS_TOTAL",
    "CACHE_HITS_TOTAL",
    "CACHE_MISSES_TOTAL",
    "LATENCY_BUCKETS",
    "METRIC_DEFINITIONS",
    "METRIC_PREFIX",
    "RESERVATIONS_ACTIVE",
    "RESERVATIONS_CLOSED_TOTAL",
    "RESERVATION_ATTEMPTS_TOTAL",
    "RESERVE_LATENCY_SECONDS",
    "RESOURCES_REGISTERED_TOTAL",
    "SEARCH_REQUESTS_TOTAL",
    "MetricDefinition",
    "MetricsCollectorProtocol",
    "UnifiedMetricsCollector",
    "get_metrics_collector",
    "reset_metrics_collector",
]
