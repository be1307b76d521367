# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metric name constants following Prometheus naming conventions.

All metric names use the `lending_` prefix.

Naming Conventions:
    - Counter metrics end with `_total`
    - Histogram metrics for time end with `_seconds`
    - Gauges use present-tense descriptive names

Label Best Practices:
    Use only categorical labels:
    - `outcome` - Reserve outcome (enum: success, holder_not_found, ...)
    - `media_kind` - Resource media kind (physical, digital)

    NEVER use:
    - `holder_id` - Unique per holder (unbounded!)
    - `resource_id` - Unique per resource (unbounded!)
    - query strings - Unbounded user input

Usage:
    >>> from lending_core.observability.constants import CACHE_HITS_TOTAL
    >>> print(CACHE_HITS_TOTAL)
    'lending_cache_hits_total'
"""


# =============================================================================
# Global Prefix
# =============================================================================

METRIC_PREFIX = "lending"
"""Prefix for all Prometheus metrics in this library."""


# =============================================================================
# Search and Cache Metrics (cache/bounded.py, reservation/service.py)
# =============================================================================

SEARCH_REQUESTS_TOTAL = f"{METRIC_PREFIX}_search_requests_total"
"""Total catalog searches issued through the reservation service."""

CACHE_HITS_TOTAL = f"{METRIC_PREFIX}_cache_hits_total"
"""Total query cache hits."""

CACHE_MISSES_TOTAL = f"{METRIC_PREFIX}_cache_misses_total"
"""Total query cache misses."""

CACHE_EVICTIONS_TOTAL = f"{METRIC_PREFIX}_cache_evictions_total"
"""Total query cache evictions due to capacity pressure."""


# =============================================================================
# Reservation Metrics (reservation/service.py)
# =============================================================================

RESERVATION_ATTEMPTS_TOTAL = f"{METRIC_PREFIX}_reservation_attempts_total"
"""Total reserve() calls, labelled by outcome."""

RESERVATIONS_CLOSED_TOTAL = f"{METRIC_PREFIX}_reservations_closed_total"
"""Total reservations moved from active to closed."""

RESERVATIONS_ACTIVE = f"{METRIC_PREFIX}_reservations_active"
"""Number of currently active reservations."""

RESERVE_LATENCY_SECONDS = f"{METRIC_PREFIX}_reserve_latency_seconds"
"""Time spent inside reserve(), including lookups and commit."""


# =============================================================================
# Catalog Metrics (catalog.py)
# =============================================================================

RESOURCES_REGISTERED_TOTAL = f"{METRIC_PREFIX}_resources_registered_total"
"""Total resources added to a catalog, labelled by media kind."""


# =============================================================================
# Histogram Buckets
# =============================================================================

LATENCY_BUCKETS: list[float] = [
    0.0001,
    0.0005,
    0.001,
    0.005,
    0.01,
    0.05,
    0.1,
    0.5,
    1.0,
]
"""Buckets for in-process operation latency (100us to 1s)."""


__all__ = [
    "CACHE_EVICTIONS_TOTAL",
    "CACHE_HITS_TOTAL",
    "CACHE_MISSES_TOTAL",
    "LATENCY_BUCKETS",
    "METRIC_PREFIX",
    "RESERVATIONS_ACTIVE",
    "RESERVATIONS_CLOSED_TOTAL",
    "RESERVATION_ATTEMPTS_TOTAL",
    "RESERVE_LATENCY_SECONDS",
    "RESOURCES_REGISTERED_TOTAL",
    "SEARCH_REQUESTS_TOTAL",
]
