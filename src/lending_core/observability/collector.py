# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metrics collector for the lending core.

Every update lands in an in-process store first, which backs get_metrics(),
get_counter() and get_gauge(). When Prometheus is enabled the same update is
also applied to a prometheus_client metric registered on demand.

Usage:
    >>> from lending_core.observability.collector import get_metrics_collector
    >>> collector = get_metrics_collector()
    >>> collector.inc_counter('lending_reservation_attempts_total',
    ...                       labels={'outcome': 'success'})
    >>> snapshot = collector.get_metrics()
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, ClassVar

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    start_http_server,
)

from .constants import (
    CACHE_EVICTIONS_TOTAL,
    CACHE_HITS_TOTAL,
    CACHE_MISSES_TOTAL,
    LATENCY_BUCKETS,
    RESERVATION_ATTEMPTS_TOTAL,
    RESERVATIONS_ACTIVE,
    RESERVATIONS_CLOSED_TOTAL,
    RESERVE_LATENCY_SECONDS,
    RESOURCES_REGISTERED_TOTAL,
    SEARCH_REQUESTS_TOTAL,
)

logger = logging.getLogger(__name__)

# Histogram samples kept per series; trimmed to half once exceeded
_MAX_OBSERVATIONS = 10000


@dataclass
class MetricDefinition:
    """Name, type, help text and label schema of one metric."""

    name: str
    metric_type: str  # 'counter', 'gauge' or 'histogram'
    description: str
    label_names: tuple[str, ...] = ()
    buckets: list[float] | None = None


def _define(
    name: str,
    metric_type: str,
    description: str,
    label_names: tuple[str, ...] = (),
    buckets: list[float] | None = None,
) -> tuple[str, MetricDefinition]:
    return name, MetricDefinition(name, metric_type, description, label_names, buckets)


METRIC_DEFINITIONS: dict[str, MetricDefinition] = dict(
    [
        _define(SEARCH_REQUESTS_TOTAL, "counter", "Catalog searches issued"),
        _define(CACHE_HITS_TOTAL, "counter", "Searches answered from the query cache"),
        _define(CACHE_MISSES_TOTAL, "counter", "Searches that had to scan the catalog"),
        _define(CACHE_EVICTIONS_TOTAL, "counter", "Query cache entries evicted"),
        _define(
            RESERVATION_ATTEMPTS_TOTAL,
            "counter",
            "Reservation attempts by outcome",
            ("outcome",),
        ),
        _define(RESERVATIONS_CLOSED_TOTAL, "counter", "Reservations closed"),
        _define(RESERVATIONS_ACTIVE, "gauge", "Reservations currently active"),
        _define(
            RESERVE_LATENCY_SECONDS,
            "histogram",
            "Time spent in reserve()",
            ("outcome",),
            LATENCY_BUCKETS,
        ),
        _define(
            RESOURCES_REGISTERED_TOTAL,
            "counter",
            "Resources added to a catalog by media kind",
            ("media_kind",),
        ),
    ]
)

_PROM_TYPES: dict[str, type[Any]] = {
    "counter": Counter,
    "gauge": Gauge,
    "histogram": Histogram,
}


def _series_key(labels: dict[str, str] | None) -> str:
    """Flatten labels into ``k1=v1,k2=v2`` (sorted); empty string for none."""
    if not labels:
        return ""
    return ",".join(f"{k}={v}" for k, v in sorted(labels.items()))


class UnifiedMetricsCollector:
    """
    Thread-safe metrics store with an optional Prometheus mirror.

    A reentrant lock guards the store. Each metric accepts at most
    MAX_LABEL_COMBINATIONS distinct label sets; further sets are dropped
    with a warning.

    Example:
        >>> collector = UnifiedMetricsCollector(enable_prometheus=False)
        >>> collector.inc_counter('lending_cache_hits_total')
        >>> collector.get_counter('lending_cache_hits_total')
        1
    """

    MAX_LABEL_COMBINATIONS: ClassVar[int] = 1000

    def __init__(
        self,
        enable_prometheus: bool = True,
        registry: CollectorRegistry | None = None,
    ) -> None:
        """
        Args:
            enable_prometheus: Mirror updates into prometheus_client
            registry: Registry to register on; tests pass a fresh
                CollectorRegistry to stay off the process-wide default
        """
        self._enable_prometheus = enable_prometheus
        self._registry = registry if registry is not None else REGISTRY
        self._lock = threading.RLock()

        self._counters: defaultdict[str, defaultdict[str, int]] = defaultdict(
            lambda: defaultdict(int)
        )
        self._gauges: defaultdict[str, defaultdict[str, float]] = defaultdict(
            lambda: defaultdict(float)
        )
        self._histograms: defaultdict[str, defaultdict[str, list[float]]] = defaultdict(
            lambda: defaultdict(list)
        )
        self._seen_series: defaultdict[str, set[str]] = defaultdict(set)

        self._prom_metrics: dict[str, Any] = {}
        self._server_running = False

        logger.debug(
            "UnifiedMetricsCollector created (prometheus %s)",
            "on" if enable_prometheus else "off",
        )

    # === Internal helpers ===

    def _admit(self, name: str, key: str) -> bool:
        """Record a label set for ``name``; False once the metric is full."""
        seen = self._seen_series[name]
        if key in seen:
            return True
        if len(seen) >= self.MAX_LABEL_COMBINATIONS:
            logger.warning(
                f"Metric {name} already has {self.MAX_LABEL_COMBINATIONS} label "
                f"sets; dropping {key!r}"
            )
            return False
        seen.add(key)
        return True

    def _prom_metric(self, name: str, metric_type: str) -> Any | None:
        if not self._enable_prometheus:
            return None

        with self._lock:
            if name in self._prom_metrics:
                return self._prom_metrics[name]

            defn = METRIC_DEFINITIONS.get(name)
            if defn is None or defn.metric_type != metric_type:
                defn = MetricDefinition(name, metric_type, f"Dynamic {metric_type}: {name}")

            kwargs: dict[str, Any] = {"registry": self._registry}
            if metric_type == "histogram":
                kwargs["buckets"] = defn.buckets or LATENCY_BUCKETS

            try:
                metric = _PROM_TYPES[metric_type](
                    name, defn.description, list(defn.label_names), **kwargs
                )
            except ValueError as e:
                # Already registered by another collector on this registry
                logger.warning(f"Could not register Prometheus {metric_type} {name}: {e}")
                return None

            self._prom_metrics[name] = metric
            return metric

    def _mirror(
        self,
        name: str,
        metric_type: str,
        method: str,
        value: float,
        labels: dict[str, str] | None,
    ) -> None:
        metric = self._prom_metric(name, metric_type)
        if metric is None:
            return
        try:
            target = metric.labels(**labels) if labels else metric
            getattr(target, method)(value)
        except ValueError as e:
            logger.debug(f"Prometheus {method} on {name} rejected: {e}")

    def _update_gauge(
        self,
        name: str,
        method: str,
        value: float,
        labels: dict[str, str] | None,
    ) -> None:
        key = _series_key(labels)
        with self._lock:
            if not self._admit(name, key):
                return
            series = self._gauges[name]
            if method == "set":
                series[key] = value
            elif method == "inc":
                series[key] += value
            else:
                series[key] -= value
        self._mirror(name, "gauge", method, value, labels)

    # === Updates ===

    def inc_counter(
        self,
        name: str,
        value: int = 1,
        labels: dict[str, str] | None = None,
    ) -> None:
        """
        Add ``value`` to a counter.

        Raises:
            ValueError: If value is negative
        """
        if value < 0:
            raise ValueError("Counter increment must be non-negative")

        key = _series_key(labels)
        with self._lock:
            if not self._admit(name, key):
                return
            self._counters[name][key] += value
        self._mirror(name, "counter", "inc", value, labels)

    def set_gauge(
        self, name: str, value: float, labels: dict[str, str] | None = None
    ) -> None:
        self._update_gauge(name, "set", value, labels)

    def inc_gauge(
        self, name: str, value: float = 1.0, labels: dict[str, str] | None = None
    ) -> None:
        self._update_gauge(name, "inc", value, labels)

    def dec_gauge(
        self, name: str, value: float = 1.0, labels: dict[str, str] | None = None
    ) -> None:
        self._update_gauge(name, "dec", value, labels)

    def observe_histogram(
        self, name: str, value: float, labels: dict[str, str] | None = None
    ) -> None:
        key = _series_key(labels)
        with self._lock:
            if not self._admit(name, key):
                return
            samples = self._histograms[name][key]
            samples.append(value)
            if len(samples) > _MAX_OBSERVATIONS:
                self._histograms[name][key] = samples[-(_MAX_OBSERVATIONS // 2) :]
        self._mirror(name, "histogram", "observe", value, labels)

    # === Reads ===

    def get_metrics(self) -> dict[str, Any]:
        """
        JSON-friendly snapshot.

        Counters and gauges map metric name to {series key: value}.
        Histograms map series keys to count/sum/avg/min/max of the retained
        samples.
        """
        with self._lock:
            counters = {name: dict(series) for name, series in self._counters.items()}
            gauges = {name: dict(series) for name, series in self._gauges.items()}
            histograms = {
                name: {
                    key: {
                        "count": len(samples),
                        "sum": sum(samples),
                        "avg": sum(samples) / len(samples),
                        "min": min(samples),
                        "max": max(samples),
                    }
                    for key, samples in series.items()
                    if samples
                }
                for name, series in self._histograms.items()
            }
        return {"counters": counters, "gauges": gauges, "histograms": histograms}

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> int:
        """Current value of one counter series, 0 if never incremented."""
        with self._lock:
            series = self._counters.get(name)
            return series.get(_series_key(labels), 0) if series is not None else 0

    def get_gauge(self, name: str, labels: dict[str, str] | None = None) -> float:
        """Current value of one gauge series, 0.0 if never set."""
        with self._lock:
            series = self._gauges.get(name)
            return series.get(_series_key(labels), 0.0) if series is not None else 0.0

    def reset(self) -> None:
        """Drop every stored series. Registered Prometheus metrics are kept."""
        with self._lock:
            self._counters.clear()
            self._gauges.clear()
            self._histograms.clear()
            self._seen_series.clear()
        logger.debug("Metrics collector reset")

    # === Prometheus endpoint ===

    def start_http_server(self, host: str = "127.0.0.1", port: int = 9090) -> bool:
        """
        Serve the registry for scraping from a daemon thread.

        Returns:
            True when serving (including an earlier successful start), False
            when Prometheus is disabled or the port cannot be bound
        """
        if not self._enable_prometheus:
            logger.warning("Prometheus is disabled; metrics endpoint not started")
            return False
        if self._server_running:
            return True

        try:
            start_http_server(port, addr=host, registry=self._registry)
        except OSError as e:
            logger.error(f"Could not start metrics endpoint on {host}:{port}: {e}")
            return False

        self._server_running = True
        logger.info(f"Serving Prometheus metrics on {host}:{port}")
        return True

    @property
    def prometheus_enabled(self) -> bool:
        return self._enable_prometheus

    @property
    def server_running(self) -> bool:
        return self._server_running


# =============================================================================
# Process-wide collector
# =============================================================================

_global_collector: UnifiedMetricsCollector | None = None
_collector_lock = threading.Lock()


def get_metrics_collector(enable_prometheus: bool = False) -> UnifiedMetricsCollector:
    """
    Return the shared collector, creating it on first use.

    ``enable_prometheus`` only matters for the call that creates it.
    """
    global _global_collector

    if _global_collector is None:
        with _collector_lock:
            if _global_collector is None:
                _global_collector = UnifiedMetricsCollector(
                    enable_prometheus=enable_prometheus
                )
    return _global_collector


def reset_metrics_collector() -> None:
    """Discard the shared collector so the next call builds a fresh one."""
    global _global_collector
    with _collector_lock:
        if _global_collector is not None:
            _global_collector.reset()
        _global_collector = None


__all__ = [
    "METRIC_DEFINITIONS",
    "MetricDefinition",
    "UnifiedMetricsCollector",
    "get_metrics_collector",
    "reset_metrics_collector",
]
