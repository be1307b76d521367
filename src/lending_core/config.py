# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Configuration for the lending core.

This module provides the configuration dataclass shared by the reservation
service, the query cache, the holder registry and the metrics layer.
"""

from dataclasses import dataclass

from .exceptions import CacheConfigError

DEFAULT_QUERY_CACHE_SIZE = 50
DEFAULT_LOAN_PERIOD_DAYS = 14
DEFAULT_MAX_ACTIVE_RESERVATIONS = 3


@dataclass
class LendingConfig:
    """
    Configuration for the reservation service and its collaborators.

    All values are validated on construction.
    """

    # === Query Cache ===

    query_cache_size: int = DEFAULT_QUERY_CACHE_SIZE
    """Maximum number of cached search results before FIFO eviction."""

    # === Reservations ===

    loan_period_days: int = DEFAULT_LOAN_PERIOD_DAYS
    """Days between a reservation's creation and its expiry."""

    max_active_reservations: int = DEFAULT_MAX_ACTIVE_RESERVATIONS
    """Active reservations a regular member may hold at once."""

    track_pool_holders: bool = False
    """Default for pooled resources created through the catalog.

    When False, pooled resources only remember the last reserving holder and
    release() does not check who is releasing. When True they keep the list
    of current holders.
    """

    # === Metrics and Monitoring ===

    metrics_enabled: bool = True
    """Enable metrics collection."""

    enable_prometheus: bool = False
    """Mirror metrics into prometheus_client."""

    prometheus_host: str = "127.0.0.1"
    """Prometheus metrics host."""

    prometheus_port: int = 9090
    """Prometheus metrics port."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.query_cache_size < 1:
            raise CacheConfigError(
                self.query_cache_size,
                f"query_cache_size must be at least 1, got {self.query_cache_size}",
            )
        if self.loan_period_days < 1:
            raise ValueError("loan_period_days must be at least 1")
        if self.max_active_reservations < 1:
            raise ValueError("max_active_reservations must be at least 1")
        if not 0 < self.prometheus_port < 65536:
            raise ValueError("prometheus_port must be between 1 and 65535")


__all__ = [
    "DEFAULT_LOAN_PERIOD_DAYS",
    "DEFAULT_MAX_ACTIVE_RESERVATIONS",
    "DEFAULT_QUERY_CACHE_SIZE",
    "LendingConfig",
]
