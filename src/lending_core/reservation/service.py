# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""ReservationService: cache-assisted search and transactional reservations."""

import logging
import threading
import time
from datetime import datetime

from ..cache import BoundedCache
from ..catalog import ResourceCatalog
from ..config import LendingConfig
from ..holders import Holder, HolderRegistry
from ..observability.collector import UnifiedMetricsCollector
from ..observability.constants import (
    RESERVATION_ATTEMPTS_TOTAL,
    RESERVATIONS_ACTIVE,
    RESERVATIONS_CLOSED_TOTAL,
    RESERVE_LATENCY_SECONDS,
    SEARCH_REQUESTS_TOTAL,
)
from ..observability.protocols import MetricsCollectorProtocol
from ..reporting import InventoryReport, UsageReport
from ..resources import HolderId, Resource, ResourceId
from .ledger import ReservationLedger
from .models import Reservation
from .result import ReserveOutcome, ReserveResult

logger = logging.getLogger(__name__)

SearchResult = tuple[Resource, ...]

# Separates title and author in cache keys; cannot appear in typed queries
_KEY_SEPARATOR = "\x1f"


class ReservationService:
    """
    Orchestrates catalog lookups, the query cache and reservation commits.

    Locking:
        - The catalog guards itself with its own lock.
        - ``_search_lock`` serializes every access to the query cache.
        - ``_reserve_lock`` spans the whole check-mutate-record sequence of
          reserve() and close_reservation(), so two callers can never both
          take the last free slot of a resource.

    Search results are cached without invalidation. Resources added to the
    catalog after a query was cached do not show up for that query until the
    entry is evicted or clear_search_cache() is called.

    Example:
        >>> service = ReservationService()
        >>> book = service.catalog.add_physical("Clean Code", "Robert Martin")
        >>> reader = service.holders.register_member("Ana")
        >>> service.reserve(reader.holder_id, book.resource_id).outcome
        <ReserveOutcome.SUCCESS: 'success'>
    """

    def __init__(
        self,
        catalog: ResourceCatalog | None = None,
        holders: HolderRegistry | None = None,
        config: LendingConfig | None = None,
        metrics_collector: MetricsCollectorProtocol | None = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            catalog: Resource catalog; a fresh one is created when omitted
            holders: Holder registry; a fresh one is created when omitted
            config: Service configuration (defaults to LendingConfig())
            metrics_collector: Collector for metrics; when omitted and
                config.metrics_enabled is set, a private
                UnifiedMetricsCollector is created
        """
        self.config = config or LendingConfig()

        if metrics_collector is None and self.config.metrics_enabled:
            metrics_collector = UnifiedMetricsCollector(
                enable_prometheus=self.config.enable_prometheus
            )
        self._metrics_collector = metrics_collector

        self.catalog = catalog if catalog is not None else ResourceCatalog(
            track_pool_holders=self.config.track_pool_holders,
            metrics_collector=metrics_collector,
        )
        self.holders = holders if holders is not None else HolderRegistry(
            max_active_reservations=self.config.max_active_reservations
        )

        self._cache: BoundedCache[str, SearchResult] = BoundedCache(
            self.config.query_cache_size, metrics_collector=metrics_collector
        )
        self._ledger = ReservationLedger(self.config.loan_period_days)

        self._search_lock = threading.Lock()
        self._reserve_lock = threading.RLock()

        logger.info(
            f"ReservationService initialized "
            f"(cache_size={self.config.query_cache_size}, "
            f"loan_period_days={self.config.loan_period_days})"
        )

    @property
    def metrics_collector(self) -> MetricsCollectorProtocol | None:
        return self._metrics_collector

    @property
    def search_cache(self) -> BoundedCache[str, SearchResult]:
        return self._cache

    def start_metrics_server(self) -> bool:
        """
        Expose metrics for scraping on config.prometheus_host/prometheus_port.

        Returns:
            True when the endpoint is serving, False when metrics or
            Prometheus are disabled or the port cannot be bound
        """
        if not isinstance(self._metrics_collector, UnifiedMetricsCollector):
            logger.warning("No Prometheus-capable metrics collector configured")
            return False
        return self._metrics_collector.start_http_server(
            self.config.prometheus_host, self.config.prometheus_port
        )

    # === Search ===

    @staticmethod
    def cache_key(title: str, author: str | None = None) -> str:
        """Build the cache key from normalized (trimmed, lower-cased) terms."""
        key = title.strip().lower()
        if author is not None:
            key += _KEY_SEPARATOR + author.strip().lower()
        return key

    def search(self, title: str, author: str | None = None) -> SearchResult:
        """
        Find resources whose title (and optionally author) contains the query.

        Matching is a case-insensitive substring test. A missing author
        matches every resource. Repeated queries with the same normalized
        terms are served from the cache without touching the catalog.
        """
        key = self.cache_key(title, author)
        title_term = title.strip().lower()
        author_term = author.strip().lower() if author is not None else None

        if self._metrics_collector:
            self._metrics_collector.inc_counter(SEARCH_REQUESTS_TOTAL)

        with self._search_lock:
            cached = self._cache.get(key)
            if cached is not None:
                logger.debug("Search cache hit: %r", key)
                return cached

            def matches(resource: Resource) -> bool:
                if title_term not in resource.title.lower():
                    return False
                return author_term is None or author_term in resource.author.lower()

            result: SearchResult = tuple(self.catalog.filter(matches))
            self._cache.put(key, result)

        logger.debug("Search cache miss: %r (%d results)", key, len(result))
        return result

    def clear_search_cache(self) -> None:
        with self._search_lock:
            self._cache.clear()

    # === Reservations ===

    def reserve(self, holder_id: HolderId, resource_id: ResourceId) -> ReserveResult:
        """
        Reserve a resource for a holder.

        Checks run in order (holder exists, resource exists, holder eligible,
        resource reservable) and the first failure is returned without
        changing any state. On success the resource is reserved, one ACTIVE
        reservation is recorded, and the holder's counter and inbox are
        updated.
        """
        start = time.perf_counter()

        with self._reserve_lock:
            result = self._reserve_locked(holder_id, resource_id)

        if self._metrics_collector:
            labels = {"outcome": result.outcome.value}
            self._metrics_collector.inc_counter(RESERVATION_ATTEMPTS_TOTAL, labels=labels)
            self._metrics_collector.observe_histogram(
                RESERVE_LATENCY_SECONDS, time.perf_counter() - start, labels=labels
            )
            if result.succeeded:
                self._metrics_collector.inc_gauge(RESERVATIONS_ACTIVE)

        if result.succeeded:
            logger.info(
                "Reservation %s: holder %s reserved resource %s",
                result.reservation.reservation_id if result.reservation else -1,
                holder_id,
                resource_id,
            )
        else:
            logger.debug(
                "Reservation refused (%s): holder_id=%s, resource_id=%s",
                result.outcome.value,
                holder_id,
                resource_id,
            )
        return result

    def _reserve_locked(
        self, holder_id: HolderId, resource_id: ResourceId
    ) -> ReserveResult:
        """Run the reservation checks and commit. Caller holds _reserve_lock."""
        holder = self.holders.find_by_id(holder_id)
        if holder is None:
            return ReserveResult(ReserveOutcome.HOLDER_NOT_FOUND, holder_id, resource_id)

        resource = self.catalog.find_by_id(resource_id)
        if resource is None:
            return ReserveResult(
                ReserveOutcome.RESOURCE_NOT_FOUND, holder_id, resource_id
            )

        if not holder.can_reserve():
            return ReserveResult(
                ReserveOutcome.HOLDER_INELIGIBLE, holder_id, resource_id
            )

        if not resource.is_reservable():
            return ReserveResult(
                ReserveOutcome.RESOURCE_UNAVAILABLE, holder_id, resource_id
            )

        resource.reserve(holder_id)
        reservation = self._ledger.open(holder_id, resource_id)
        holder.record_reservation()
        holder.notify(f"Reservation confirmed: {resource.title}")

        return ReserveResult(
            ReserveOutcome.SUCCESS, holder_id, resource_id, reservation=reservation
        )

    def close_reservation(self, reservation_id: int) -> Reservation:
        """
        Close an ACTIVE reservation and give its slot back.

        Closing an already CLOSED reservation returns it unchanged and
        releases nothing.

        Raises:
            ReservationNotFoundError: If the id is unknown
        """
        with self._reserve_lock:
            reservation, changed = self._ledger.close(reservation_id)
            if not changed:
                return reservation

            resource = self.catalog.find_by_id(reservation.resource_id)
            if resource is not None:
                resource.release(reservation.holder_id)

            holder = self.holders.find_by_id(reservation.holder_id)
            if holder is not None:
                holder.record_release()

        if self._metrics_collector:
            self._metrics_collector.inc_counter(RESERVATIONS_CLOSED_TOTAL)
            self._metrics_collector.dec_gauge(RESERVATIONS_ACTIVE)

        logger.info(
            "Closed reservation %s (resource %s)",
            reservation_id,
            reservation.resource_id,
        )
        return reservation

    def get_reservation(self, reservation_id: int) -> Reservation:
        """
        Raises:
            ReservationNotFoundError: If the id is unknown
        """
        with self._reserve_lock:
            return self._ledger.get(reservation_id)

    def reservations(self) -> list[Reservation]:
        with self._reserve_lock:
            return self._ledger.all()

    def active_reservations(self) -> list[Reservation]:
        with self._reserve_lock:
            return self._ledger.active()

    def expired_reservations(self, now: datetime | None = None) -> list[Reservation]:
        """ACTIVE reservations past their expiry. Closing them is up to the caller."""
        with self._reserve_lock:
            return self._ledger.expired(now)

    def reservations_for(self, holder: Holder | HolderId) -> list[Reservation]:
        holder_id = holder.holder_id if isinstance(holder, Holder) else holder
        return [r for r in self.reservations() if r.holder_id == holder_id]

    # === Reports ===

    def usage_report(self) -> UsageReport:
        return UsageReport.from_reservations(self.reservations())

    def inventory_report(self) -> InventoryReport:
        return InventoryReport.from_resources(self.catalog.all())


__all__ = ["ReservationService", "SearchResult"]
