# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Lending Core - resource reservation engine with a bounded query cache.

This library decides whether a lendable resource can be reserved, tracks
availability under two allocation policies, and speeds up repeated catalog
searches with a fixed-size FIFO cache.

Key Features:
    - Exclusive (single copy) and pooled (multi-license) resources
    - Explicit reservation outcomes instead of a bare boolean
    - Bounded query cache with deterministic insertion-order eviction
    - Thread-safe reservation commits
    - Metrics with optional Prometheus export

Quick Start:
    >>> from lending_core import ReservationService
    >>>
    >>> service = ReservationService()
    >>> ebook = service.catalog.add_pooled("Clean Code", "Robert Martin", capacity=3)
    >>> reader = service.holders.register_member("Ana")
    >>> result = service.reserve(reader.holder_id, ebook.resource_id)
    >>> result.succeeded
    True
    >>> service.search("clean")
    (PooledResource(resource_id=1, title='Clean Code', author='Robert Martin'),)

Main Exports:
    - ReservationService, ReserveResult, ReserveOutcome: Reservation entry point
    - ResourceCatalog, PhysicalResource, PooledResource: Resources
    - HolderRegistry, Member, Administrator: Holders
    - BoundedCache: Generic FIFO cache
    - LendingConfig: Configuration options

Version: 1.0.0
"""

__version__ = "1.0.0"

from .cache import BoundedCache, CacheMetrics
from .catalog import ResourceCatalog
from .config import LendingConfig
from .exceptions import (
    CacheConfigError,
    ConfigurationError,
    DuplicateResourceError,
    HolderNotFoundError,
    InvalidIsbnError,
    LendingError,
    ReservationNotFoundError,
)
from .holders import Administrator, Holder, HolderRegistry, Member
from .ids import IdAllocator
from .reporting import InventoryReport, UsageReport
from .reservation import (
    Reservation,
    ReservationLedger,
    ReservationService,
    ReservationStatus,
    ReserveOutcome,
    ReserveResult,
)
from .resources import (
    Condition,
    MediaKind,
    PhysicalResource,
    PooledResource,
    Reservable,
    ReservationPolicy,
    Resource,
    ResourceView,
    validate_isbn,
)

__all__ = [
    "Administrator",
    "BoundedCache",
    "CacheConfigError",
    "CacheMetrics",
    "Condition",
    "ConfigurationError",
    "DuplicateResourceError",
    "Holder",
    "HolderNotFoundError",
    "HolderRegistry",
    "IdAllocator",
    "InvalidIsbnError",
    "InventoryReport",
    "LendingConfig",
    "LendingError",
    "MediaKind",
    "Member",
    "PhysicalResource",
    "PooledResource",
    "Reservable",
    "Reservation",
    "ReservationLedger",
    "ReservationNotFoundError",
    "ReservationPolicy",
    "ReservationService",
    "ReservationStatus",
    "ReserveOutcome",
    "ReserveResult",
    "Resource",
    "ResourceCatalog",
    "ResourceView",
    "UsageReport",
    "validate_isbn",
]
