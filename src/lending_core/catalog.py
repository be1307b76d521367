# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""ResourceCatalog: owns lendable resources and runs predicate searches."""

import logging
import threading
from collections.abc import Callable

from .exceptions import DuplicateResourceError, InvalidIsbnError
from .ids import IdAllocator
from .observability.constants import RESOURCES_REGISTERED_TOTAL
from .observability.protocols import MetricsCollectorProtocol
from .resources import (
    Condition,
    PhysicalResource,
    PooledResource,
    Resource,
    ResourceId,
    ResourceView,
    validate_isbn,
)

logger = logging.getLogger(__name__)

ResourcePredicate = Callable[[Resource], bool]


class ResourceCatalog:
    """
    Collection of resources with id allocation and predicate search.

    Resources are kept in insertion order, so filter() and all() return
    results in the order resources were added. Ids come from the catalog's
    own IdAllocator; resources are never removed.

    All operations take the catalog lock. Predicates passed to filter() run
    under that lock and must not call back into the catalog.
    """

    def __init__(
        self,
        track_pool_holders: bool = False,
        metrics_collector: MetricsCollectorProtocol | None = None,
    ) -> None:
        self._resources: list[Resource] = []
        self._ids = IdAllocator()
        self._track_pool_holders = track_pool_holders
        self._lock = threading.Lock()
        self._metrics_collector = metrics_collector

    def add(self, resource: Resource) -> Resource:
        """
        Add a pre-built resource.

        Raises:
            DuplicateResourceError: If a resource with the same id exists
        """
        with self._lock:
            if any(r.resource_id == resource.resource_id for r in self._resources):
                raise DuplicateResourceError(resource.resource_id)
            self._resources.append(resource)
            self._ids.observe(resource.resource_id)

        if self._metrics_collector:
            self._metrics_collector.inc_counter(
                RESOURCES_REGISTERED_TOTAL,
                labels={"media_kind": resource.media_kind.value},
            )
        logger.debug(
            "Added resource: resource_id=%s, policy=%s, title=%r",
            resource.resource_id,
            resource.policy.value,
            resource.title,
        )
        return resource

    def add_physical(
        self,
        title: str,
        author: str,
        isbn: str | None = None,
        category: str | None = None,
        location: str | None = None,
        condition: Condition = Condition.NEW,
    ) -> PhysicalResource:
        """Create a physical copy with the next catalog id and add it."""
        self._check_isbn(isbn)
        resource = PhysicalResource(
            self._ids.next_id(),
            title,
            author,
            isbn=isbn,
            category=category,
            location=location,
            condition=condition,
        )
        self.add(resource)
        return resource

    def add_pooled(
        self,
        title: str,
        author: str,
        isbn: str | None = None,
        category: str | None = None,
        capacity: int = 1,
        file_path: str | None = None,
        track_holders: bool | None = None,
    ) -> PooledResource:
        """
        Create a pooled resource with the next catalog id and add it.

        ``track_holders`` defaults to the catalog-wide setting.
        """
        self._check_isbn(isbn)
        resource = PooledResource(
            self._ids.next_id(),
            title,
            author,
            isbn=isbn,
            category=category,
            capacity=capacity,
            file_path=file_path,
            track_holders=(
                self._track_pool_holders if track_holders is None else track_holders
            ),
        )
        self.add(resource)
        return resource

    def all(self) -> list[Resource]:
        """Snapshot of every resource; mutating the list leaves the catalog intact."""
        with self._lock:
            return list(self._resources)

    def filter(self, predicate: ResourcePredicate) -> list[Resource]:
        with self._lock:
            return [r for r in self._resources if predicate(r)]

    def find_by_id(self, resource_id: ResourceId) -> Resource | None:
        with self._lock:
            for resource in self._resources:
                if resource.resource_id == resource_id:
                    return resource
        return None

    def views(self) -> list[ResourceView]:
        return [r.to_view() for r in self.all()]

    def __len__(self) -> int:
        with self._lock:
            return len(self._resources)

    @staticmethod
    def _check_isbn(isbn: str | None) -> None:
        if isbn is not None and not validate_isbn(isbn):
            raise InvalidIsbnError(isbn)


__all__ = ["ResourceCatalog", "ResourcePredicate"]
