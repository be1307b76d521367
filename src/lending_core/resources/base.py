# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Reservable capability and the abstract lendable resource.

Two concrete variants exist, selected when the resource is created and never
re-tagged afterwards:

* PhysicalResource (ReservationPolicy.EXCLUSIVE): one holder at a time.
* PooledResource (ReservationPolicy.POOLED): up to ``capacity`` concurrent
  holders tracked by count.

Low-level reserve()/release() calls on an unavailable or idle resource are
silent no-ops. Callers that need a reason for a refusal go through
ReservationService.reserve(), which checks availability first.
"""

import re
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .view import ResourceView

ResourceId = int
HolderId = int

_ISBN_PATTERN = re.compile(r"\d{3}-\d{2}-\d{4}-\d{3}-\d")


class ReservationPolicy(Enum):
    """Allocation policy of a resource."""

    EXCLUSIVE = "exclusive"
    POOLED = "pooled"


class MediaKind(Enum):
    """Media kind reported to consumers of ResourceView."""

    PHYSICAL = "physical"
    DIGITAL = "digital"


def validate_isbn(isbn: str | None) -> bool:
    """Return True for ISBNs laid out as ``ddd-dd-dddd-ddd-d``."""
    return isbn is not None and _ISBN_PATTERN.fullmatch(isbn) is not None


@runtime_checkable
class Reservable(Protocol):
    """Anything exposing availability plus reserve/release semantics."""

    def is_reservable(self) -> bool: ...

    def reserve(self, holder_id: HolderId) -> None: ...

    def release(self, holder_id: HolderId | None = None) -> None: ...

    def describe_reservation(self) -> str: ...


class Resource(ABC):
    """
    Abstract lendable catalog item.

    Identity and bibliographic metadata are fixed at construction. Each
    subclass pins ``policy`` and ``media_kind`` as class attributes.

    Attributes:
        resource_id: Unique id, normally allocated by ResourceCatalog
        title: Title, immutable
        author: Author, immutable
        isbn: Optional ISBN, immutable
        category: Optional category, immutable
    """

    policy: ClassVar[ReservationPolicy]
    media_kind: ClassVar[MediaKind]

    def __init__(
        self,
        resource_id: ResourceId,
        title: str,
        author: str,
        isbn: str | None = None,
        category: str | None = None,
    ) -> None:
        self._resource_id = resource_id
        self._title = title
        self._author = author
        self._isbn = isbn
        self._category = category
        self._holder_id: HolderId | None = None
        self._reserved_at: datetime | None = None

    @property
    def resource_id(self) -> ResourceId:
        return self._resource_id

    @property
    def title(self) -> str:
        return self._title

    @property
    def author(self) -> str:
        return self._author

    @property
    def isbn(self) -> str | None:
        return self._isbn

    @property
    def category(self) -> str | None:
        return self._category

    @property
    def holder_id(self) -> HolderId | None:
        """Holder of the most recent successful reservation still on record."""
        return self._holder_id

    @property
    def reserved_at(self) -> datetime | None:
        return self._reserved_at

    @property
    @abstractmethod
    def available(self) -> bool:
        """Availability flag as reported to consumers."""

    @abstractmethod
    def is_reservable(self) -> bool:
        """True iff the policy-specific availability predicate holds."""

    @abstractmethod
    def reserve(self, holder_id: HolderId) -> None:
        """Commit one reservation, or do nothing if not reservable."""

    @abstractmethod
    def release(self, holder_id: HolderId | None = None) -> None:
        """Give back one unit of allocation."""

    @abstractmethod
    def describe_reservation(self) -> str:
        """Human-readable reservation status."""

    def to_view(self) -> "ResourceView":
        """Snapshot of the fields consumed by reporting."""
        from .view import ResourceView

        return ResourceView(
            resource_id=self._resource_id,
            title=self._title,
            author=self._author,
            category=self._category,
            media_kind=self.media_kind,
            available=self.available,
            reservation_detail=self.describe_reservation(),
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(resource_id={self._resource_id}, "
            f"title={self._title!r}, author={self._author!r})"
        )


__all__ = [
    "HolderId",
    "MediaKind",
    "Reservable",
    "ReservationPolicy",
    "Resource",
    "ResourceId",
    "validate_isbn",
]
