# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Single-copy resource with an exclusive reservation lock."""

import logging
from datetime import datetime, timezone
from enum import Enum

from .base import HolderId, MediaKind, ReservationPolicy, Resource, ResourceId

logger = logging.getLogger(__name__)


class Condition(Enum):
    """Physical state of a copy. Damaged copies cannot be reserved."""

    NEW = "new"
    USED = "used"
    DAMAGED = "damaged"


class PhysicalResource(Resource):
    """
    A single physical copy.

    State is a binary reserved/free flag plus the reserving holder. The
    holder is set if and only if the copy is reserved.
    """

    policy = ReservationPolicy.EXCLUSIVE
    media_kind = MediaKind.PHYSICAL

    def __init__(
        self,
        resource_id: ResourceId,
        title: str,
        author: str,
        isbn: str | None = None,
        category: str | None = None,
        location: str | None = None,
        condition: Condition = Condition.NEW,
    ) -> None:
        super().__init__(resource_id, title, author, isbn, category)
        self.location = location
        self.condition = condition
        self._reserved = False

    @property
    def reserved(self) -> bool:
        return self._reserved

    @property
    def available(self) -> bool:
        return not self._reserved

    def is_reservable(self) -> bool:
        return not self._reserved and self.condition is not Condition.DAMAGED

    def reserve(self, holder_id: HolderId) -> None:
        if not self.is_reservable():
            logger.debug(
                "Ignoring reserve on unavailable copy: resource_id=%s, holder_id=%s",
                self.resource_id,
                holder_id,
            )
            return

        self._reserved = True
        self._holder_id = holder_id
        self._reserved_at = datetime.now(timezone.utc)

    def release(self, holder_id: HolderId | None = None) -> None:
        # The releasing holder is not checked against the reserving one.
        self._reserved = False
        self._holder_id = None
        self._reserved_at = None

    def describe_reservation(self) -> str:
        if self._reserved and self._reserved_at is not None:
            return (
                f"Reserved by holder {self._holder_id} "
                f"on {self._reserved_at.date().isoformat()}"
            )
        if self.condition is Condition.DAMAGED:
            return "Unavailable (damaged)"
        return "Available"


__all__ = ["Condition", "PhysicalResource"]
