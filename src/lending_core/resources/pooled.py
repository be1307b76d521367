# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Multi-license resource with a bounded pool of concurrent holders."""

import logging
from datetime import datetime, timezone

from .base import HolderId, MediaKind, ReservationPolicy, Resource, ResourceId

logger = logging.getLogger(__name__)


class PooledResource(Resource):
    """
    A digital resource lent under ``capacity`` concurrent licenses.

    Only the number of licenses in use is tracked. ``holder_id`` holds the
    last reserving holder and is overwritten on every reservation; release()
    gives back one license without checking who returns it.

    With ``track_holders=True`` the resource additionally keeps the list of
    current holders. release(holder_id) then frees that holder's license
    (no-op if it holds none) and release() frees the earliest one.

    The ``available`` flag always equals ``in_use < capacity`` and is
    recomputed on every reserve and release.
    """

    policy = ReservationPolicy.POOLED
    media_kind = MediaKind.DIGITAL

    def __init__(
        self,
        resource_id: ResourceId,
        title: str,
        author: str,
        isbn: str | None = None,
        category: str | None = None,
        capacity: int = 1,
        file_path: str | None = None,
        track_holders: bool = False,
    ) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")

        super().__init__(resource_id, title, author, isbn, category)
        self.file_path = file_path
        self._capacity = capacity
        self._in_use = 0
        self._available = True
        self._track_holders = track_holders
        self._holders: list[HolderId] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def in_use(self) -> int:
        return self._in_use

    @property
    def available(self) -> bool:
        return self._available

    @property
    def track_holders(self) -> bool:
        return self._track_holders

    @property
    def holders(self) -> list[HolderId]:
        """Current holders, oldest first. Empty unless track_holders is on."""
        return list(self._holders)

    def is_reservable(self) -> bool:
        return self._in_use < self._capacity

    def reserve(self, holder_id: HolderId) -> None:
        if not self.is_reservable():
            logger.debug(
                "Ignoring reserve on saturated pool: resource_id=%s, in_use=%s/%s",
                self.resource_id,
                self._in_use,
                self._capacity,
            )
            return

        self._in_use += 1
        self._holder_id = holder_id
        self._reserved_at = datetime.now(timezone.utc)
        if self._track_holders:
            self._holders.append(holder_id)
        self._refresh_available()

    def release(self, holder_id: HolderId | None = None) -> None:
        if self._in_use == 0:
            return

        if self._track_holders:
            if holder_id is None:
                self._holders.pop(0)
            elif holder_id in self._holders:
                self._holders.remove(holder_id)
            else:
                logger.debug(
                    "Holder %s holds no license on resource %s",
                    holder_id,
                    self.resource_id,
                )
                return

        self._in_use -= 1
        self._refresh_available()

    def describe_reservation(self) -> str:
        if self._in_use == 0 or self._reserved_at is None:
            return f"Available ({self._capacity} licenses)"
        return (
            f"{self._in_use}/{self._capacity} licenses in use, "
            f"last reserved by holder {self._holder_id} "
            f"on {self._reserved_at.date().isoformat()}"
        )

    def _refresh_available(self) -> None:
        self._available = self._in_use < self._capacity


__all__ = ["PooledResource"]
