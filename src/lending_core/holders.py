# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Holders: the entities allowed to reserve resources.

The reservation service only needs the narrow interface of Holder: an id,
an eligibility predicate, an active-reservation counter and a way to deliver
a notification. Members and administrators differ only in eligibility.
"""

import logging
import threading
from abc import ABC, abstractmethod

from .config import DEFAULT_MAX_ACTIVE_RESERVATIONS
from .exceptions import HolderNotFoundError
from .ids import IdAllocator
from .resources import HolderId

logger = logging.getLogger(__name__)


class Holder(ABC):
    """Base class for anything that can hold reservations."""

    kind: str = "holder"

    def __init__(
        self,
        holder_id: HolderId,
        name: str,
        email: str | None = None,
        accepts_notifications: bool = True,
    ) -> None:
        self._holder_id = holder_id
        self.name = name
        self.email = email
        self.active = True
        self.accepts_notifications = accepts_notifications
        self._active_reservations = 0
        self._inbox: list[str] = []

    @property
    def holder_id(self) -> HolderId:
        return self._holder_id

    @property
    def active_reservations(self) -> int:
        return self._active_reservations

    @property
    def inbox(self) -> list[str]:
        return list(self._inbox)

    @abstractmethod
    def can_reserve(self) -> bool:
        """Eligibility predicate consulted before every reservation."""

    def record_reservation(self) -> None:
        self._active_reservations += 1

    def record_release(self) -> None:
        if self._active_reservations > 0:
            self._active_reservations -= 1

    def notify(self, message: str) -> None:
        """Deliver a message if this holder accepts notifications."""
        if not self.accepts_notifications:
            return
        self._inbox.append(message)
        logger.debug("Notified holder %s: %s", self._holder_id, message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(holder_id={self._holder_id}, name={self.name!r})"


class Member(Holder):
    """A regular member: eligible while active and under the reservation limit."""

    kind = "member"

    def __init__(
        self,
        holder_id: HolderId,
        name: str,
        email: str | None = None,
        accepts_notifications: bool = True,
        max_active_reservations: int = DEFAULT_MAX_ACTIVE_RESERVATIONS,
    ) -> None:
        super().__init__(holder_id, name, email, accepts_notifications)
        self.max_active_reservations = max_active_reservations

    def can_reserve(self) -> bool:
        return self.active and self._active_reservations < self.max_active_reservations


class Administrator(Holder):
    """Administrators may always reserve."""

    kind = "administrator"

    def can_reserve(self) -> bool:
        return True


class HolderRegistry:
    """Owns holders and allocates their ids."""

    def __init__(
        self, max_active_reservations: int = DEFAULT_MAX_ACTIVE_RESERVATIONS
    ) -> None:
        self._holders: dict[HolderId, Holder] = {}
        self._ids = IdAllocator()
        self._max_active_reservations = max_active_reservations
        self._lock = threading.Lock()

    def register_member(
        self,
        name: str,
        email: str | None = None,
        accepts_notifications: bool = True,
    ) -> Member:
        member = Member(
            self._ids.next_id(),
            name,
            email=email,
            accepts_notifications=accepts_notifications,
            max_active_reservations=self._max_active_reservations,
        )
        self._store(member)
        return member

    def register_administrator(
        self,
        name: str,
        email: str | None = None,
        accepts_notifications: bool = True,
    ) -> Administrator:
        admin = Administrator(
            self._ids.next_id(),
            name,
            email=email,
            accepts_notifications=accepts_notifications,
        )
        self._store(admin)
        return admin

    def find_by_id(self, holder_id: HolderId) -> Holder | None:
        with self._lock:
            return self._holders.get(holder_id)

    def get(self, holder_id: HolderId) -> Holder:
        """
        Raises:
            HolderNotFoundError: If no holder has this id
        """
        holder = self.find_by_id(holder_id)
        if holder is None:
            raise HolderNotFoundError(holder_id)
        return holder

    def all(self) -> list[Holder]:
        with self._lock:
            return list(self._holders.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._holders)

    def _store(self, holder: Holder) -> None:
        with self._lock:
            self._holders[holder.holder_id] = holder
        logger.debug("Registered %s %s: %s", holder.kind, holder.holder_id, holder.name)


__all__ = ["Administrator", "Holder", "HolderRegistry", "Member"]
