# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""ReservationLedger: append-only store of reservation records."""

import logging
from datetime import datetime, timezone

from ..config import DEFAULT_LOAN_PERIOD_DAYS
from ..exceptions import ReservationNotFoundError
from ..ids import IdAllocator
from .models import Reservation

logger = logging.getLogger(__name__)


class ReservationLedger:
    """
    Append-only reservation records indexed by reservation id.

    Records are never removed. Closing a reservation swaps in the CLOSED copy
    under the same id, keeping creation order.

    The ledger holds no lock of its own; ReservationService mutates it only
    while holding its reservation lock.
    """

    def __init__(self, loan_period_days: int = DEFAULT_LOAN_PERIOD_DAYS) -> None:
        self._loan_period_days = loan_period_days
        self._records: dict[int, Reservation] = {}
        self._ids = IdAllocator()

    def open(self, holder_id: int, resource_id: int) -> Reservation:
        """Create, store and return a new ACTIVE reservation."""
        reservation = Reservation.open(
            self._ids.next_id(),
            holder_id,
            resource_id,
            loan_period_days=self._loan_period_days,
        )
        self._records[reservation.reservation_id] = reservation
        logger.debug(
            "Opened reservation: reservation_id=%s, holder_id=%s, resource_id=%s",
            reservation.reservation_id,
            holder_id,
            resource_id,
        )
        return reservation

    def get(self, reservation_id: int) -> Reservation:
        """
        Raises:
            ReservationNotFoundError: If the id is unknown
        """
        try:
            return self._records[reservation_id]
        except KeyError:
            raise ReservationNotFoundError(reservation_id) from None

    def close(self, reservation_id: int) -> tuple[Reservation, bool]:
        """
        Close a reservation.

        Returns:
            The stored record after the call, and whether this call changed it
            (False when it was already closed).

        Raises:
            ReservationNotFoundError: If the id is unknown
        """
        current = self.get(reservation_id)
        if not current.is_active:
            return current, False

        closed = current.closed()
        self._records[reservation_id] = closed
        return closed, True

    def all(self) -> list[Reservation]:
        return list(self._records.values())

    def active(self) -> list[Reservation]:
        return [r for r in self._records.values() if r.is_active]

    def expired(self, now: datetime | None = None) -> list[Reservation]:
        """ACTIVE reservations whose loan period has elapsed."""
        now = now or datetime.now(timezone.utc)
        return [r for r in self._records.values() if r.is_active and r.is_expired(now)]

    def __len__(self) -> int:
        return len(self._records)


__all__ = ["ReservationLedger"]
