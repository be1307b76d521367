# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Discriminated result of ReservationService.reserve()."""

from dataclasses import dataclass
from enum import Enum

from .models import Reservation


class ReserveOutcome(Enum):
    """
    Outcome of a reservation attempt.

    Checks run in declaration order; the first failing check decides the
    outcome and no state is changed.
    """

    SUCCESS = "success"
    HOLDER_NOT_FOUND = "holder_not_found"
    RESOURCE_NOT_FOUND = "resource_not_found"
    HOLDER_INELIGIBLE = "holder_ineligible"
    RESOURCE_UNAVAILABLE = "resource_unavailable"


_MESSAGES: dict[ReserveOutcome, str] = {
    ReserveOutcome.SUCCESS: "Reservation confirmed",
    ReserveOutcome.HOLDER_NOT_FOUND: "No holder with id {holder_id}",
    ReserveOutcome.RESOURCE_NOT_FOUND: "No resource with id {resource_id}",
    ReserveOutcome.HOLDER_INELIGIBLE: "Holder {holder_id} may not reserve right now",
    ReserveOutcome.RESOURCE_UNAVAILABLE: "Resource {resource_id} is not available",
}


@dataclass(frozen=True)
class ReserveResult:
    """
    Result of a reservation attempt.

    Attributes:
        outcome: Which branch the attempt ended in
        holder_id: The requested holder
        resource_id: The requested resource
        reservation: The new record on SUCCESS, None otherwise
    """

    outcome: ReserveOutcome
    holder_id: int
    resource_id: int
    reservation: Reservation | None = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is ReserveOutcome.SUCCESS

    @property
    def message(self) -> str:
        return _MESSAGES[self.outcome].format(
            holder_id=self.holder_id, resource_id=self.resource_id
        )

    def __bool__(self) -> bool:
        return self.succeeded


__all__ = ["ReserveOutcome", "ReserveResult"]
