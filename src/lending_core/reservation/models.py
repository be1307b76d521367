# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Reservation record models.

A Reservation is immutable. Closing one produces a new record with
status CLOSED that replaces the old one in the ledger (copy-on-write), so
readers holding the old record never observe a partial update.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..config import DEFAULT_LOAN_PERIOD_DAYS


class ReservationStatus(Enum):
    """Lifecycle of a reservation. The only transition is ACTIVE -> CLOSED."""

    ACTIVE = "active"
    CLOSED = "closed"


class Reservation(BaseModel):
    """A holder's reservation of one resource."""

    model_config = ConfigDict(frozen=True)

    reservation_id: int
    holder_id: int
    resource_id: int
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    expires_at: datetime
    status: ReservationStatus = ReservationStatus.ACTIVE

    @model_validator(mode="after")
    def _validate_expiration(self) -> "Reservation":
        """Validate that expires_at is after created_at."""
        if self.expires_at <= self.created_at:
            raise ValueError("expires_at must be after created_at")
        return self

    @classmethod
    def open(
        cls,
        reservation_id: int,
        holder_id: int,
        resource_id: int,
        loan_period_days: int = DEFAULT_LOAN_PERIOD_DAYS,
        now: datetime | None = None,
    ) -> "Reservation":
        """Create an ACTIVE reservation expiring after the loan period."""
        created_at = now or datetime.now(timezone.utc)
        return cls(
            reservation_id=reservation_id,
            holder_id=holder_id,
            resource_id=resource_id,
            created_at=created_at,
            expires_at=created_at + timedelta(days=loan_period_days),
        )

    @property
    def is_active(self) -> bool:
        return self.status is ReservationStatus.ACTIVE

    def is_expired(self, now: datetime | None = None) -> bool:
        """True once the loan period has elapsed (regardless of status)."""
        return (now or datetime.now(timezone.utc)) >= self.expires_at

    def closed(self) -> "Reservation":
        """Return the CLOSED counterpart of this record."""
        if not self.is_active:
            return self
        return self.model_copy(update={"status": ReservationStatus.CLOSED})

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dict."""
        return {
            "reservation_id": self.reservation_id,
            "holder_id": self.holder_id,
            "resource_id": self.resource_id,
            "created_at": self.created_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
            "status": self.status.value,
        }


__all__ = ["Reservation", "ReservationStatus"]
