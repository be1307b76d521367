# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Summary figures for the reporting layer.

Only the numbers are produced here; rendering them is up to the caller.
"""

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from .resources import MediaKind, Resource

if TYPE_CHECKING:
    from .reservation.models import Reservation


class UsageReport(BaseModel):
    """Reservation counts by status."""

    title: str = "Usage report"
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    total: int = 0
    active: int = 0
    closed: int = 0

    @classmethod
    def from_reservations(cls, reservations: Iterable["Reservation"]) -> "UsageReport":
        records = list(reservations)
        active = sum(1 for r in records if r.is_active)
        return cls(total=len(records), active=active, closed=len(records) - active)


class InventoryReport(BaseModel):
    """Resource counts by media kind and availability."""

    title: str = "Inventory report"
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    total: int = 0
    physical: int = 0
    digital: int = 0
    available: int = 0
    reserved: int = 0

    @classmethod
    def from_resources(cls, resources: Iterable[Resource]) -> "InventoryReport":
        items = list(resources)
        physical = sum(1 for r in items if r.media_kind is MediaKind.PHYSICAL)
        available = sum(1 for r in items if r.available)
        return cls(
            total=len(items),
            physical=physical,
            digital=len(items) - physical,
            available=available,
            reserved=len(items) - available,
        )


__all__ = ["InventoryReport", "UsageReport"]
