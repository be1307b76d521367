# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Reservation records, ledger and the orchestrating service.

Exports:
    ReservationService: Search and reserve entry point for callers
    Reservation: Immutable reservation record
    ReservationStatus: ACTIVE / CLOSED
    ReservationLedger: Append-only record store
    ReserveOutcome: Discriminant of a reservation attempt
    ReserveResult: Result of ReservationService.reserve()
"""

from .ledger import ReservationLedger
from .models import Reservation, ReservationStatus
from .result import ReserveOutcome, ReserveResult
from .service import ReservationService, SearchResult

__all__ = [
    "Reservation",
    "ReservationLedger",
    "ReservationService",
    "ReservationStatus",
    "ReserveOutcome",
    "ReserveResult",
    "SearchResult",
]
