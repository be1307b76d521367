"""Unit tests for Reservation, ReserveResult and ReservationLedger."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from lending_core.exceptions import ReservationNotFoundError
from lending_core.reservation import (
    Reservation,
    ReservationLedger,
    ReservationStatus,
    ReserveOutcome,
    ReserveResult,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class TestReservationModel:
    """Immutable record with copy-on-write closing."""

    def test_open_sets_loan_period(self):
        reservation = Reservation.open(1, 2, 3, loan_period_days=14, now=NOW)

        assert reservation.status is ReservationStatus.ACTIVE
        assert reservation.is_active is True
        assert reservation.created_at == NOW
        assert reservation.expires_at == NOW + timedelta(days=14)

    def test_expiry_must_follow_creation(self):
        with pytest.raises(ValidationError):
            Reservation(
                reservation_id=1,
                holder_id=1,
                resource_id=1,
                created_at=NOW,
                expires_at=NOW,
            )

    def test_is_frozen(self):
        reservation = Reservation.open(1, 2, 3, now=NOW)
        with pytest.raises(ValidationError):
            reservation.status = ReservationStatus.CLOSED  # type: ignore[misc]

    def test_closed_returns_new_record(self):
        reservation = Reservation.open(1, 2, 3, now=NOW)
        closed = reservation.closed()

        assert closed is not reservation
        assert closed.status is ReservationStatus.CLOSED
        assert reservation.status is ReservationStatus.ACTIVE
        assert closed.reservation_id == reservation.reservation_id
        assert closed.expires_at == reservation.expires_at

    def test_closing_closed_record_returns_it(self):
        closed = Reservation.open(1, 2, 3, now=NOW).closed()
        assert closed.closed() is closed

    def test_is_expired(self):
        reservation = Reservation.open(1, 2, 3, loan_period_days=14, now=NOW)

        assert reservation.is_expired(NOW + timedelta(days=13)) is False
        assert reservation.is_expired(NOW + timedelta(days=14)) is True

    def test_to_dict(self):
        data = Reservation.open(1, 2, 3, loan_period_days=1, now=NOW).to_dict()

        assert data == {
            "reservation_id": 1,
            "holder_id": 2,
            "resource_id": 3,
            "created_at": "2026-03-01T12:00:00+00:00",
            "expires_at": "2026-03-02T12:00:00+00:00",
            "status": "active",
        }


class TestReserveResult:
    """Discriminated outcome."""

    def test_success(self):
        reservation = Reservation.open(1, 2, 3, now=NOW)
        result = ReserveResult(ReserveOutcome.SUCCESS, 2, 3, reservation=reservation)

        assert result.succeeded is True
        assert bool(result) is True
        assert result.message == "Reservation confirmed"

    @pytest.mark.parametrize(
        "outcome, expected",
        [
            (ReserveOutcome.HOLDER_NOT_FOUND, "No holder with id 2"),
            (ReserveOutcome.RESOURCE_NOT_FOUND, "No resource with id 3"),
            (ReserveOutcome.HOLDER_INELIGIBLE, "Holder 2 may not reserve right now"),
            (ReserveOutcome.RESOURCE_UNAVAILABLE, "Resource 3 is not available"),
        ],
    )
    def test_failures(self, outcome, expected):
        result = ReserveResult(outcome, 2, 3)

        assert result.succeeded is False
        assert not result
        assert result.reservation is None
        assert result.message == expected


class TestReservationLedger:
    """Append-only record store."""

    def test_open_allocates_ids(self):
        ledger = ReservationLedger()
        first = ledger.open(1, 10)
        second = ledger.open(2, 20)

        assert (first.reservation_id, second.reservation_id) == (1, 2)
        assert len(ledger) == 2
        assert ledger.all() == [first, second]

    def test_uses_configured_loan_period(self):
        ledger = ReservationLedger(loan_period_days=7)
        reservation = ledger.open(1, 10)

        assert reservation.expires_at - reservation.created_at == timedelta(days=7)

    def test_get_unknown_raises(self):
        with pytest.raises(ReservationNotFoundError):
            ReservationLedger().get(5)

    def test_close_replaces_record(self):
        ledger = ReservationLedger()
        opened = ledger.open(1, 10)

        closed, changed = ledger.close(opened.reservation_id)

        assert changed is True
        assert closed.status is ReservationStatus.CLOSED
        assert ledger.get(opened.reservation_id) is closed
        assert opened.status is ReservationStatus.ACTIVE
        assert ledger.active() == []
        assert len(ledger) == 1

    def test_close_twice_reports_no_change(self):
        ledger = ReservationLedger()
        opened = ledger.open(1, 10)
        ledger.close(opened.reservation_id)

        again, changed = ledger.close(opened.reservation_id)

        assert changed is False
        assert again.status is ReservationStatus.CLOSED

    def test_close_unknown_raises(self):
        with pytest.raises(ReservationNotFoundError):
            ReservationLedger().close(1)

    def test_expired_only_lists_active_records(self):
        ledger = ReservationLedger(loan_period_days=1)
        stale = ledger.open(1, 10)
        closed = ledger.open(2, 20)
        ledger.close(closed.reservation_id)

        later = datetime.now(timezone.utc) + timedelta(days=2)

        assert ledger.expired(later) == [stale]
        assert ledger.expired() == []
