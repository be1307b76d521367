"""Tests for the exclusive (single copy) resource variant."""

import logging
from datetime import datetime

import pytest

from lending_core.resources import (
    Condition,
    MediaKind,
    PhysicalResource,
    Reservable,
    ReservationPolicy,
)


@pytest.fixture
def copy():
    return PhysicalResource(
        1,
        "Design Patterns",
        "Gang of Four",
        category="Programming",
        location="Shelf A1",
    )


class TestPhysicalResourceBasics:
    """Identity and tagging."""

    def test_policy_and_media_kind(self, copy):
        assert copy.policy is ReservationPolicy.EXCLUSIVE
        assert copy.media_kind is MediaKind.PHYSICAL

    def test_satisfies_reservable_protocol(self, copy):
        assert isinstance(copy, Reservable)

    def test_starts_available(self, copy):
        assert copy.is_reservable() is True
        assert copy.available is True
        assert copy.reserved is False
        assert copy.holder_id is None
        assert copy.reserved_at is None
        assert copy.describe_reservation() == "Available"

    def test_metadata_is_read_only(self, copy):
        with pytest.raises(AttributeError):
            copy.title = "Other"  # type: ignore[misc]
        with pytest.raises(AttributeError):
            copy.resource_id = 99  # type: ignore[misc]


class TestPhysicalReserveRelease:
    """Reserve/release transitions."""

    def test_reserve_locks_the_copy(self, copy):
        copy.reserve(7)

        assert copy.is_reservable() is False
        assert copy.reserved is True
        assert copy.available is False
        assert copy.holder_id == 7
        assert isinstance(copy.reserved_at, datetime)
        assert copy.describe_reservation().startswith("Reserved by holder 7 on ")

    def test_second_reserve_is_noop(self, copy):
        copy.reserve(7)
        reserved_at = copy.reserved_at

        copy.reserve(8)

        assert copy.holder_id == 7
        assert copy.reserved is True
        assert copy.reserved_at == reserved_at

    def test_release_restores_reservability(self, copy):
        copy.reserve(7)
        copy.release()

        assert copy.is_reservable() is True
        assert copy.reserved is False
        assert copy.holder_id is None
        assert copy.reserved_at is None

    def test_release_does_not_check_holder(self, copy):
        copy.reserve(7)
        copy.release(holder_id=42)

        assert copy.is_reservable() is True

    def test_release_when_free_is_harmless(self, copy):
        copy.release()

        assert copy.is_reservable() is True
        assert copy.holder_id is None

    def test_holder_set_iff_reserved(self, copy):
        for step in (lambda: copy.reserve(1), copy.release, lambda: copy.reserve(2)):
            step()
            assert (copy.holder_id is not None) == copy.reserved


class TestCondition:
    """Damaged copies cannot be reserved."""

    def test_damaged_copy_not_reservable(self, copy):
        copy.condition = Condition.DAMAGED

        assert copy.is_reservable() is False
        assert copy.available is True
        assert copy.describe_reservation() == "Unavailable (damaged)"

    def test_reserving_damaged_copy_is_noop(self, copy):
        copy.condition = Condition.DAMAGED
        copy.reserve(3)

        assert copy.reserved is False
        assert copy.holder_id is None

    def test_used_copy_is_reservable(self, copy):
        copy.condition = Condition.USED
        assert copy.is_reservable() is True


class TestPhysicalView:
    """ResourceView snapshot."""

    def test_view_fields(self, copy):
        copy.reserve(5)
        view = copy.to_view()

        assert view.resource_id == 1
        assert view.title == "Design Patterns"
        assert view.author == "Gang of Four"
        assert view.category == "Programming"
        assert view.media_kind is MediaKind.PHYSICAL
        assert view.available is False
        assert "holder 5" in view.reservation_detail

    def test_view_does_not_follow_later_changes(self, copy):
        view = copy.to_view()
        copy.reserve(5)

        assert view.available is True


class TestPhysicalLogging:
    """Debug output tolerates non-integer ids."""

    def test_ignored_reserve_logs_string_holder(self, caplog):
        copy = PhysicalResource("bk-1", "Design Patterns", "Gang of Four")
        copy.reserve("ana")

        with caplog.at_level(logging.DEBUG, logger="lending_core"):
            copy.reserve("bia")

        assert "resource_id=bk-1, holder_id=bia" in caplog.text
