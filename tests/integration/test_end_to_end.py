"""
End-to-end tests for the lending core.

These tests drive the public API the way an application would: stock a
catalog, register holders, search, reserve and close reservations.
"""

from prometheus_client import CollectorRegistry

import lending_core
from lending_core import LendingConfig, ReservationService, ReserveOutcome
from lending_core.observability import UnifiedMetricsCollector


class TestPublicApi:
    """Top-level package exports."""

    def test_version(self):
        assert lending_core.__version__ == "1.0.0"

    def test_all_names_importable(self):
        for name in lending_core.__all__:
            assert hasattr(lending_core, name), name


class TestLendingScenario:
    """One physical copy and one pooled ebook shared by two members."""

    def test_full_lifecycle(self):
        service = ReservationService()
        book = service.catalog.add_physical(
            "Design Patterns",
            "Gang of Four",
            isbn="978-85-7522-123-4",
            location="Shelf A1",
        )
        ebook = service.catalog.add_pooled("Clean Code", "Robert Martin", capacity=2)
        ana = service.holders.register_member("Ana")
        bia = service.holders.register_member("Bia")
        caio = service.holders.register_member("Caio")

        # Search, then reserve what was found
        (found,) = service.search("design patterns")
        assert found is book

        first = service.reserve(ana.holder_id, found.resource_id)
        assert first.succeeded

        second = service.reserve(bia.holder_id, book.resource_id)
        assert second.outcome is ReserveOutcome.RESOURCE_UNAVAILABLE

        # Two licenses: the pool stays open after one, saturates after two
        assert service.reserve(ana.holder_id, ebook.resource_id).succeeded
        assert ebook.in_use == 1
        assert ebook.is_reservable() is True
        assert service.reserve(bia.holder_id, ebook.resource_id).succeeded
        assert ebook.available is False

        third = service.reserve(caio.holder_id, ebook.resource_id)
        assert third.outcome is ReserveOutcome.RESOURCE_UNAVAILABLE
        assert ebook.in_use == 2
        assert caio.active_reservations == 0
        assert caio.inbox == []

        # Closing the physical reservation hands the copy to Bia
        service.close_reservation(first.reservation.reservation_id)
        retry = service.reserve(bia.holder_id, book.resource_id)
        assert retry.succeeded
        assert book.holder_id == bia.holder_id

        assert ana.active_reservations == 1
        assert bia.active_reservations == 2
        assert bia.inbox == [
            "Reservation confirmed: Clean Code",
            "Reservation confirmed: Design Patterns",
        ]

        usage = service.usage_report()
        assert (usage.total, usage.active, usage.closed) == (4, 3, 1)

        views = {v.title: v for v in service.catalog.views()}
        assert views["Design Patterns"].available is False
        assert views["Clean Code"].reservation_detail.startswith("2/2 licenses in use")

    def test_prometheus_export(self):
        registry = CollectorRegistry()
        collector = UnifiedMetricsCollector(enable_prometheus=True, registry=registry)
        service = ReservationService(
            config=LendingConfig(query_cache_size=5), metrics_collector=collector
        )
        book = service.catalog.add_physical("Design Patterns", "Gang of Four")
        ana = service.holders.register_member("Ana")

        service.search("design")
        service.search("design")
        service.reserve(ana.holder_id, book.resource_id)

        assert registry.get_sample_value("lending_cache_hits_total") == 1.0
        assert registry.get_sample_value("lending_cache_misses_total") == 1.0
        assert (
            registry.get_sample_value(
                "lending_reservation_attempts_total", {"outcome": "success"}
            )
            == 1.0
        )
        assert registry.get_sample_value("lending_reservations_active") == 1.0
        assert (
            registry.get_sample_value(
                "lending_resources_registered_total", {"media_kind": "physical"}
            )
            == 1.0
        )
