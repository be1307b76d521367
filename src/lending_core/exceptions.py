# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the lending core library.

This module defines the exception hierarchy used throughout the library.
All exceptions inherit from LendingError, making it easy to catch
all library exceptions with a single except clause.

Note that the expected failure modes of ReservationService.reserve()
(unknown holder, unknown resource, ineligible holder, unavailable resource)
are NOT exceptions. They are reported through ReserveResult so that each
outcome stays distinguishable for the caller.
"""


class LendingError(Exception):
    """Base exception for all lending core errors.

    Example:
        try:
            service.close_reservation(reservation_id)
        except LendingError as e:
            logger.error(f"Lending error: {e}")
    """

    pass


class ConfigurationError(LendingError):
    """Raised when configuration is invalid.

    Common causes include:
    - Non-positive cache capacity
    - Non-positive loan period or reservation limits
    """

    pass


class CacheConfigError(ConfigurationError, ValueError):
    """Raised when a bounded cache is configured with a non-positive capacity.

    This is surfaced immediately at construction time and is never recovered
    silently. It is also a ValueError.

    Attributes:
        capacity: The rejected capacity value.

    Example:
        try:
            cache = BoundedCache(capacity=0)
        except CacheConfigError as e:
            logger.error(f"Invalid cache capacity: {e.capacity}")
    """

    def __init__(self, capacity: int, message: str | None = None):
        super().__init__(message or f"Cache capacity must be positive, got {capacity}")
        self.capacity = capacity


class DuplicateResourceError(LendingError):
    """Raised when a resource id is added to a catalog twice.

    Attributes:
        resource_id: The identifier that is already registered.
    """

    def __init__(self, resource_id: int):
        super().__init__(f"Resource already in catalog: {resource_id}")
        self.resource_id = resource_id


class InvalidIsbnError(LendingError, ValueError):
    """Raised when a resource is created with a malformed ISBN.

    Attributes:
        isbn: The rejected ISBN string.
    """

    def __init__(self, isbn: str):
        super().__init__(f"Invalid ISBN: {isbn!r}")
        self.isbn = isbn


class HolderNotFoundError(LendingError):
    """Raised by HolderRegistry.get() when no holder has the given id.

    Attributes:
        holder_id: The identifier that was not found.
    """

    def __init__(self, holder_id: int):
        super().__init__(f"Holder not found: {holder_id}")
        self.holder_id = holder_id


class ReservationNotFoundError(LendingError):
    """Raised when closing or fetching a reservation that does not exist.

    Attributes:
        reservation_id: The identifier that was not found.

    Example:
        try:
            service.close_reservation(42)
        except ReservationNotFoundError as e:
            logger.warning(f"Reservation {e.reservation_id} is unknown")
    """

    def __init__(self, reservation_id: int):
        super().__init__(f"Reservation not found: {reservation_id}")
        self.reservation_id = reservation_id


__all__ = [
    "CacheConfigError",
    "ConfigurationError",
    "DuplicateResourceError",
    "HolderNotFoundError",
    "InvalidIsbnError",
    "LendingError",
    "ReservationNotFoundError",
]
