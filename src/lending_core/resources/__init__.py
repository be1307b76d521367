# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Lendable resources and the Reservable capability.

Exports:
    Resource: Abstract lendable item
    Reservable: Protocol for reserve/release semantics
    PhysicalResource: Exclusive single-copy variant
    PooledResource: Multi-license variant
    ResourceView: Reporting snapshot
"""

from .base import (
    HolderId,
    MediaKind,
    Reservable,
    ReservationPolicy,
    Resource,
    ResourceId,
    validate_isbn,
)
from .physical import Condition, PhysicalResource
from .pooled import PooledResource
from .view import ResourceView

__all__ = [
    "Condition",
    "HolderId",
    "MediaKind",
    "PhysicalResource",
    "PooledResource",
    "Reservable",
    "ReservationPolicy",
    "Resource",
    "ResourceId",
    "ResourceView",
    "validate_isbn",
]
