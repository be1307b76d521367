# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Read-only snapshot of a resource for reporting consumers."""

from typing import Any

from pydantic import BaseModel, ConfigDict

from .base import MediaKind


class ResourceView(BaseModel):
    """
    Fields of a resource consumed by the reporting layer.

    A view is a point-in-time copy; it does not follow later reservations.
    """

    model_config = ConfigDict(frozen=True)

    resource_id: int
    title: str
    author: str
    category: str | None = None
    media_kind: MediaKind
    available: bool
    reservation_detail: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dict."""
        return {
            "resource_id": self.resource_id,
            "title": self.title,
            "author": self.author,
            "category": self.category,
            "media_kind": self.media_kind.value,
            "available": self.available,
            "reservation_detail": self.reservation_detail,
        }


__all__ = ["ResourceView"]
