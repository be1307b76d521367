# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Structural type accepted wherever the library emits metrics."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

Labels = dict[str, str]


@runtime_checkable
class MetricsCollectorProtocol(Protocol):
    """
    What the cache, catalog and reservation service need from a collector.

    UnifiedMetricsCollector satisfies it; so does a MagicMock in tests or an
    adapter onto another metrics system.
    """

    def inc_counter(self, name: str, value: int = 1, labels: Labels | None = None) -> None:
        """Raises ValueError for a negative value."""
        ...

    def set_gauge(self, name: str, value: float, labels: Labels | None = None) -> None: ...

    def inc_gauge(self, name: str, value: float = 1.0, labels: Labels | None = None) -> None: ...

    def dec_gauge(self, name: str, value: float = 1.0, labels: Labels | None = None) -> None: ...

    def observe_histogram(
        self, name: str, value: float, labels: Labels | None = None
    ) -> None: ...

    def get_metrics(self) -> dict[str, Any]: ...

    def reset(self) -> None: ...


__all__ = ["Labels", "MetricsCollectorProtocol"]
