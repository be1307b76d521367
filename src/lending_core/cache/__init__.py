# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Bounded query cache with FIFO eviction."""

from .bounded import BoundedCache, CacheMetrics

__all__ = ["BoundedCache", "CacheMetrics"]
