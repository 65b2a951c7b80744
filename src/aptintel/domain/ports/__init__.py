"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import RawRecordSource

__all__ = ["RawRecordSource"]
