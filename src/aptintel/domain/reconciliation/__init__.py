"""Reconciliation of per-source group records into canonical entities.

Flow:
1) canonicalize each record name and resolve it through the alias registry
2) create the canonical entity on first encounter
3) fold later records in with the field rules from ``policy``
"""

from __future__ import annotations

from .merge import (
    MergeEngine,
    MergeResult,
    merge_records,
    order_by_source_priority,
    order_by_source_ranking,
)
from .policy import DEFAULT_FIELD_RULES, FieldRule, ObservedYears

__all__ = [
    "DEFAULT_FIELD_RULES",
    "FieldRule",
    "MergeEngine",
    "MergeResult",
    "ObservedYears",
    "merge_records",
    "order_by_source_priority",
    "order_by_source_ranking",
]
