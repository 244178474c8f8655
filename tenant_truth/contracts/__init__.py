"""
Contracts Module — validation at the edges of the rent status engine.

This module provides:
- schema.py: Pydantic models for raw tenant input and serialized output
- invariants.py: Semantic correctness checks on StatusResult

Invariants are enforced BOTH in tests AND in production.
"""

from .invariants import (
    ALL_INVARIANTS,
    InvariantViolation,
    enforce_invariants,
    enforce_invariants_strict,
)
from .schema import (
    LoadResult,
    RejectedRecord,
    StatusResultModel,
    TenantRecord,
    TenantStatisticsModel,
    TenantStatusRow,
    load_snapshots,
)

__all__ = [
    # Schema
    "TenantRecord",
    "LoadResult",
    "RejectedRecord",
    "load_snapshots",
    "StatusResultModel",
    "TenantStatusRow",
    "TenantStatisticsModel",
    # Invariants
    "ALL_INVARIANTS",
    "InvariantViolation",
    "enforce_invariants",
    "enforce_invariants_strict",
]
