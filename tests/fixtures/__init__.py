"""
Test fixtures for deterministic rent status tests.

This module provides:
- builders: paid(), partial(), pending(), failed(), tenant() snapshot builders
- raw_tenants.json: raw data-fetch records used by boundary and CLI tests
"""

from .builders import advance, failed, paid, partial, pending, refund, tenant

__all__ = ["advance", "failed", "paid", "partial", "pending", "refund", "tenant"]
