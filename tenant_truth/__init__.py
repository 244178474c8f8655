# TENANT TRUTH - Rent status derivation engine
"""
Rent status is derived from payment records on every read, never stored.

Entry points:
    tenant_truth.rent_status   StatusCalculator, BulkClassifier
    tenant_truth.contracts     raw record loading, output models, invariants
    tenant_truth.cli           `tenant-truth` command
"""

__version__ = "0.1.0"
