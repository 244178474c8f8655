"""
Rent Status Module

Rent status is never stored; it is derived from payment records on every read:
- PAID: no PARTIAL, no PENDING/FAILED, today covered by a PAID period,
  no pending months
- Partial and pending are independent; a tenant can be both
- rent_due = partial_due + pending_due
"""

from .calculator import StatusCalculator, calculate_tenant_status
from .calendar import covers, is_malformed, months_between, to_day
from .classifier import BulkClassifier
from .models import (
    AncillaryPayment,
    AncillaryStatus,
    EnrichedTenant,
    PaymentRecord,
    PaymentStatus,
    RentBucket,
    RentStatus,
    StatusResult,
    TenantSnapshot,
    TenantStatistics,
)
from .pending_months import PendingMonthEstimator, estimate_pending_months

__all__ = [
    "AncillaryPayment",
    "AncillaryStatus",
    "BulkClassifier",
    "EnrichedTenant",
    "PaymentRecord",
    "PaymentStatus",
    "PendingMonthEstimator",
    "RentBucket",
    "RentStatus",
    "StatusCalculator",
    "StatusResult",
    "TenantSnapshot",
    "TenantStatistics",
    "calculate_tenant_status",
    "covers",
    "estimate_pending_months",
    "is_malformed",
    "months_between",
    "to_day",
]
