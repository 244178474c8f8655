"""
Bulk Classifier - rent status across a tenant portfolio.

Buckets (active tenants only, membership is NOT exclusive):
- pending: any PENDING/FAILED record, or pending months > 0
- partial: any PARTIAL record
- without_advance: no PAID advance payment
- paid: rent fully paid and current

A tenant with a PARTIAL record for one month and a PENDING record for another
is in both pending and partial. Statistics re-run each bucket, so bucket
counts can add up to more than the active count.

Every call recomputes status from the snapshots given; nothing is cached.
"""

import logging
from collections.abc import Callable, Iterable
from datetime import date, datetime
from decimal import Decimal

from .calculator import StatusCalculator
from .calendar import to_day
from .models import (
    OWED_STATUSES,
    ZERO,
    EnrichedTenant,
    RentBucket,
    StatusResult,
    TenantSnapshot,
    TenantStatistics,
)

logger = logging.getLogger(__name__)


def _has_owed_record(snapshot: TenantSnapshot) -> bool:
    return any(p.status in OWED_STATUSES for p in snapshot.payments or ())


class BulkClassifier:
    """
    Applies StatusCalculator to many tenants against one as-of day.

    The as-of day is fixed at construction so a batch that runs across
    midnight still judges every tenant against the same day.
    """

    def __init__(
        self,
        as_of: date | datetime | None = None,
        calculator: StatusCalculator | None = None,
    ):
        self.as_of = to_day(as_of) if as_of is not None else date.today()
        self.calculator = calculator or StatusCalculator()

    # ------------------------------------------------------------------
    # Per-tenant status
    # ------------------------------------------------------------------

    def status_for(self, snapshot: TenantSnapshot) -> StatusResult:
        """
        Status for one tenant, never raising.

        A tenant whose status cannot be computed falls back to a conservative
        pending status so the rest of the batch is still classified.
        """
        try:
            return self.calculator.calculate(snapshot, self.as_of)
        except Exception as e:
            logger.warning(
                f"Status calculation failed, falling back to pending: {e}",
                exc_info=True,
                extra={"tenant_id": getattr(snapshot, "tenant_id", None)},
            )
            return StatusResult.conservative_pending()

    def enrich(self, tenants: Iterable[TenantSnapshot]) -> list[EnrichedTenant]:
        """Pair every tenant with its freshly computed status."""
        return [EnrichedTenant(snapshot=t, status=self.status_for(t)) for t in tenants]

    # ------------------------------------------------------------------
    # Buckets
    # ------------------------------------------------------------------

    def _filter(
        self,
        tenants: Iterable[TenantSnapshot],
        predicate: Callable[[EnrichedTenant], bool],
    ) -> list[EnrichedTenant]:
        return [e for e in self.enrich(tenants) if e.snapshot.active and predicate(e)]

    def classify_pending_rent(self, tenants: Iterable[TenantSnapshot]) -> list[EnrichedTenant]:
        """Active tenants with PENDING/FAILED records or pending months."""
        return self._filter(
            tenants,
            lambda e: _has_owed_record(e.snapshot) or e.status.pending_months > 0,
        )

    def classify_partial_rent(self, tenants: Iterable[TenantSnapshot]) -> list[EnrichedTenant]:
        """Active tenants with PARTIAL records."""
        return self._filter(tenants, lambda e: e.status.is_rent_partial)

    def classify_without_advance(self, tenants: Iterable[TenantSnapshot]) -> list[EnrichedTenant]:
        """Active tenants that have not paid an advance."""
        return self._filter(tenants, lambda e: not e.status.is_advance_paid)

    def classify_paid_rent(self, tenants: Iterable[TenantSnapshot]) -> list[EnrichedTenant]:
        """Active tenants whose rent is fully paid and current."""
        return self._filter(tenants, lambda e: e.status.is_rent_paid)

    def classify(
        self, tenants: Iterable[TenantSnapshot], bucket: RentBucket | str
    ) -> list[EnrichedTenant]:
        """Dispatch to a bucket by name."""
        bucket = RentBucket(bucket)
        handlers = {
            RentBucket.PENDING: self.classify_pending_rent,
            RentBucket.PARTIAL: self.classify_partial_rent,
            RentBucket.WITHOUT_ADVANCE: self.classify_without_advance,
            RentBucket.PAID: self.classify_paid_rent,
        }
        return handlers[bucket](tenants)

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def aggregate_statistics(self, tenants: Iterable[TenantSnapshot]) -> TenantStatistics:
        """Portfolio counters for the active tenants in the list."""
        tenants = list(tenants)
        active = [e for e in self.enrich(tenants) if e.snapshot.active]

        total_due: Decimal = sum((e.status.rent_due_amount for e in active), ZERO)

        stats = TenantStatistics(
            total=len(tenants),
            active=len(active),
            with_pending_rent=len(self.classify_pending_rent(tenants)),
            with_partial_rent=len(self.classify_partial_rent(tenants)),
            with_paid_rent=len(self.classify_paid_rent(tenants)),
            without_advance=len(self.classify_without_advance(tenants)),
            total_due_amount=total_due,
        )

        logger.info(
            f"Classified {stats.total} tenants ({stats.active} active) as of {self.as_of}",
            extra={
                "with_pending_rent": stats.with_pending_rent,
                "with_partial_rent": stats.with_partial_rent,
                "with_paid_rent": stats.with_paid_rent,
            },
        )
        return stats
