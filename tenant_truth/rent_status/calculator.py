"""
Status Calculator - rent status for one tenant, derived on read.

A tenant's rent is PAID only if all of these hold:
1. No PARTIAL records
2. No PENDING/FAILED records
3. No gap: the as-of day is covered by a PAID period
4. No pending months from the estimator

Due amounts are accounted independently of the flags:
- partial_due: sum of (expected - paid) over PARTIAL records
- pending_due: sum of expected over PENDING/FAILED records, or
  rent_price x pending_months when the gap was never billed
- rent_due = partial_due + pending_due
"""

import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from tenant_truth.config import DEFAULT_POLICY, CreditPolicy, RentPolicy
from tenant_truth.contracts.invariants import enforce_invariants

from .calendar import covers, to_day
from .models import (
    OWED_STATUSES,
    ZERO,
    AncillaryPayment,
    AncillaryStatus,
    PaymentStatus,
    StatusResult,
    TenantSnapshot,
)
from .pending_months import PendingMonthEstimator

logger = logging.getLogger(__name__)


def _amount(value) -> Decimal:
    """Missing, unparseable and non-finite amounts count as zero."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            logger.warning(f"Unparseable amount {value!r}, treating as 0")
            return ZERO
    if not amount.is_finite():
        logger.warning(f"Non-finite amount {value!r}, treating as 0")
        return ZERO
    return amount


def _any_paid(payments: tuple[AncillaryPayment, ...] | None) -> bool:
    return any(p.status == AncillaryStatus.PAID for p in payments or ())


class StatusCalculator:
    """Computes a StatusResult from one TenantSnapshot and an as-of day."""

    def __init__(
        self,
        estimator: PendingMonthEstimator | None = None,
        policy: RentPolicy = DEFAULT_POLICY,
    ):
        self.estimator = estimator or PendingMonthEstimator()
        self.policy = policy

    def calculate(self, snapshot: TenantSnapshot, as_of: date | datetime) -> StatusResult:
        """
        Calculate rent status.

        Args:
            snapshot: Tenant facts as fetched by the caller
            as_of: Reference "today"; normalized to a calendar day once and used
                for every comparison in this call
        """
        today = to_day(as_of)
        payments = snapshot.payments or ()

        is_advance_paid = _any_paid(snapshot.advance_payments)
        is_refund_paid = _any_paid(snapshot.refund_payments)

        has_partial = any(p.status == PaymentStatus.PARTIAL for p in payments)
        has_pending_or_failed = any(p.status in OWED_STATUSES for p in payments)
        has_gap = self._has_gap(snapshot, today)

        pending_months = self.estimator.estimate(snapshot, today)

        is_rent_paid = (
            not has_partial
            and not has_pending_or_failed
            and not has_gap
            and pending_months == 0
        )

        partial_due, pending_due = self._due_amounts(snapshot, has_gap, pending_months)

        result = StatusResult(
            is_rent_paid=is_rent_paid,
            is_rent_partial=has_partial,
            rent_due_amount=partial_due + pending_due,
            partial_due_amount=partial_due,
            pending_due_amount=pending_due,
            is_advance_paid=is_advance_paid,
            is_refund_paid=is_refund_paid,
            pending_months=pending_months,
        )

        if self.policy.enforce_invariants:
            for violation in enforce_invariants(result):
                logger.error(violation, extra={"tenant_id": snapshot.tenant_id})

        return result

    def _has_gap(self, snapshot: TenantSnapshot, today: date) -> bool:
        """True if no PAID period covers today."""
        payments = snapshot.payments or ()
        if not payments:
            if snapshot.check_in_date is None:
                return False
            return to_day(snapshot.check_in_date) < today

        return not any(p.status == PaymentStatus.PAID and covers(p, today) for p in payments)

    def _due_amounts(
        self, snapshot: TenantSnapshot, has_gap: bool, pending_months: int
    ) -> tuple[Decimal, Decimal]:
        """Returns (partial_due, pending_due). Each record feeds one bucket at most."""
        payments = snapshot.payments or ()
        rent_price = _amount(snapshot.rent_price)

        partial_due = ZERO
        pending_due = ZERO

        if payments:
            for p in payments:
                if p.status == PaymentStatus.PARTIAL:
                    partial_due += _amount(p.expected_amount) - _amount(p.paid_amount)
                elif p.status in OWED_STATUSES:
                    pending_due += _amount(p.expected_amount)

            # Unbilled gap: nothing explicit to sum, so bill the elapsed months
            if has_gap and pending_due == 0 and pending_months > 0:
                pending_due = rent_price * pending_months
        elif pending_months > 0:
            pending_due = rent_price * pending_months

        if partial_due < 0 and self.policy.credit_policy == CreditPolicy.CLAMP:
            logger.debug(
                f"Clamping partial credit {partial_due} to 0",
                extra={"tenant_id": snapshot.tenant_id},
            )
            partial_due = ZERO

        return partial_due, pending_due


_default_calculator = StatusCalculator()


def calculate_tenant_status(snapshot: TenantSnapshot, as_of: date | datetime) -> StatusResult:
    """Convenience function using the default policy."""
    return _default_calculator.calculate(snapshot, as_of)
