"""
Pending Month Estimator - how many whole months a tenant has been uncovered.

Rules, first match wins:
1. No payment records: months since check-in (at least 1) once check-in is
   in the past, else 0.
2. Explicit PENDING/FAILED records: one owed month per record, regardless of
   calendar distance.
3. Today covered by a PAID or PARTIAL period: 0.
4. Otherwise months since the latest PAID period ended (at least 1), falling
   back to months since check-in (at least 1), or 1 with no check-in date.

Explicit records always win over calendar inference; the calendar is only
consulted for gaps nobody was billed for.
"""

from datetime import date, datetime

from .calendar import covers, months_between, to_day
from .models import COVERING_STATUSES, OWED_STATUSES, PaymentStatus, TenantSnapshot


class PendingMonthEstimator:
    """Converts time since last coverage into a whole-month pending count."""

    def estimate(self, snapshot: TenantSnapshot, as_of: date | datetime) -> int:
        today = to_day(as_of)
        payments = snapshot.payments or ()

        if not payments:
            return self._months_since_check_in(snapshot, today)

        owed = sum(1 for p in payments if p.status in OWED_STATUSES)
        if owed > 0:
            return owed

        if any(p.status in COVERING_STATUSES and covers(p, today) for p in payments):
            return 0

        paid = [p for p in payments if p.status == PaymentStatus.PAID]
        if paid:
            latest = max(paid, key=lambda p: to_day(p.end_date))
            return max(1, months_between(to_day(latest.end_date), today))

        if snapshot.check_in_date is None:
            return 1
        return max(1, months_between(to_day(snapshot.check_in_date), today))

    def _months_since_check_in(self, snapshot: TenantSnapshot, today: date) -> int:
        if snapshot.check_in_date is None:
            return 0
        check_in = to_day(snapshot.check_in_date)
        if check_in >= today:
            # Not started yet, or starts today
            return 0
        return max(1, months_between(check_in, today))


_default_estimator = PendingMonthEstimator()


def estimate_pending_months(snapshot: TenantSnapshot, as_of: date | datetime) -> int:
    """Convenience wrapper around a shared estimator."""
    return _default_estimator.estimate(snapshot, as_of)
