"""
Tests for StatusCalculator — rent status derived from one tenant's records.
"""

import logging
from datetime import date, datetime
from decimal import Decimal

import pytest

from tenant_truth.config import CreditPolicy, RentPolicy
from tenant_truth.rent_status import (
    AncillaryStatus,
    RentStatus,
    StatusCalculator,
    StatusResult,
    TenantSnapshot,
    calculate_tenant_status,
)
from tests.fixtures import advance, failed, paid, partial, pending, refund, tenant


class TestScenario:
    """One PAID January, advance paid, checked mid-February."""

    def test_expired_month_is_pending(self, calculator):
        snapshot = tenant(
            payments=[paid("2024-01-01", "2024-01-31", 10000)],
            advances=[advance()],
            rent_price=10000,
        )
        result = calculator.calculate(snapshot, date(2024, 2, 15))

        assert result.is_rent_paid is False
        assert result.pending_months == 1
        assert result.pending_due_amount == Decimal("10000")
        assert result.rent_due_amount == Decimal("10000")
        assert result.partial_due_amount == Decimal("0")
        assert result.is_advance_paid is True
        assert result.is_refund_paid is False


class TestCoverage:
    def test_covered_month_is_paid(self, calculator):
        snapshot = tenant(payments=[paid("2024-01-01", "2024-01-31")])
        result = calculator.calculate(snapshot, date(2024, 1, 15))

        assert result.is_rent_paid is True
        assert result.pending_months == 0
        assert result.rent_due_amount == 0

    def test_last_day_of_period_is_covered(self, calculator):
        snapshot = tenant(payments=[paid("2024-01-01", "2024-01-31")])
        assert calculator.calculate(snapshot, date(2024, 1, 31)).is_rent_paid is True

    def test_gap_at_month_end(self, calculator):
        snapshot = tenant(payments=[paid("2024-01-01", "2024-01-31")], rent_price=10000)
        result = calculator.calculate(snapshot, date(2024, 2, 29))

        assert result.is_rent_paid is False
        assert result.pending_months == 1
        assert result.pending_due_amount == Decimal("10000")

    def test_gap_two_calendar_months_later(self, calculator):
        # months_between(2024-01-31, 2024-03-01) is 2 by calendar fields
        snapshot = tenant(payments=[paid("2024-01-01", "2024-01-31")], rent_price=10000)
        result = calculator.calculate(snapshot, date(2024, 3, 1))

        assert result.is_rent_paid is False
        assert result.pending_months == 2
        assert result.pending_due_amount == Decimal("20000")
        assert result.rent_due_amount == Decimal("20000")

    def test_partial_covering_today_still_has_gap(self, calculator):
        """PARTIAL covers for pending months but not for the paid flag."""
        snapshot = tenant(payments=[partial("2024-02-01", "2024-02-29", 10000, 4000)])
        result = calculator.calculate(snapshot, date(2024, 2, 15))

        assert result.is_rent_paid is False
        assert result.is_rent_partial is True
        assert result.pending_months == 0
        assert result.partial_due_amount == Decimal("6000")
        assert result.pending_due_amount == Decimal("0")

    def test_datetime_as_of_is_truncated(self, calculator):
        snapshot = tenant(payments=[paid("2024-01-01", "2024-01-31")])
        result = calculator.calculate(snapshot, datetime(2024, 1, 31, 23, 59, 59))
        assert result.is_rent_paid is True


class TestExplicitPending:
    def test_single_pending_is_one_month(self, calculator):
        snapshot = tenant(payments=[pending("2021-05-01", "2021-05-31", 9500)])
        result = calculator.calculate(snapshot, date(2024, 2, 15))

        assert result.pending_months == 1
        assert result.pending_due_amount == Decimal("9500")
        assert result.is_rent_paid is False

    def test_failed_counts_as_pending(self, calculator):
        snapshot = tenant(
            payments=[
                paid("2024-02-01", "2024-02-29"),
                failed("2024-01-01", "2024-01-31", 10000),
            ]
        )
        result = calculator.calculate(snapshot, date(2024, 2, 15))

        assert result.is_rent_paid is False
        assert result.pending_months == 1
        assert result.pending_due_amount == Decimal("10000")

    def test_explicit_amounts_are_not_backfilled(self, calculator):
        snapshot = tenant(
            payments=[pending("2023-12-01", "2023-12-31", 7000)],
            rent_price=10000,
        )
        result = calculator.calculate(snapshot, date(2024, 2, 15))
        assert result.pending_due_amount == Decimal("7000")


class TestNoPayments:
    def test_check_in_six_months_ago(self, calculator):
        snapshot = tenant(payments=[], check_in="2023-08-15", rent_price=10000)
        result = calculator.calculate(snapshot, date(2024, 2, 15))

        assert result.pending_months == 6
        assert result.pending_due_amount == Decimal("60000")
        assert result.rent_due_amount == Decimal("60000")
        assert result.is_rent_paid is False

    def test_future_check_in_is_paid(self, calculator):
        snapshot = tenant(payments=[], check_in="2024-03-01")
        result = calculator.calculate(snapshot, date(2024, 2, 15))

        assert result.is_rent_paid is True
        assert result.pending_months == 0
        assert result.rent_due_amount == 0

    def test_check_in_today_is_paid(self, calculator):
        snapshot = tenant(payments=[], check_in="2024-02-15")
        assert calculator.calculate(snapshot, date(2024, 2, 15)).is_rent_paid is True

    def test_no_check_in_no_payments(self, calculator):
        snapshot = tenant(payments=[], check_in=None)
        result = calculator.calculate(snapshot, date(2024, 2, 15))

        assert result.is_rent_paid is True
        assert result.pending_months == 0


class TestDueAccounting:
    def test_partial_and_pending_tracked_separately(self, calculator):
        snapshot = tenant(
            payments=[
                partial("2024-01-01", "2024-01-31", 10000, 2500),
                pending("2024-02-01", "2024-02-29", 10000),
            ]
        )
        result = calculator.calculate(snapshot, date(2024, 2, 15))

        assert result.partial_due_amount == Decimal("7500")
        assert result.pending_due_amount == Decimal("10000")
        assert result.rent_due_amount == Decimal("17500")
        assert result.is_rent_partial is True
        assert result.pending_months == 1

    def test_gap_backfilled_alongside_partial(self, calculator):
        """Partial for an old month plus an unbilled gap since then."""
        snapshot = tenant(
            payments=[
                paid("2023-11-01", "2023-11-30"),
                partial("2023-12-01", "2023-12-31", 10000, 6000),
            ],
            rent_price=10000,
        )
        result = calculator.calculate(snapshot, date(2024, 2, 15))

        # Latest PAID ends November -> three calendar months
        assert result.pending_months == 3
        assert result.partial_due_amount == Decimal("4000")
        assert result.pending_due_amount == Decimal("30000")
        assert result.rent_due_amount == Decimal("34000")

    def test_decimal_amounts_are_exact(self, calculator):
        snapshot = tenant(
            payments=[
                partial("2024-01-01", "2024-01-31", "1000.10", "0.20"),
                partial("2024-02-01", "2024-02-29", "1000.10", "0.10"),
            ]
        )
        result = calculator.calculate(snapshot, date(2024, 2, 15))
        assert result.partial_due_amount == Decimal("1999.90")
        assert result.rent_due_amount == result.partial_due_amount + result.pending_due_amount


class TestCreditPolicy:
    def test_overpayment_surfaced_as_negative(self, calculator):
        snapshot = tenant(payments=[partial("2024-02-01", "2024-02-29", 10000, 12000)])
        result = calculator.calculate(snapshot, date(2024, 2, 15))

        assert result.partial_due_amount == Decimal("-2000")
        assert result.rent_due_amount == Decimal("-2000")

    def test_clamp_policy_zeroes_credit(self):
        calculator = StatusCalculator(policy=RentPolicy(credit_policy=CreditPolicy.CLAMP))
        snapshot = tenant(payments=[partial("2024-02-01", "2024-02-29", 10000, 12000)])
        result = calculator.calculate(snapshot, date(2024, 2, 15))

        assert result.partial_due_amount == Decimal("0")
        assert result.rent_due_amount == Decimal("0")

    def test_clamp_applies_to_the_sum(self):
        """A credit on one month offsets what is owed on another before clamping."""
        calculator = StatusCalculator(policy=RentPolicy(credit_policy=CreditPolicy.CLAMP))
        snapshot = tenant(
            payments=[
                partial("2024-01-01", "2024-01-31", 10000, 12000),
                partial("2024-02-01", "2024-02-29", 10000, 4000),
            ]
        )
        result = calculator.calculate(snapshot, date(2024, 2, 15))
        assert result.partial_due_amount == Decimal("4000")


class TestAncillaryFlags:
    def test_any_paid_advance(self, calculator):
        snapshot = tenant(advances=[advance(AncillaryStatus.PENDING), advance(AncillaryStatus.PAID)])
        assert calculator.calculate(snapshot, date(2024, 2, 15)).is_advance_paid is True

    def test_unpaid_advance(self, calculator):
        snapshot = tenant(advances=[advance(AncillaryStatus.FAILED)])
        assert calculator.calculate(snapshot, date(2024, 2, 15)).is_advance_paid is False

    def test_refund_paid(self, calculator):
        snapshot = tenant(refunds=[refund(AncillaryStatus.PAID)])
        result = calculator.calculate(snapshot, date(2024, 2, 15))
        assert result.is_refund_paid is True
        assert result.is_advance_paid is False

    def test_partial_refund_is_not_paid(self, calculator):
        snapshot = tenant(refunds=[refund(AncillaryStatus.PARTIAL)])
        assert calculator.calculate(snapshot, date(2024, 2, 15)).is_refund_paid is False


class TestMalformedInput:
    """Never raise; best-effort result."""

    def test_inverted_interval_never_covers(self, calculator):
        snapshot = tenant(payments=[paid("2024-02-29", "2024-02-01")], rent_price=10000)
        result = calculator.calculate(snapshot, date(2024, 2, 15))

        assert result.is_rent_paid is False
        assert result.pending_months == 1
        assert result.pending_due_amount == Decimal("10000")

    def test_inverted_interval_amounts_still_counted(self, calculator):
        snapshot = tenant(payments=[partial("2024-02-29", "2024-02-01", 10000, 3000)])
        result = calculator.calculate(snapshot, date(2024, 2, 15))
        assert result.partial_due_amount == Decimal("7000")

    def test_missing_rent_price_backfills_zero(self, calculator):
        snapshot = tenant(payments=[paid("2023-10-01", "2023-10-31")], rent_price=None)
        result = calculator.calculate(snapshot, date(2024, 2, 15))

        assert result.pending_months == 4
        assert result.pending_due_amount == Decimal("0")
        assert result.is_rent_paid is False

    def test_none_lists_treated_as_empty(self, calculator):
        snapshot = TenantSnapshot(
            check_in_date=date(2024, 3, 1),
            payments=None,
            advance_payments=None,
            refund_payments=None,
        )
        result = calculator.calculate(snapshot, date(2024, 2, 15))

        assert result.is_advance_paid is False
        assert result.is_refund_paid is False
        assert result.is_rent_paid is True


class TestPurity:
    def test_idempotent(self, calculator):
        snapshot = tenant(
            payments=[partial("2024-01-01", "2024-01-31"), pending("2024-02-01", "2024-02-29")],
            advances=[advance()],
        )
        first = calculator.calculate(snapshot, date(2024, 2, 15))
        second = calculator.calculate(snapshot, date(2024, 2, 15))
        assert first == second

    def test_returns_fresh_value_object(self, calculator):
        snapshot = tenant(payments=[paid("2024-01-01", "2024-01-31")])
        first = calculator.calculate(snapshot, date(2024, 1, 15))
        second = calculator.calculate(snapshot, date(2024, 1, 15))
        assert first is not second
        with pytest.raises(AttributeError):
            first.is_rent_paid = False

    def test_module_level_convenience(self):
        snapshot = tenant(payments=[paid("2024-01-01", "2024-01-31")])
        assert isinstance(calculate_tenant_status(snapshot, date(2024, 1, 15)), StatusResult)


class TestInvariantLogging:
    def test_no_violation_logged_for_valid_result(self, calculator, caplog):
        snapshot = tenant(payments=[pending("2024-02-01", "2024-02-29")])
        with caplog.at_level(logging.ERROR, logger="tenant_truth.rent_status.calculator"):
            calculator.calculate(snapshot, date(2024, 2, 15))
        assert "INVARIANT_VIOLATION" not in caplog.text


class TestNonFiniteAmounts:
    """NaN and infinite amounts are zeroed instead of poisoning the totals."""

    def test_nan_partial_amount(self, calculator):
        snapshot = tenant(payments=[partial("2024-02-01", "2024-02-29", "NaN", "0")])
        result = calculator.calculate(snapshot, date(2024, 2, 15))

        assert result.is_rent_partial is True
        assert result.partial_due_amount == Decimal("0")
        assert result.rent_due_amount == Decimal("0")

    def test_infinite_paid_amount(self, calculator):
        snapshot = tenant(payments=[partial("2024-02-01", "2024-02-29", 10000, "Infinity")])
        result = calculator.calculate(snapshot, date(2024, 2, 15))
        assert result.partial_due_amount == Decimal("10000")

    def test_nan_rent_price_backfills_zero(self, calculator):
        snapshot = tenant(payments=[], check_in="2023-12-01", rent_price="NaN")
        result = calculator.calculate(snapshot, date(2024, 2, 15))

        assert result.pending_months == 2
        assert result.pending_due_amount == Decimal("0")

    def test_non_finite_amount_logged(self, calculator, caplog):
        snapshot = tenant(
            payments=[pending("2024-02-01", "2024-02-29", "-Infinity")], rent_price=None
        )
        with caplog.at_level(logging.WARNING, logger="tenant_truth.rent_status.calculator"):
            result = calculator.calculate(snapshot, date(2024, 2, 15))

        assert result.pending_due_amount == Decimal("0")
        assert "Non-finite amount" in caplog.text


class TestHeadline:
    """One status per tenant: pending months, then partial, then paid."""

    def test_pending_and_partial_headlines_as_pending(self, calculator):
        snapshot = tenant(
            payments=[partial("2024-01-01", "2024-01-31"), pending("2024-02-01", "2024-02-29")]
        )
        result = calculator.calculate(snapshot, date(2024, 2, 15))

        assert result.is_rent_partial is True
        assert result.headline is RentStatus.PENDING
        assert result.headline_label == "1 Month Pending"

    def test_months_pluralized(self, calculator):
        snapshot = tenant(payments=[], check_in="2023-08-15")
        assert calculator.calculate(snapshot, date(2024, 2, 15)).headline_label == "6 Months Pending"

    def test_partial_covering_today(self, calculator):
        snapshot = tenant(payments=[partial("2024-02-01", "2024-02-29")])
        result = calculator.calculate(snapshot, date(2024, 2, 15))

        assert result.headline is RentStatus.PARTIAL
        assert result.headline_label == "Partial Payment"

    def test_paid(self, calculator):
        snapshot = tenant(payments=[paid("2024-02-01", "2024-02-29")])
        result = calculator.calculate(snapshot, date(2024, 2, 15))

        assert result.headline is RentStatus.PAID
        assert result.headline_label == "Paid"

    def test_no_headline(self):
        """Not paid, yet no pending months and no partial record."""
        result = StatusResult(
            is_rent_paid=False,
            is_rent_partial=False,
            rent_due_amount=Decimal("0"),
            partial_due_amount=Decimal("0"),
            pending_due_amount=Decimal("0"),
            is_advance_paid=False,
            is_refund_paid=False,
            pending_months=0,
        )
        assert result.headline is None
        assert result.headline_label is None

    def test_fallback_headlines_as_pending(self):
        assert StatusResult.conservative_pending().headline is RentStatus.PENDING
