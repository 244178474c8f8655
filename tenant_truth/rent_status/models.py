"""
Rent status domain model.

Snapshots are what the data-fetch layer hands in; StatusResult is what the
engine hands back. Both are frozen: status is derived on every read and is
never stored on the snapshot.
"""

from dataclasses import asdict, dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

ZERO = Decimal("0")


class PaymentStatus(str, Enum):
    """Status of a rent payment record."""

    PAID = "PAID"
    PARTIAL = "PARTIAL"
    PENDING = "PENDING"
    FAILED = "FAILED"


# Statuses that mean a month is owed in full
OWED_STATUSES = frozenset({PaymentStatus.PENDING, PaymentStatus.FAILED})

# Statuses whose period counts as covered for pending-month purposes
COVERING_STATUSES = frozenset({PaymentStatus.PAID, PaymentStatus.PARTIAL})


class AncillaryStatus(str, Enum):
    """Status of an advance or refund payment."""

    PAID = "PAID"
    PARTIAL = "PARTIAL"
    PENDING = "PENDING"
    FAILED = "FAILED"


class RentStatus(str, Enum):
    """
    Headline status for one tenant.

    Precedence: pending months beat a partial payment, which beats paid.
    """

    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"


class RentBucket(str, Enum):
    """Named tenant lists produced by the bulk classifier."""

    PENDING = "pending"
    PARTIAL = "partial"
    WITHOUT_ADVANCE = "without_advance"
    PAID = "paid"


@dataclass(frozen=True)
class PaymentRecord:
    """One billing period's rent obligation."""

    start_date: date
    end_date: date
    status: PaymentStatus
    expected_amount: Decimal | None = ZERO
    paid_amount: Decimal | None = ZERO


@dataclass(frozen=True)
class AncillaryPayment:
    """Advance or refund payment. Only the status matters to the engine."""

    status: AncillaryStatus


@dataclass(frozen=True)
class TenantSnapshot:
    """Facts needed to classify one tenant at the moment of calculation."""

    check_in_date: date | None = None
    check_out_date: date | None = None
    rent_price: Decimal | None = None
    payments: tuple[PaymentRecord, ...] = ()
    advance_payments: tuple[AncillaryPayment, ...] = ()
    refund_payments: tuple[AncillaryPayment, ...] = ()
    active: bool = True
    tenant_id: str | None = None
    name: str | None = None


@dataclass(frozen=True)
class StatusResult:
    """
    Derived rent status for one tenant.

    Field names are consumed by summary counters and detail views alike;
    rename only together with both.
    """

    is_rent_paid: bool
    is_rent_partial: bool
    rent_due_amount: Decimal
    partial_due_amount: Decimal
    pending_due_amount: Decimal
    is_advance_paid: bool
    is_refund_paid: bool
    pending_months: int

    @classmethod
    def conservative_pending(cls) -> "StatusResult":
        """Fallback for a tenant whose status could not be computed."""
        return cls(
            is_rent_paid=False,
            is_rent_partial=False,
            rent_due_amount=ZERO,
            partial_due_amount=ZERO,
            pending_due_amount=ZERO,
            is_advance_paid=False,
            is_refund_paid=False,
            pending_months=1,
        )

    @property
    def headline(self) -> RentStatus | None:
        """The one status a list row shows, or None when nothing applies."""
        if not self.is_rent_paid and self.pending_months > 0:
            return RentStatus.PENDING
        if self.is_rent_partial:
            return RentStatus.PARTIAL
        if self.is_rent_paid:
            return RentStatus.PAID
        return None

    @property
    def headline_label(self) -> str | None:
        headline = self.headline
        if headline is RentStatus.PENDING:
            unit = "Month" if self.pending_months == 1 else "Months"
            return f"{self.pending_months} {unit} Pending"
        if headline is RentStatus.PARTIAL:
            return "Partial Payment"
        if headline is RentStatus.PAID:
            return "Paid"
        return None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class EnrichedTenant:
    """A snapshot paired with the status derived from it."""

    snapshot: TenantSnapshot
    status: StatusResult

    @property
    def tenant_id(self) -> str | None:
        return self.snapshot.tenant_id

    def to_dict(self) -> dict[str, Any]:
        """Flat row: identity fields merged with the status fields."""
        row: dict[str, Any] = {
            "tenant_id": self.snapshot.tenant_id,
            "name": self.snapshot.name,
            "active": self.snapshot.active,
            "check_in_date": self.snapshot.check_in_date,
            "rent_price": self.snapshot.rent_price,
        }
        row.update(self.status.to_dict())
        headline = self.status.headline
        row["rent_status"] = headline.value if headline else None
        return row


@dataclass(frozen=True)
class TenantStatistics:
    """Portfolio counters. Bucket counts may overlap and exceed `active`."""

    total: int
    active: int
    with_pending_rent: int
    with_partial_rent: int
    with_paid_rent: int
    without_advance: int
    total_due_amount: Decimal = field(default=ZERO)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
