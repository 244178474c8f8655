"""
Schema Module — Pydantic contracts at the data-fetch boundary.

Input: raw tenant records as the data-fetch layer returns them
(tenant_payments[], advance_payments[], refund_payments[], rooms.rent_price,
status). Field names and loose types (numeric strings, ISO datetimes, nulls)
are accepted here and nowhere else; past this module everything is a typed,
frozen TenantSnapshot.

Output: serialized shapes for StatusResult and TenantStatistics. These field
names are a stable contract for summary counters and detail views.

Invalid raw records are quarantined by load_snapshots(), never raised, so
one bad tenant cannot abort a batch.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from tenant_truth.config import DEFAULT_POLICY
from tenant_truth.rent_status.models import (
    AncillaryPayment,
    AncillaryStatus,
    EnrichedTenant,
    PaymentRecord,
    PaymentStatus,
    RentStatus,
    StatusResult,
    TenantSnapshot,
    TenantStatistics,
)

logger = logging.getLogger(__name__)


def _coerce_day(value: Any) -> Any:
    """
    ISO date/datetime strings and datetimes -> date. Empty -> None.

    Anything longer than YYYY-MM-DD is parsed as a timestamp, with either a
    "T" or a space separator, and truncated to its day.
    """
    if isinstance(value, str):
        value = value.strip()
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and len(value) > 10:
        return datetime.fromisoformat(value).date()
    return value


def _coerce_amount(value: Any) -> Any:
    if value is None or value == "":
        return None
    return value


def _coerce_status(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().upper()
    return value


# =============================================================================
# INPUT CONTRACTS
# =============================================================================


class PaymentRecordIn(BaseModel):
    """Raw rent payment row."""

    model_config = ConfigDict(extra="ignore")

    start_date: date
    end_date: date
    status: PaymentStatus
    actual_rent_amount: Decimal | None = None
    amount_paid: Decimal | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalize_days(cls, value: Any) -> Any:
        return _coerce_day(value)

    @field_validator("actual_rent_amount", "amount_paid", mode="before")
    @classmethod
    def normalize_amounts(cls, value: Any) -> Any:
        return _coerce_amount(value)

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value: Any) -> Any:
        return _coerce_status(value)

    def to_record(self) -> PaymentRecord:
        return PaymentRecord(
            start_date=self.start_date,
            end_date=self.end_date,
            status=self.status,
            expected_amount=self.actual_rent_amount or Decimal("0"),
            paid_amount=self.amount_paid or Decimal("0"),
        )


class AncillaryPaymentIn(BaseModel):
    """Raw advance or refund row."""

    model_config = ConfigDict(extra="ignore")

    status: AncillaryStatus

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value: Any) -> Any:
        return _coerce_status(value)

    def to_payment(self) -> AncillaryPayment:
        return AncillaryPayment(status=self.status)


class RoomIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    rent_price: Decimal | None = None

    @field_validator("rent_price", mode="before")
    @classmethod
    def normalize_amount(cls, value: Any) -> Any:
        return _coerce_amount(value)


class TenantRecord(BaseModel):
    """Raw tenant row joined with its payment sub-records."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    s_no: str | None = None
    name: str | None = None
    status: str | None = None
    check_in_date: date | None = None
    check_out_date: date | None = None
    rooms: RoomIn | None = None
    tenant_payments: list[PaymentRecordIn] | None = None
    advance_payments: list[AncillaryPaymentIn] | None = None
    refund_payments: list[AncillaryPaymentIn] | None = None

    @field_validator("check_in_date", "check_out_date", mode="before")
    @classmethod
    def normalize_days(cls, value: Any) -> Any:
        return _coerce_day(value)

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value: Any) -> Any:
        return _coerce_status(value)

    @field_validator("id", "s_no", mode="before")
    @classmethod
    def normalize_identity(cls, value: Any) -> Any:
        if value is None:
            return None
        return str(value)

    @property
    def tenant_id(self) -> str | None:
        return self.id or self.s_no

    def to_snapshot(
        self, active_statuses: Iterable[str] = DEFAULT_POLICY.active_statuses
    ) -> TenantSnapshot:
        """Build the frozen domain snapshot. Null lists become empty."""
        active = {s.upper() for s in active_statuses}
        return TenantSnapshot(
            tenant_id=self.tenant_id,
            name=self.name,
            check_in_date=self.check_in_date,
            check_out_date=self.check_out_date,
            rent_price=self.rooms.rent_price if self.rooms else None,
            payments=tuple(p.to_record() for p in self.tenant_payments or ()),
            advance_payments=tuple(p.to_payment() for p in self.advance_payments or ()),
            refund_payments=tuple(p.to_payment() for p in self.refund_payments or ()),
            active=self.status in active,
        )


@dataclass
class RejectedRecord:
    """A raw record that failed the boundary contract."""

    index: int
    tenant_id: str | None
    reason: str


@dataclass
class LoadResult:
    snapshots: list[TenantSnapshot] = field(default_factory=list)
    rejected: list[RejectedRecord] = field(default_factory=list)


def load_snapshots(
    records: Iterable[Any],
    active_statuses: Iterable[str] = DEFAULT_POLICY.active_statuses,
) -> LoadResult:
    """
    Validate raw tenant records and build snapshots.

    Records that fail validation are quarantined in `rejected` with the
    pydantic error summary; the rest of the batch still loads.
    """
    active_statuses = tuple(active_statuses)
    result = LoadResult()

    for index, raw in enumerate(records):
        try:
            record = TenantRecord.model_validate(raw)
        except ValidationError as e:
            tenant_id = raw.get("id") if isinstance(raw, dict) else None
            reason = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            logger.warning(
                f"Quarantined tenant record #{index}: {reason}",
                extra={"tenant_id": tenant_id},
            )
            result.rejected.append(
                RejectedRecord(
                    index=index,
                    tenant_id=None if tenant_id is None else str(tenant_id),
                    reason=reason,
                )
            )
            continue
        result.snapshots.append(record.to_snapshot(active_statuses))

    if result.rejected:
        logger.info(
            f"Loaded {len(result.snapshots)} tenant records, quarantined {len(result.rejected)}"
        )
    return result


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================


class StatusResultModel(BaseModel):
    """Serialized StatusResult."""

    is_rent_paid: bool
    is_rent_partial: bool
    rent_due_amount: Decimal = Field(description="partial_due_amount + pending_due_amount")
    partial_due_amount: Decimal = Field(description="Negative means the tenant holds a credit")
    pending_due_amount: Decimal
    is_advance_paid: bool
    is_refund_paid: bool
    pending_months: int = Field(ge=0)

    @classmethod
    def from_result(cls, result: StatusResult) -> "StatusResultModel":
        return cls(**result.to_dict())


class TenantStatusRow(StatusResultModel):
    """One tenant in a bucket listing: identity, headline and full status."""

    tenant_id: str | None = None
    name: str | None = None
    active: bool
    rent_status: RentStatus | None = Field(
        default=None, description="Headline: pending, then partial, then paid"
    )
    status_label: str | None = None

    @classmethod
    def from_enriched(cls, enriched: EnrichedTenant) -> "TenantStatusRow":
        return cls(
            tenant_id=enriched.snapshot.tenant_id,
            name=enriched.snapshot.name,
            active=enriched.snapshot.active,
            rent_status=enriched.status.headline,
            status_label=enriched.status.headline_label,
            **enriched.status.to_dict(),
        )


class TenantStatisticsModel(BaseModel):
    """Serialized TenantStatistics."""

    total: int = Field(ge=0)
    active: int = Field(ge=0)
    with_pending_rent: int = Field(ge=0)
    with_partial_rent: int = Field(ge=0)
    with_paid_rent: int = Field(ge=0)
    without_advance: int = Field(ge=0)
    total_due_amount: Decimal

    @classmethod
    def from_statistics(cls, stats: TenantStatistics) -> "TenantStatisticsModel":
        return cls(**stats.to_dict())
