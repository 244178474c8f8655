"""
Invariants Module — Semantic Correctness Checks on rent status results.

Invariants verify MEANING, not just shape:
- Due amounts decompose exactly: rent_due == partial_due + pending_due
- A paid tenant owes nothing and has no pending months
- Pending months are never negative

Invariants run in production (the calculator logs violations) as well as in
tests.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tenant_truth.rent_status.models import StatusResult


class InvariantViolation(Exception):
    """Raised when a rent status invariant is violated."""

    pass


# =============================================================================
# INVARIANT FUNCTIONS
# =============================================================================


def check_due_decomposition(result: "StatusResult") -> None:
    """
    INVARIANT: rent_due_amount == partial_due_amount + pending_due_amount.

    Decimal arithmetic, so the comparison is exact.

    Raises:
        InvariantViolation: If the total does not match its parts
    """
    expected = result.partial_due_amount + result.pending_due_amount
    if result.rent_due_amount != expected:
        raise InvariantViolation(
            f"Due amount mismatch: rent_due={result.rent_due_amount}, "
            f"partial_due + pending_due={expected}"
        )


def check_paid_implies_zero_due(result: "StatusResult") -> None:
    """
    INVARIANT: is_rent_paid => pending_months == 0 and rent_due_amount == 0.

    Raises:
        InvariantViolation: If a paid tenant still owes something
    """
    if not result.is_rent_paid:
        return
    if result.pending_months != 0 or result.rent_due_amount != 0:
        raise InvariantViolation(
            f"Paid tenant has pending_months={result.pending_months}, "
            f"rent_due={result.rent_due_amount}"
        )


def check_pending_months_non_negative(result: "StatusResult") -> None:
    """
    INVARIANT: pending_months >= 0.

    Raises:
        InvariantViolation: If pending_months is negative
    """
    if result.pending_months < 0:
        raise InvariantViolation(f"Negative pending_months: {result.pending_months}")


ALL_INVARIANTS = [
    check_due_decomposition,
    check_paid_implies_zero_due,
    check_pending_months_non_negative,
]


# =============================================================================
# ENFORCEMENT
# =============================================================================


def enforce_invariants(result: "StatusResult") -> list[str]:
    """
    Run all invariants. Returns list of violations.

    Returns:
        List of violation messages. Empty = pass.
    """
    violations = []

    for invariant in ALL_INVARIANTS:
        try:
            invariant(result)
        except InvariantViolation as e:
            violations.append(f"INVARIANT_VIOLATION: {str(e)}")

    return violations


def enforce_invariants_strict(result: "StatusResult") -> None:
    """
    Strict enforcement — raises on first violation.

    Raises:
        InvariantViolation: If any invariant fails
    """
    for invariant in ALL_INVARIANTS:
        invariant(result)
