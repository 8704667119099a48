from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from billrecon.constants import MATCH_TOLERANCE, NOT_APPLICABLE
from billrecon.models import format_omr
from billrecon.models.bill import BillStatus, PaymentStatus
from billrecon.models.reconciliation import Reconciliation, ReconciliationStatus


class StatusStyle(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    color: str
    icon: str


RECONCILIATION_STYLES: dict[ReconciliationStatus, StatusStyle] = {
    ReconciliationStatus.MATCHED: StatusStyle(label="Matched", color="green", icon="✔"),
    ReconciliationStatus.MISMATCH: StatusStyle(label="Mismatch", color="red", icon="⚠"),
    ReconciliationStatus.PENDING: StatusStyle(label="Pending", color="dark_orange", icon="◷"),
    ReconciliationStatus.INFO: StatusStyle(label="Info", color="grey50", icon="ℹ"),
}

PAYMENT_STATUS_STYLES: dict[PaymentStatus, StatusStyle] = {
    PaymentStatus.UNPAID: StatusStyle(label="Unpaid", color="dark_orange", icon=""),
    PaymentStatus.PARTIAL: StatusStyle(label="Partial", color="blue", icon=""),
    PaymentStatus.PAID: StatusStyle(label="Paid", color="green", icon=""),
    PaymentStatus.OVERDUE: StatusStyle(label="Overdue", color="red", icon=""),
}

BILL_STATUS_STYLES: dict[BillStatus, StatusStyle] = {
    BillStatus.DRAFT: StatusStyle(label="Draft", color="dark_orange", icon="◷"),
    BillStatus.SENT: StatusStyle(label="Sent", color="green", icon="✔"),
}


def classify(reconciliation: Reconciliation | None) -> ReconciliationStatus:
    """Map a reconciliation to its display status.

    Checks run in a fixed order: Matched, Mismatch, Pending, then Info. An
    amount match with missing company bills is Pending, never Mismatch.
    """
    if reconciliation is None:
        return ReconciliationStatus.INFO
    has_missing = reconciliation.missing_bills > 0
    if reconciliation.is_matched and not has_missing:
        return ReconciliationStatus.MATCHED
    if not reconciliation.is_matched and abs(reconciliation.difference) >= MATCH_TOLERANCE:
        return ReconciliationStatus.MISMATCH
    if has_missing:
        return ReconciliationStatus.PENDING
    return ReconciliationStatus.INFO


def style_for(status: ReconciliationStatus) -> StatusStyle:
    return RECONCILIATION_STYLES[status]


class ReconciliationBadge(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: ReconciliationStatus
    label: str
    title: str = ""
    missing_note: str = ""


def describe(
    reconciliation: Reconciliation | None,
    format_amount: Callable[[Decimal], str] = format_omr,
) -> ReconciliationBadge:
    """Build the badge text shown in the reconciliation column."""
    status = classify(reconciliation)

    if reconciliation is None:
        return ReconciliationBadge(status=status, label=NOT_APPLICABLE)

    missing = reconciliation.missing_bills
    difference = reconciliation.difference

    if status == ReconciliationStatus.MATCHED:
        return ReconciliationBadge(status=status, label="Matched", title="Amounts match - Fully reconciled")

    if status == ReconciliationStatus.MISMATCH:
        side = "Vendor" if difference > 0 else "Company"
        return ReconciliationBadge(
            status=status,
            label=f"{side} +{format_amount(abs(difference))}",
            title=f"Amount difference: {format_amount(abs(difference))}",
            missing_note=f"+{missing} missing" if missing > 0 else "",
        )

    if status == ReconciliationStatus.PENDING:
        return ReconciliationBadge(
            status=status,
            label=f"{missing} PO pending",
            title=f"{missing} covered PO(s) don't have company bills yet",
        )

    return ReconciliationBadge(
        status=status,
        label=f"{reconciliation.linked_bills}/{reconciliation.covered_pos} linked",
        title="Reconciliation info available",
    )
