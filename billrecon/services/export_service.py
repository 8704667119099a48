from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import date

from billrecon.constants import (
    EXPORT_HEADERS,
    NO_PARENT,
    NO_SUPPLIER,
    NOT_APPLICABLE,
    TYPE_COMPANY,
    TYPE_ORPHAN,
    TYPE_VENDOR,
)
from billrecon.models.bill import CompanyBill
from billrecon.models.reconciliation import GroupedVendorBill
from billrecon.settings import settings

DateFormatter = Callable[[date | None], str]

_NEEDS_QUOTING = (",", '"', "\n", "\r")


def _iso_date(value: date | None) -> str:
    return value.isoformat() if value else ""


def escape_field(value: str) -> str:
    """Quote a field containing a comma, quote or line break, doubling inner quotes."""
    if any(ch in value for ch in _NEEDS_QUOTING):
        return '"' + value.replace('"', '""') + '"'
    return value


def _company_row(bill: CompanyBill, bill_type: str, parent: str, format_date: DateFormatter) -> list[str]:
    return [
        bill.invoice_number,
        bill_type,
        bill.supplier_name or NO_SUPPLIER,
        bill.order_number or NOT_APPLICABLE,
        format_date(bill.invoice_date),
        str(bill.invoice_amount),
        NOT_APPLICABLE,
        NOT_APPLICABLE,
        bill.bill_status.value,
        parent,
    ]


def to_rows(
    groups: Sequence[GroupedVendorBill],
    orphans: Sequence[CompanyBill],
    format_date: DateFormatter = _iso_date,
) -> list[list[str]]:
    """Flatten grouped bills into export rows: each vendor bill, its children, then orphans."""
    rows: list[list[str]] = []

    for group in groups:
        vendor = group.bill
        rows.append(
            [
                vendor.invoice_number,
                TYPE_VENDOR,
                vendor.supplier_name or NO_SUPPLIER,
                f"{group.reconciliation.covered_pos} PO(s)",
                format_date(vendor.invoice_date),
                str(vendor.invoice_amount),
                str(vendor.paid_amount),
                str(vendor.balance_due),
                vendor.payment_status.value,
                "",
            ]
        )
        for child in group.child_bills:
            rows.append(_company_row(child, TYPE_COMPANY, vendor.invoice_number, format_date))

    for orphan in orphans:
        rows.append(_company_row(orphan, TYPE_ORPHAN, NO_PARENT, format_date))

    return rows


def to_csv(
    groups: Sequence[GroupedVendorBill],
    orphans: Sequence[CompanyBill],
    format_date: DateFormatter = _iso_date,
) -> str:
    lines = [",".join(EXPORT_HEADERS)]
    for row in to_rows(groups, orphans, format_date):
        lines.append(",".join(escape_field(field) for field in row))
    return "\n".join(lines)


def export_filename(today: date | None = None) -> str:
    today = today or date.today()
    return f"{settings.export_filename_prefix}_{today.isoformat()}.csv"
