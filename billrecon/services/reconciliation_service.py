from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from billrecon.constants import MATCH_TOLERANCE
from billrecon.models.bill import CompanyBill, VendorBill
from billrecon.models.reconciliation import Reconciliation


def reconcile(
    vendor_bill: VendorBill,
    linked_child_bills: Sequence[CompanyBill],
    raw_cover_count: int,
) -> Reconciliation:
    """Compare a vendor bill against the company bills it resolved to.

    ``raw_cover_count`` is the length of the vendor bill's original cover list,
    unresolved ids included, so ``missing_bills`` reflects links that point at
    nothing.
    """
    company_total = sum((cb.invoice_amount for cb in linked_child_bills), Decimal("0"))
    difference = vendor_bill.invoice_amount - company_total
    linked = len(linked_child_bills)
    return Reconciliation(
        vendor_amount=vendor_bill.invoice_amount,
        company_total=company_total,
        difference=difference,
        is_matched=abs(difference) < MATCH_TOLERANCE,
        covered_pos=raw_cover_count,
        linked_bills=linked,
        missing_bills=max(0, raw_cover_count - linked),
    )
