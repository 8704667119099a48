from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from billrecon.models.bill import CompanyBill, PaymentStatus, VendorBill
from billrecon.models.summary import BillSummary


def summarize_bills(vendor_bills: Sequence[VendorBill], company_bills: Sequence[CompanyBill]) -> BillSummary:
    """Totals for the bills toolbar. Only vendor bills carry paid and balance amounts."""
    zero = Decimal("0")
    return BillSummary(
        total=len(vendor_bills) + len(company_bills),
        vendor_bills=len(vendor_bills),
        company_bills=len(company_bills),
        unpaid=sum(1 for b in vendor_bills if b.payment_status == PaymentStatus.UNPAID),
        overdue=sum(1 for b in vendor_bills if b.payment_status == PaymentStatus.OVERDUE),
        total_amount=sum((b.invoice_amount for b in vendor_bills), zero)
        + sum((b.invoice_amount for b in company_bills), zero),
        paid_amount=sum((b.paid_amount for b in vendor_bills), zero),
        balance_due=sum((b.balance_due for b in vendor_bills), zero),
    )
