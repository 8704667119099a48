from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel


class BillSummary(BaseModel):
    total: int = 0
    vendor_bills: int = 0
    company_bills: int = 0
    unpaid: int = 0
    overdue: int = 0
    total_amount: Decimal = Decimal("0")
    paid_amount: Decimal = Decimal("0")
    balance_due: Decimal = Decimal("0")
