from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class PaymentStatus(str, Enum):
    UNPAID = "unpaid"
    PARTIAL = "partial"
    PAID = "paid"
    OVERDUE = "overdue"


class BillStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"


class VendorBill(BaseModel):
    id: str
    invoice_number: str
    invoice_date: date | None = None
    due_date: date | None = None
    invoice_amount: Decimal = Field(default=Decimal("0"), ge=0)
    paid_amount: Decimal = Field(default=Decimal("0"), ge=0)
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    supplier_name: str = ""
    covers_company_bills: list[str] = []
    covers_purchase_orders: list[str] = []  # legacy linkage by PO id
    notes: str = ""

    @property
    def balance_due(self) -> Decimal:
        return max(Decimal("0"), self.invoice_amount - self.paid_amount)

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID


class CompanyBill(BaseModel):
    id: str
    invoice_number: str
    invoice_date: date | None = None
    invoice_amount: Decimal = Field(default=Decimal("0"), ge=0)
    bill_status: BillStatus = BillStatus.DRAFT
    purchase_order_id: str | None = None
    order_number: str = ""
    supplier_name: str = ""
    notes: str = ""


class BillStatusError(ValueError):
    """Raised when a company bill cannot move to the requested status."""
