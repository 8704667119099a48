from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict


class PaymentMethod(str, Enum):
    BANK_TRANSFER = "bank_transfer"
    CASH = "cash"
    CHEQUE = "cheque"
    CARD = "card"


class AppliedPayment(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = ""
    vendor_bill_id: str
    amount: Decimal
    method: PaymentMethod = PaymentMethod.BANK_TRANSFER
    reference: str = ""
    payment_date: date
    notes: str = ""


class PaymentError(ValueError):
    """Base class for payments that cannot be applied to a vendor bill."""


class InvalidAmountError(PaymentError):
    def __init__(self, amount: object) -> None:
        super().__init__(f"Invalid payment amount: {amount!r}")
        self.amount = amount


class ExceedsBalanceError(PaymentError):
    def __init__(self, amount: Decimal, balance_due: Decimal) -> None:
        super().__init__(f"Payment amount {amount} exceeds balance due {balance_due}")
        self.amount = amount
        self.balance_due = balance_due
