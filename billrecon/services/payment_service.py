from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal, InvalidOperation

from billrecon.models.bill import PaymentStatus, VendorBill
from billrecon.models.payment import (
    AppliedPayment,
    ExceedsBalanceError,
    InvalidAmountError,
    PaymentMethod,
)

logger = logging.getLogger(__name__)


def _to_decimal(amount: object) -> Decimal:
    if isinstance(amount, bool):
        raise InvalidAmountError(amount)
    if isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, (int, float, str)):
        try:
            value = Decimal(str(amount).strip())
        except InvalidOperation:
            raise InvalidAmountError(amount) from None
    else:
        raise InvalidAmountError(amount)
    if not value.is_finite():
        raise InvalidAmountError(amount)
    return value


def record_payment(
    bill: VendorBill,
    amount: Decimal | float | int | str,
    method: PaymentMethod = PaymentMethod.BANK_TRANSFER,
    reference: str = "",
    payment_date: date | None = None,
    notes: str = "",
) -> AppliedPayment:
    """Validate a payment against a vendor bill and return the payment record.

    Raises ``InvalidAmountError`` for non-finite or non-positive amounts and
    ``ExceedsBalanceError`` when the amount is above the bill's balance due.
    The bill itself is left untouched.
    """
    value = _to_decimal(amount)
    if value <= 0:
        raise InvalidAmountError(amount)

    balance_due = bill.balance_due
    if value > balance_due:
        raise ExceedsBalanceError(value, balance_due)

    logger.debug("Payment of %s validated for vendor bill %s (balance %s)", value, bill.id, balance_due)
    return AppliedPayment(
        vendor_bill_id=bill.id,
        amount=value,
        method=method,
        reference=reference,
        payment_date=payment_date or date.today(),
        notes=notes,
    )


def apply_payment(bill: VendorBill, payment: AppliedPayment) -> VendorBill:
    """Return a copy of the bill with the payment added to its paid amount."""
    if payment.vendor_bill_id != bill.id:
        raise ValueError(f"Payment belongs to vendor bill {payment.vendor_bill_id}, not {bill.id}")

    paid_amount = bill.paid_amount + payment.amount
    if paid_amount >= bill.invoice_amount:
        status = PaymentStatus.PAID
    elif bill.payment_status == PaymentStatus.OVERDUE:
        status = PaymentStatus.OVERDUE
    else:
        status = PaymentStatus.PARTIAL
    return bill.model_copy(update={"paid_amount": paid_amount, "payment_status": status})
