from decimal import Decimal

from billrecon.models.bill import BillStatus, PaymentStatus
from billrecon.models.payment import PaymentMethod

MATCH_TOLERANCE = Decimal("0.01")

NOT_APPLICABLE = "-"
NO_SUPPLIER = "N/A"
NO_PARENT = "(No Vendor Bill)"

TYPE_VENDOR = "Vendor"
TYPE_COMPANY = "Company"
TYPE_ORPHAN = "Company (Orphan)"

EXPORT_HEADERS = [
    "Bill #",
    "Type",
    "Supplier",
    "PO Reference",
    "Date",
    "Amount",
    "Paid",
    "Balance",
    "Status",
    "Parent Bill",
]

PAYMENT_STATUS_LABELS = {
    PaymentStatus.UNPAID: "Unpaid",
    PaymentStatus.PARTIAL: "Partially Paid",
    PaymentStatus.PAID: "Paid",
    PaymentStatus.OVERDUE: "Overdue",
}

BILL_STATUS_LABELS = {BillStatus.DRAFT: "Draft", BillStatus.SENT: "Sent"}

PAYMENT_METHOD_LABELS = {
    PaymentMethod.BANK_TRANSFER: "Bank Transfer",
    PaymentMethod.CASH: "Cash",
    PaymentMethod.CHEQUE: "Cheque",
    PaymentMethod.CARD: "Card Payment",
}


def po_count_label(covered_pos: int) -> str:
    return f"{covered_pos} PO{'s' if covered_pos != 1 else ''}"
