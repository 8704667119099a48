from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from billrecon.models.bill import BillStatus, BillStatusError, CompanyBill, VendorBill
from billrecon.models.payment import AppliedPayment, PaymentMethod
from billrecon.models.reconciliation import GroupingResult
from billrecon.models.summary import BillSummary
from billrecon.repositories.base import (
    CompanyBillRepository,
    PaymentRepository,
    VendorBillRepository,
)
from billrecon.services.export_service import export_filename, to_csv
from billrecon.services.grouping_service import CompanyBillIndex, group_bills
from billrecon.services.payment_service import apply_payment, record_payment
from billrecon.services.summary_service import summarize_bills
from billrecon.settings import settings
from billrecon.storage.base import StorageBackend

logger = logging.getLogger(__name__)


def _export_key(filename: str) -> str:
    prefix = settings.storage_prefix
    if prefix:
        return f"{prefix}/{filename}"
    return filename


class BillService:
    def __init__(
        self,
        vendor_repo: VendorBillRepository,
        company_repo: CompanyBillRepository,
        payment_repo: PaymentRepository,
        storage: StorageBackend,
    ) -> None:
        self.vendor_repo = vendor_repo
        self.company_repo = company_repo
        self.payment_repo = payment_repo
        self.storage = storage

    def list_vendor_bills(self) -> list[VendorBill]:
        result = self.vendor_repo.list_all()
        logger.debug("Listed %d vendor bills", len(result))
        return result

    def list_company_bills(self) -> list[CompanyBill]:
        result = self.company_repo.list_all()
        logger.debug("Listed %d company bills", len(result))
        return result

    def group(self) -> GroupingResult:
        """Load both bill collections and group them for display."""
        index = CompanyBillIndex(self.list_company_bills())
        result = group_bills(self.list_vendor_bills(), index)
        if result.warnings:
            logger.info("Grouping produced %d data-integrity warnings", len(result.warnings))
        return result

    def summarize(self) -> BillSummary:
        return summarize_bills(self.list_vendor_bills(), self.list_company_bills())

    def record_payment(
        self,
        bill: VendorBill,
        amount: Decimal | float | int | str,
        method: PaymentMethod = PaymentMethod.BANK_TRANSFER,
        reference: str = "",
        payment_date: date | None = None,
        notes: str = "",
    ) -> tuple[AppliedPayment, VendorBill]:
        """Validate, store and apply a payment. Returns the payment and the updated bill."""
        payment = record_payment(bill, amount, method, reference, payment_date, notes)
        payment = self.payment_repo.create(payment)
        updated = self.vendor_repo.update(apply_payment(bill, payment))
        logger.info(
            "Payment recorded: bill=%s amount=%s method=%s status=%s",
            bill.id,
            payment.amount,
            payment.method.value,
            updated.payment_status.value,
        )
        return payment, updated

    def list_payments(self, vendor_bill_id: str) -> list[AppliedPayment]:
        return self.payment_repo.list_by_bill(vendor_bill_id)

    def update_vendor_bill(
        self,
        bill: VendorBill,
        covers_company_bills: list[str] | None = None,
        notes: str | None = None,
    ) -> VendorBill:
        """Change the coverage or notes of a vendor bill that is not yet paid."""
        if bill.is_paid:
            raise ValueError(f"Vendor bill {bill.invoice_number} is paid and cannot be edited")
        changes: dict[str, object] = {}
        if covers_company_bills is not None:
            changes["covers_company_bills"] = list(covers_company_bills)
        if notes is not None:
            changes["notes"] = notes
        updated = self.vendor_repo.update(bill.model_copy(update=changes))
        logger.info("Vendor bill %s updated: %s", bill.id, ", ".join(sorted(changes)) or "no changes")
        return updated

    def mark_as_sent(self, bill: CompanyBill) -> CompanyBill:
        if bill.bill_status != BillStatus.DRAFT:
            raise BillStatusError(f"Company bill {bill.invoice_number} is already {bill.bill_status.value}")
        updated = self.company_repo.update(bill.model_copy(update={"bill_status": BillStatus.SENT}))
        logger.info("Company bill %s marked as sent", bill.id)
        return updated

    def export_csv(self, result: GroupingResult | None = None, today: date | None = None) -> str:
        """Write the grouped bills as CSV to storage. Returns the stored path."""
        if result is None:
            result = self.group()
        content = to_csv(result.groups, result.orphans)
        key = _export_key(export_filename(today))
        path = self.storage.save(key, content.encode("utf-8"), content_type="text/csv")
        logger.info("Bills exported to %s", key)
        return path
