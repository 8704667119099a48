"""Root conftest — factories for vendor and company bills."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from billrecon.models.bill import BillStatus, CompanyBill, PaymentStatus, VendorBill


def _sample_vendor_bill(**overrides) -> VendorBill:
    defaults = dict(
        id="VB1",
        invoice_number="VINV-001",
        invoice_date=date(2025, 3, 1),
        due_date=date(2025, 3, 31),
        invoice_amount=Decimal("1000"),
        paid_amount=Decimal("0"),
        payment_status=PaymentStatus.UNPAID,
        supplier_name="Gulf Lubricants LLC",
        covers_company_bills=[],
    )
    defaults.update(overrides)
    return VendorBill(**defaults)


def _sample_company_bill(**overrides) -> CompanyBill:
    defaults = dict(
        id="CB1",
        invoice_number="CINV-001",
        invoice_date=date(2025, 2, 20),
        invoice_amount=Decimal("600"),
        bill_status=BillStatus.DRAFT,
        purchase_order_id="PO1",
        order_number="PO-2025-001",
        supplier_name="Gulf Lubricants LLC",
    )
    defaults.update(overrides)
    return CompanyBill(**defaults)


@pytest.fixture()
def sample_vendor_bill():
    return _sample_vendor_bill


@pytest.fixture()
def sample_company_bill():
    return _sample_company_bill
