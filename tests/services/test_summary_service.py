from decimal import Decimal

from billrecon.models.bill import PaymentStatus
from billrecon.services.summary_service import summarize_bills


class TestSummarizeBills:
    def test_empty(self):
        summary = summarize_bills([], [])
        assert summary.total == 0
        assert summary.total_amount == Decimal("0")

    def test_counts_and_totals(self, sample_vendor_bill, sample_company_bill):
        vendors = [
            sample_vendor_bill(id="V1", invoice_amount=Decimal("1000"), payment_status=PaymentStatus.UNPAID),
            sample_vendor_bill(
                id="V2",
                invoice_amount=Decimal("500"),
                paid_amount=Decimal("200"),
                payment_status=PaymentStatus.OVERDUE,
            ),
            sample_vendor_bill(
                id="V3",
                invoice_amount=Decimal("300"),
                paid_amount=Decimal("300"),
                payment_status=PaymentStatus.PAID,
            ),
        ]
        companies = [sample_company_bill(id="C1", invoice_amount=Decimal("600"))]

        summary = summarize_bills(vendors, companies)

        assert summary.total == 4
        assert summary.vendor_bills == 3
        assert summary.company_bills == 1
        assert summary.unpaid == 1
        assert summary.overdue == 1
        assert summary.total_amount == Decimal("2400")
        assert summary.paid_amount == Decimal("500")
        assert summary.balance_due == Decimal("1300")
