from billrecon.models.bill import BillStatus, PaymentStatus
from billrecon.services.grouping_service import group_bills
from billrecon.services.presentation_service import (
    BillTableController,
    ExpansionState,
    RowAction,
    RowKind,
    company_bill_actions,
    total_bills,
    vendor_bill_actions,
)


class TestActionGating:
    def test_unpaid_vendor_bill(self, sample_vendor_bill):
        actions = vendor_bill_actions(sample_vendor_bill(payment_status=PaymentStatus.UNPAID))
        assert actions == [RowAction.VIEW_DETAILS, RowAction.EDIT, RowAction.RECORD_PAYMENT]

    def test_overdue_vendor_bill_can_be_paid(self, sample_vendor_bill):
        actions = vendor_bill_actions(sample_vendor_bill(payment_status=PaymentStatus.OVERDUE))
        assert RowAction.RECORD_PAYMENT in actions

    def test_paid_vendor_bill_only_views(self, sample_vendor_bill):
        actions = vendor_bill_actions(sample_vendor_bill(payment_status=PaymentStatus.PAID))
        assert actions == [RowAction.VIEW_DETAILS]

    def test_edit_hidden_without_callback(self, sample_vendor_bill):
        actions = vendor_bill_actions(sample_vendor_bill(), can_edit=False)
        assert actions == [RowAction.VIEW_DETAILS, RowAction.RECORD_PAYMENT]

    def test_draft_company_bill(self, sample_company_bill):
        actions = company_bill_actions(sample_company_bill(bill_status=BillStatus.DRAFT))
        assert actions == [RowAction.VIEW_DETAILS, RowAction.MARK_AS_SENT]

    def test_sent_company_bill(self, sample_company_bill):
        actions = company_bill_actions(sample_company_bill(bill_status=BillStatus.SENT))
        assert actions == [RowAction.VIEW_DETAILS]

    def test_mark_as_sent_hidden_without_callback(self, sample_company_bill):
        assert company_bill_actions(sample_company_bill(), can_mark_as_sent=False) == [RowAction.VIEW_DETAILS]


class TestExpansionState:
    def test_starts_empty(self):
        assert ExpansionState().expanded == set()

    def test_toggle(self):
        state = ExpansionState()
        assert state.toggle("V1") is True
        assert state.is_expanded("V1")
        assert state.toggle("V1") is False
        assert not state.is_expanded("V1")

    def test_serializable(self):
        state = ExpansionState()
        state.toggle("V1")
        restored = ExpansionState.model_validate_json(state.model_dump_json())
        assert restored.expanded == {"V1"}


class TestBillTableController:
    def _result(self, sample_vendor_bill, sample_company_bill):
        return group_bills(
            [
                sample_vendor_bill(id="V1", invoice_number="VINV-1", covers_company_bills=["A", "B"]),
                sample_vendor_bill(id="V2", invoice_number="VINV-2"),
            ],
            [
                sample_company_bill(id="A"),
                sample_company_bill(id="B", bill_status=BillStatus.SENT),
                sample_company_bill(id="C"),
            ],
        )

    def test_collapsed_rows(self, sample_vendor_bill, sample_company_bill):
        controller = BillTableController()
        rows = controller.rows(self._result(sample_vendor_bill, sample_company_bill))
        assert [r.kind for r in rows] == [
            RowKind.VENDOR,
            RowKind.VENDOR,
            RowKind.ORPHAN_HEADER,
            RowKind.ORPHAN,
        ]
        assert rows[0].expandable is True
        assert rows[0].expanded is False
        assert rows[1].expandable is False
        assert rows[2].orphan_count == 1
        assert rows[3].company_bill.id == "C"

    def test_expanded_rows_include_children(self, sample_vendor_bill, sample_company_bill):
        controller = BillTableController()
        controller.toggle("V1")
        rows = controller.rows(self._result(sample_vendor_bill, sample_company_bill))
        assert [r.kind for r in rows][:4] == [RowKind.VENDOR, RowKind.CHILD, RowKind.CHILD, RowKind.VENDOR]
        assert rows[0].expanded is True
        assert rows[1].parent_invoice_number == "VINV-1"
        assert rows[1].actions == [RowAction.VIEW_DETAILS, RowAction.MARK_AS_SENT]
        assert rows[2].actions == [RowAction.VIEW_DETAILS]

    def test_childless_bill_never_expands(self, sample_vendor_bill, sample_company_bill):
        controller = BillTableController()
        controller.toggle("V2")
        rows = controller.rows(self._result(sample_vendor_bill, sample_company_bill))
        vendor_two = rows[1]
        assert vendor_two.vendor_bill.id == "V2"
        assert vendor_two.expandable is False
        assert vendor_two.expanded is False
        assert rows[2].kind == RowKind.ORPHAN_HEADER

    def test_collapse_hides_children(self, sample_vendor_bill, sample_company_bill):
        controller = BillTableController()
        result = self._result(sample_vendor_bill, sample_company_bill)
        controller.toggle("V1")
        controller.toggle("V1")
        assert all(r.kind != RowKind.CHILD for r in controller.rows(result))

    def test_shares_state_object(self):
        state = ExpansionState()
        controller = BillTableController(state)
        controller.toggle("V1")
        assert state.expanded == {"V1"}

    def test_no_orphan_section_without_orphans(self, sample_vendor_bill):
        rows = BillTableController().rows(group_bills([sample_vendor_bill()], []))
        assert [r.kind for r in rows] == [RowKind.VENDOR]

    def test_total_bills(self, sample_vendor_bill, sample_company_bill):
        assert total_bills(self._result(sample_vendor_bill, sample_company_bill)) == 5
