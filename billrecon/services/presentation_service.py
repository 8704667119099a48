from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from billrecon.models.bill import BillStatus, CompanyBill, PaymentStatus, VendorBill
from billrecon.models.reconciliation import GroupedVendorBill, GroupingResult


class RowAction(str, Enum):
    VIEW_DETAILS = "view_details"
    RECORD_PAYMENT = "record_payment"
    EDIT = "edit"
    MARK_AS_SENT = "mark_as_sent"


class RowKind(str, Enum):
    VENDOR = "vendor"
    CHILD = "child"
    ORPHAN_HEADER = "orphan_header"
    ORPHAN = "orphan"


def vendor_bill_actions(bill: VendorBill, can_edit: bool = True) -> list[RowAction]:
    actions = [RowAction.VIEW_DETAILS]
    if bill.payment_status != PaymentStatus.PAID:
        if can_edit:
            actions.append(RowAction.EDIT)
        actions.append(RowAction.RECORD_PAYMENT)
    return actions


def company_bill_actions(bill: CompanyBill, can_mark_as_sent: bool = True) -> list[RowAction]:
    actions = [RowAction.VIEW_DETAILS]
    if can_mark_as_sent and bill.bill_status == BillStatus.DRAFT:
        actions.append(RowAction.MARK_AS_SENT)
    return actions


class ExpansionState(BaseModel):
    """Ids of the vendor bills currently expanded in the table."""

    expanded: set[str] = set()

    def toggle(self, bill_id: str) -> bool:
        """Flip a vendor bill between expanded and collapsed. Returns the new state."""
        if bill_id in self.expanded:
            self.expanded.discard(bill_id)
            return False
        self.expanded.add(bill_id)
        return True

    def is_expanded(self, bill_id: str) -> bool:
        return bill_id in self.expanded


class TableRow(BaseModel):
    kind: RowKind
    vendor_bill: VendorBill | None = None
    company_bill: CompanyBill | None = None
    group: GroupedVendorBill | None = None
    parent_invoice_number: str = ""
    expandable: bool = False
    expanded: bool = False
    orphan_count: int = 0
    actions: list[RowAction] = []


class BillTableController:
    """Owns the expand/collapse state of the grouped bills table.

    ``can_edit`` and ``can_mark_as_sent`` say whether the host wired up those
    callbacks; without them the matching actions are never offered.
    """

    def __init__(
        self,
        state: ExpansionState | None = None,
        can_edit: bool = True,
        can_mark_as_sent: bool = True,
    ) -> None:
        self.state = state if state is not None else ExpansionState()
        self.can_edit = can_edit
        self.can_mark_as_sent = can_mark_as_sent

    @staticmethod
    def can_expand(group: GroupedVendorBill) -> bool:
        return group.has_children

    def toggle(self, bill_id: str) -> bool:
        return self.state.toggle(bill_id)

    def is_expanded(self, group: GroupedVendorBill) -> bool:
        return self.can_expand(group) and self.state.is_expanded(group.id)

    def rows(self, result: GroupingResult) -> list[TableRow]:
        """Flatten the grouping into display rows, honouring the expansion state."""
        rows: list[TableRow] = []

        for group in result.groups:
            expanded = self.is_expanded(group)
            rows.append(
                TableRow(
                    kind=RowKind.VENDOR,
                    vendor_bill=group.bill,
                    group=group,
                    expandable=self.can_expand(group),
                    expanded=expanded,
                    actions=vendor_bill_actions(group.bill, self.can_edit),
                )
            )
            if expanded:
                for child in group.child_bills:
                    rows.append(
                        TableRow(
                            kind=RowKind.CHILD,
                            company_bill=child,
                            parent_invoice_number=group.bill.invoice_number,
                            actions=company_bill_actions(child, self.can_mark_as_sent),
                        )
                    )

        if result.orphans:
            rows.append(TableRow(kind=RowKind.ORPHAN_HEADER, orphan_count=len(result.orphans)))
            for orphan in result.orphans:
                rows.append(
                    TableRow(
                        kind=RowKind.ORPHAN,
                        company_bill=orphan,
                        actions=company_bill_actions(orphan, self.can_mark_as_sent),
                    )
                )

        return rows


def total_bills(result: GroupingResult) -> int:
    return len(result.groups) + len(result.orphans) + sum(len(g.child_bills) for g in result.groups)
