from __future__ import annotations

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict

from billrecon.models.bill import CompanyBill, VendorBill


class Reconciliation(BaseModel):
    model_config = ConfigDict(frozen=True)

    vendor_amount: Decimal
    company_total: Decimal
    difference: Decimal  # vendor_amount - company_total
    is_matched: bool
    covered_pos: int
    linked_bills: int
    missing_bills: int


class GroupedVendorBill(BaseModel):
    bill: VendorBill
    child_bills: list[CompanyBill] = []
    reconciliation: Reconciliation

    @property
    def id(self) -> str:
        return self.bill.id

    @property
    def has_children(self) -> bool:
        return bool(self.child_bills)


class WarningKind(str, Enum):
    DUPLICATE_LINK = "duplicate_link"
    UNRESOLVED_LINK = "unresolved_link"
    DUPLICATE_ID = "duplicate_id"


class GroupingWarning(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: WarningKind
    reference: str
    vendor_bill_id: str | None = None  # unset for duplicate ids
    owner_vendor_bill_id: str | None = None  # set for duplicate links
    invoice_number: str = ""  # set for duplicate ids


class GroupingResult(BaseModel):
    groups: list[GroupedVendorBill] = []
    orphans: list[CompanyBill] = []
    warnings: list[GroupingWarning] = []


class ReconciliationStatus(str, Enum):
    MATCHED = "matched"
    MISMATCH = "mismatch"
    PENDING = "pending"
    INFO = "info"
