from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from billrecon.models.bill import CompanyBill, VendorBill
from billrecon.models.reconciliation import (
    GroupedVendorBill,
    GroupingResult,
    GroupingWarning,
    WarningKind,
)
from billrecon.services.reconciliation_service import reconcile

logger = logging.getLogger(__name__)


def _require_bills(value: object, bill_type: type, name: str) -> list:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise TypeError(f"{name} must be a sequence of {bill_type.__name__}, got {type(value).__name__}")
    for position, item in enumerate(value):
        if not isinstance(item, bill_type):
            raise TypeError(f"{name}[{position}] must be a {bill_type.__name__}, got {type(item).__name__}")
    return list(value)


class CompanyBillIndex:
    """Company bills indexed by id and by purchase order, built once per load.

    The first bill seen wins for a repeated id or purchase order. Later bills
    repeating an id are kept in ``shadowed`` so grouping can still place them.
    """

    def __init__(self, company_bills: Sequence[CompanyBill]) -> None:
        self.bills: list[CompanyBill] = _require_bills(company_bills, CompanyBill, "company_bills")
        self.by_id: dict[str, CompanyBill] = {}
        self.by_purchase_order: dict[str, CompanyBill] = {}
        self.shadowed: list[CompanyBill] = []
        for bill in self.bills:
            if self.by_id.setdefault(bill.id, bill) is not bill:
                self.shadowed.append(bill)
            if bill.purchase_order_id:
                self.by_purchase_order.setdefault(bill.purchase_order_id, bill)

    def __len__(self) -> int:
        return len(self.bills)


def _cover_references(
    vendor_bill: VendorBill, index: CompanyBillIndex
) -> tuple[list[str], Callable[[str], CompanyBill | None]]:
    """Pick the linkage a vendor bill uses: direct company bill ids, else legacy PO ids."""
    if vendor_bill.covers_company_bills:
        return vendor_bill.covers_company_bills, index.by_id.get
    if vendor_bill.covers_purchase_orders:
        return vendor_bill.covers_purchase_orders, index.by_purchase_order.get
    return [], index.by_id.get


def group_bills(
    vendor_bills: Sequence[VendorBill],
    company_bills: Sequence[CompanyBill] | CompanyBillIndex,
) -> GroupingResult:
    """Nest company bills under the vendor bills that cover them.

    Input order is preserved for groups, children and orphans. A company bill
    claimed by several vendor bills stays with the first one and every later
    claim is reported as a ``duplicate_link`` warning. References that resolve
    to nothing are reported as ``unresolved_link`` and counted as missing. A
    company bill repeating an earlier bill's id cannot be linked; it is
    reported as ``duplicate_id`` and listed with the orphans.
    """
    vendors = _require_bills(vendor_bills, VendorBill, "vendor_bills")
    index = company_bills if isinstance(company_bills, CompanyBillIndex) else CompanyBillIndex(company_bills)

    owners: dict[str, str] = {}
    linked: set[int] = set()
    groups: list[GroupedVendorBill] = []
    warnings: list[GroupingWarning] = []

    for bill in index.shadowed:
        logger.warning(
            "Company bill %s (%s) repeats an existing id and is listed as unlinked",
            bill.id,
            bill.invoice_number,
        )
        warnings.append(
            GroupingWarning(
                kind=WarningKind.DUPLICATE_ID,
                reference=bill.id,
                invoice_number=bill.invoice_number,
            )
        )

    for vendor_bill in vendors:
        references, resolve = _cover_references(vendor_bill, index)
        children: list[CompanyBill] = []

        for reference in references:
            company_bill = resolve(reference)
            if company_bill is None:
                logger.debug("Vendor bill %s covers unknown reference %s", vendor_bill.id, reference)
                warnings.append(
                    GroupingWarning(
                        kind=WarningKind.UNRESOLVED_LINK,
                        vendor_bill_id=vendor_bill.id,
                        reference=reference,
                    )
                )
                continue

            owner = owners.get(company_bill.id)
            if owner is not None:
                logger.warning(
                    "Company bill %s is already linked to vendor bill %s, ignoring link from %s",
                    company_bill.id,
                    owner,
                    vendor_bill.id,
                )
                warnings.append(
                    GroupingWarning(
                        kind=WarningKind.DUPLICATE_LINK,
                        vendor_bill_id=vendor_bill.id,
                        reference=reference,
                        owner_vendor_bill_id=owner,
                    )
                )
                continue

            owners[company_bill.id] = vendor_bill.id
            linked.add(id(company_bill))
            children.append(company_bill)

        groups.append(
            GroupedVendorBill(
                bill=vendor_bill,
                child_bills=children,
                reconciliation=reconcile(vendor_bill, children, len(references)),
            )
        )

    # by identity, so a bill sharing a linked id still lands in orphans
    orphans = [bill for bill in index.bills if id(bill) not in linked]
    logger.debug(
        "Grouped %d vendor bills, %d linked company bills, %d orphans, %d warnings",
        len(groups),
        len(owners),
        len(orphans),
        len(warnings),
    )
    return GroupingResult(groups=groups, orphans=orphans, warnings=warnings)
