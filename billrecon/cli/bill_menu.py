from __future__ import annotations

from datetime import date

import questionary
from rich.console import Console
from rich.table import Table

from billrecon.constants import (
    BILL_STATUS_LABELS,
    NO_SUPPLIER,
    NOT_APPLICABLE,
    PAYMENT_METHOD_LABELS,
    PAYMENT_STATUS_LABELS,
    po_count_label,
)
from billrecon.models import format_omr, parse_amount
from billrecon.models.bill import BillStatusError, CompanyBill, VendorBill
from billrecon.models.payment import PaymentError
from billrecon.models.reconciliation import GroupingResult, WarningKind
from billrecon.services.bill_service import BillService
from billrecon.services.presentation_service import (
    BillTableController,
    RowAction,
    RowKind,
    TableRow,
    total_bills,
)
from billrecon.services.status_service import (
    BILL_STATUS_STYLES,
    PAYMENT_STATUS_STYLES,
    describe,
    style_for,
)

console = Console()

BACK = "Back"

ACTION_LABELS = {
    RowAction.VIEW_DETAILS: "View Details",
    RowAction.RECORD_PAYMENT: "Record Payment",
    RowAction.EDIT: "Edit Vendor Bill",
    RowAction.MARK_AS_SENT: "Mark as Sent",
}


def _format_date(value: date | None) -> str:
    return value.strftime("%d/%m/%Y") if value else NOT_APPLICABLE


def _row_label(row: TableRow) -> str:
    if row.kind == RowKind.VENDOR and row.vendor_bill is not None:
        marker = ("▾ " if row.expanded else "▸ ") if row.expandable else "  "
        return f"{marker}{row.vendor_bill.invoice_number} (Vendor)"
    if row.company_bill is not None:
        prefix = "    └ " if row.kind == RowKind.CHILD else "  "
        return f"{prefix}{row.company_bill.invoice_number} (Company)"
    return ""


def _vendor_cells(row: TableRow) -> list[str]:
    bill = row.vendor_bill
    group = row.group
    if bill is None or group is None:
        return []
    status = PAYMENT_STATUS_STYLES[bill.payment_status]
    badge = describe(group.reconciliation)
    recon_style = style_for(badge.status)
    recon = f"[{recon_style.color}]{recon_style.icon} {badge.label}[/{recon_style.color}]"
    if badge.missing_note:
        recon += f" [dim]{badge.missing_note}[/dim]"
    expand = ("▾" if row.expanded else "▸") if row.expandable else NOT_APPLICABLE
    return [
        expand,
        bill.invoice_number,
        "Vendor",
        bill.supplier_name or NO_SUPPLIER,
        po_count_label(group.reconciliation.covered_pos),
        _format_date(bill.invoice_date),
        format_omr(bill.invoice_amount),
        format_omr(bill.paid_amount),
        format_omr(bill.balance_due),
        f"[{status.color}]{status.label}[/{status.color}]",
        recon,
    ]


def _company_cells(row: TableRow) -> list[str]:
    bill = row.company_bill
    if bill is None:
        return []
    status = BILL_STATUS_STYLES[bill.bill_status]
    return [
        "└" if row.kind == RowKind.CHILD else "",
        bill.invoice_number,
        "Company",
        bill.supplier_name or NO_SUPPLIER,
        bill.order_number or NOT_APPLICABLE,
        _format_date(bill.invoice_date),
        format_omr(bill.invoice_amount),
        NOT_APPLICABLE,
        NOT_APPLICABLE,
        f"[{status.color}]{status.icon} {status.label}[/{status.color}]",
        NOT_APPLICABLE,
    ]


def show_bills_table(result: GroupingResult, controller: BillTableController) -> list[TableRow]:
    """Print the grouped bills table and return the rows it shows."""
    rows = controller.rows(result)

    table = Table(title=f"Bills ({total_bills(result)} bill(s))")
    table.add_column("", style="dim")
    table.add_column("Bill #")
    table.add_column("Type")
    table.add_column("Supplier")
    table.add_column("PO Ref")
    table.add_column("Date")
    table.add_column("Amount", justify="right")
    table.add_column("Paid", justify="right")
    table.add_column("Balance", justify="right")
    table.add_column("Status")
    table.add_column("Reconciliation")

    for row in rows:
        if row.kind == RowKind.VENDOR:
            table.add_row(*_vendor_cells(row))
        elif row.kind == RowKind.ORPHAN_HEADER:
            table.add_section()
            table.add_row(
                "⚠",
                f"[yellow]Company Bills Not Linked to Vendor Bill ({row.orphan_count})[/yellow]",
            )
        else:
            table.add_row(*_company_cells(row))

    console.print()
    console.print(table)

    duplicates = [w for w in result.warnings if w.kind == WarningKind.DUPLICATE_LINK]
    for warning in duplicates:
        console.print(
            f"[yellow]Company bill {warning.reference} is linked to vendor bills "
            f"{warning.owner_vendor_bill_id} and {warning.vendor_bill_id}; "
            f"kept under {warning.owner_vendor_bill_id}.[/yellow]"
        )
    for warning in result.warnings:
        if warning.kind == WarningKind.DUPLICATE_ID:
            console.print(
                f"[yellow]Company bill {warning.invoice_number} repeats id {warning.reference}; "
                f"listed as not linked.[/yellow]"
            )
    return rows


def _show_vendor_detail(bill: VendorBill, bill_service: BillService) -> None:
    console.print(f"[bold cyan]Vendor Bill {bill.invoice_number}[/bold cyan]")
    console.print(f"  Supplier: {bill.supplier_name or NO_SUPPLIER}")
    console.print(f"  Invoice date: {_format_date(bill.invoice_date)}")
    console.print(f"  Due date: {_format_date(bill.due_date)}")
    console.print(f"  Amount: {format_omr(bill.invoice_amount)}")
    console.print(f"  Paid: {format_omr(bill.paid_amount)}")
    console.print(f"  [bold]Balance due: {format_omr(bill.balance_due)}[/bold]")
    console.print(f"  Status: {PAYMENT_STATUS_LABELS[bill.payment_status]}")
    if bill.notes:
        console.print(f"  Notes: {bill.notes}")

    payments = bill_service.list_payments(bill.id)
    if payments:
        table = Table(title="Payments")
        table.add_column("Date")
        table.add_column("Method")
        table.add_column("Reference")
        table.add_column("Amount", justify="right")
        for p in payments:
            table.add_row(
                _format_date(p.payment_date),
                PAYMENT_METHOD_LABELS[p.method],
                p.reference or NOT_APPLICABLE,
                format_omr(p.amount),
            )
        console.print(table)


def _show_company_detail(bill: CompanyBill) -> None:
    console.print(f"[bold cyan]Company Bill {bill.invoice_number}[/bold cyan]")
    console.print(f"  Supplier: {bill.supplier_name or NO_SUPPLIER}")
    console.print(f"  PO: {bill.order_number or NOT_APPLICABLE}")
    console.print(f"  Invoice date: {_format_date(bill.invoice_date)}")
    console.print(f"  Amount: {format_omr(bill.invoice_amount)}")
    console.print(f"  Status: {BILL_STATUS_LABELS[bill.bill_status]}")
    if bill.notes:
        console.print(f"  Notes: {bill.notes}")


def record_payment_menu(bill: VendorBill, bill_service: BillService) -> VendorBill:
    console.print()
    console.print("[bold]Record Payment[/bold]", style="cyan")
    console.print(f"  Invoice amount: {format_omr(bill.invoice_amount)}")
    console.print(f"  Already paid: {format_omr(bill.paid_amount)}")
    console.print(f"  [bold]Balance due: {format_omr(bill.balance_due)}[/bold]")

    while True:
        val = questionary.text(f"Payment amount (max {format_omr(bill.balance_due)}):").ask()
        amount = parse_amount(val or "")
        if amount is not None:
            break
        console.print("[red]Please enter a valid payment amount.[/red]")

    method_choices = {label: method for method, label in PAYMENT_METHOD_LABELS.items()}
    method_label = questionary.select("Payment method:", choices=list(method_choices.keys())).ask()
    if method_label is None:
        return bill

    payment_date = date.today()
    raw_date = questionary.text("Payment date (YYYY-MM-DD):", default=payment_date.isoformat()).ask() or ""
    try:
        payment_date = date.fromisoformat(raw_date.strip())
    except ValueError:
        console.print(f"[yellow]Invalid date, using {payment_date.isoformat()}.[/yellow]")

    reference = questionary.text("Reference / Transaction ID (optional):").ask() or ""
    notes = questionary.text("Notes (optional):").ask() or ""

    try:
        payment, updated = bill_service.record_payment(
            bill,
            amount,
            method=method_choices[method_label],
            reference=reference,
            payment_date=payment_date,
            notes=notes,
        )
    except PaymentError as exc:
        console.print(f"[red]{exc}[/red]")
        return bill

    console.print(f"[green]Payment of {format_omr(payment.amount)} recorded.[/green]")
    console.print(f"  Balance due: [bold]{format_omr(updated.balance_due)}[/bold]")
    return updated


def _row_action_menu(row: TableRow, controller: BillTableController, bill_service: BillService) -> None:
    choices = []
    if row.kind == RowKind.VENDOR and row.expandable:
        choices.append("Collapse" if row.expanded else "Expand")
    choices += [ACTION_LABELS[a] for a in row.actions]
    choices.append(BACK)

    action = questionary.select("Actions:", choices=choices).ask()
    if action is None or action == BACK:
        return

    if action in ("Expand", "Collapse") and row.vendor_bill is not None:
        controller.toggle(row.vendor_bill.id)
    elif action == ACTION_LABELS[RowAction.VIEW_DETAILS]:
        console.print()
        if row.vendor_bill is not None:
            _show_vendor_detail(row.vendor_bill, bill_service)
        elif row.company_bill is not None:
            _show_company_detail(row.company_bill)
    elif action == ACTION_LABELS[RowAction.RECORD_PAYMENT] and row.vendor_bill is not None:
        record_payment_menu(row.vendor_bill, bill_service)
    elif action == ACTION_LABELS[RowAction.EDIT] and row.vendor_bill is not None:
        edit_vendor_bill_menu(row.vendor_bill, bill_service)
    elif action == ACTION_LABELS[RowAction.MARK_AS_SENT] and row.company_bill is not None:
        try:
            bill_service.mark_as_sent(row.company_bill)
        except BillStatusError as exc:
            console.print(f"[red]{exc}[/red]")
            return
        console.print(f"[green]Company bill {row.company_bill.invoice_number} marked as sent.[/green]")


def edit_vendor_bill_menu(bill: VendorBill, bill_service: BillService) -> VendorBill:
    """Edit the notes and company bill coverage of an unpaid vendor bill."""
    console.print()
    console.print(f"[bold]Edit Vendor Bill {bill.invoice_number}[/bold]", style="cyan")

    company_bills = bill_service.list_company_bills()
    if company_bills:
        selected = questionary.checkbox(
            "Company bills covered:",
            choices=[
                questionary.Choice(
                    f"{cb.invoice_number} - {format_omr(cb.invoice_amount)}",
                    value=cb.id,
                    checked=cb.id in bill.covers_company_bills,
                )
                for cb in company_bills
            ],
        ).ask()
        if selected is None:
            return bill
    else:
        selected = bill.covers_company_bills

    notes = questionary.text("Notes:", default=bill.notes).ask()
    if notes is None:
        return bill

    updated = bill_service.update_vendor_bill(bill, covers_company_bills=selected, notes=notes)
    console.print("[green]Vendor bill updated.[/green]")
    return updated


def list_bills_menu(bill_service: BillService, controller: BillTableController) -> None:
    while True:
        result = bill_service.group()
        if not result.groups and not result.orphans:
            console.print("[yellow]No bills found.[/yellow]")
            return

        rows = show_bills_table(result, controller)
        selectable = {_row_label(r): r for r in rows if r.kind != RowKind.ORPHAN_HEADER}
        choice = questionary.select("Select a bill:", choices=list(selectable.keys()) + [BACK]).ask()

        if choice is None or choice == BACK:
            return

        _row_action_menu(selectable[choice], controller, bill_service)


def export_csv_menu(bill_service: BillService) -> None:
    path = bill_service.export_csv()
    console.print(f"[green]Bills exported to {path}[/green]")


def summary_menu(bill_service: BillService) -> None:
    summary = bill_service.summarize()
    table = Table(title="Bill Summary")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Total bills", str(summary.total))
    table.add_row("Vendor bills", str(summary.vendor_bills))
    table.add_row("Company bills", str(summary.company_bills))
    table.add_row("Unpaid", str(summary.unpaid))
    table.add_row("Overdue", str(summary.overdue))
    table.add_row("Total amount", format_omr(summary.total_amount))
    table.add_row("Paid amount", format_omr(summary.paid_amount))
    table.add_row("Balance due", format_omr(summary.balance_due))
    console.print()
    console.print(table)
