import questionary
from rich.console import Console

from billrecon.cli.bill_menu import export_csv_menu, list_bills_menu, summary_menu
from billrecon.repositories.factory import (
    get_company_bill_repository,
    get_payment_repository,
    get_vendor_bill_repository,
)
from billrecon.services.bill_service import BillService
from billrecon.services.presentation_service import BillTableController
from billrecon.storage.factory import get_storage

console = Console()


def _build_service() -> BillService:
    return BillService(
        get_vendor_bill_repository(),
        get_company_bill_repository(),
        get_payment_repository(),
        get_storage(),
    )


def main_menu() -> None:
    bill_service = _build_service()
    controller = BillTableController()

    console.print()
    console.print("[bold]Bill Reconciliation[/bold]", style="cyan")
    console.print()

    while True:
        choice = questionary.select(
            "Main Menu",
            choices=[
                "List Bills",
                "Export CSV",
                "Summary",
                "Exit",
            ],
        ).ask()

        if choice is None or choice == "Exit":
            console.print("[bold]Goodbye![/bold]")
            break
        elif choice == "List Bills":
            list_bills_menu(bill_service, controller)
        elif choice == "Export CSV":
            export_csv_menu(bill_service)
        elif choice == "Summary":
            summary_menu(bill_service)
