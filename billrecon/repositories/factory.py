from pathlib import Path

from billrecon.repositories.base import (
    CompanyBillRepository,
    PaymentRepository,
    VendorBillRepository,
)
from billrecon.settings import settings


def _data_path(filename: str) -> Path:
    return Path(settings.data_dir) / filename


def _require_json_backend() -> None:
    if settings.store_backend != "json":
        raise ValueError(f"Unsupported store backend: {settings.store_backend}")


def get_vendor_bill_repository() -> VendorBillRepository:
    _require_json_backend()
    from billrecon.repositories.json_file import JsonVendorBillRepository

    return JsonVendorBillRepository(_data_path(settings.vendor_bills_file))


def get_company_bill_repository() -> CompanyBillRepository:
    _require_json_backend()
    from billrecon.repositories.json_file import JsonCompanyBillRepository

    return JsonCompanyBillRepository(_data_path(settings.company_bills_file))


def get_payment_repository() -> PaymentRepository:
    _require_json_backend()
    from billrecon.repositories.json_file import JsonPaymentRepository

    return JsonPaymentRepository(_data_path(settings.payments_file))
