from __future__ import annotations

import logging
from pathlib import Path
from typing import Generic, TypeVar

from pydantic import BaseModel, TypeAdapter
from ulid import ULID

from billrecon.models.bill import CompanyBill, VendorBill
from billrecon.models.payment import AppliedPayment
from billrecon.repositories.base import (
    CompanyBillRepository,
    PaymentRepository,
    VendorBillRepository,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class _JsonFile(Generic[T]):
    """A JSON array of records on disk. A missing file reads as empty."""

    def __init__(self, path: str | Path, model: type[T]) -> None:
        self.path = Path(path)
        self.adapter = TypeAdapter(list[model])

    def load(self) -> list[T]:
        if not self.path.exists():
            logger.debug("%s does not exist, treating as empty", self.path)
            return []
        return self.adapter.validate_json(self.path.read_bytes())

    def dump(self, records: list[T]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(self.adapter.dump_json(records, indent=2))
        logger.debug("Wrote %d records to %s", len(records), self.path)


def _replace(records: list[T], record: T) -> list[T]:
    for position, existing in enumerate(records):
        if existing.id == record.id:
            records[position] = record
            return records
    raise ValueError(f"Record {record.id} not found")


class JsonVendorBillRepository(VendorBillRepository):
    def __init__(self, path: str | Path) -> None:
        self.file = _JsonFile(path, VendorBill)

    def list_all(self) -> list[VendorBill]:
        return self.file.load()

    def update(self, bill: VendorBill) -> VendorBill:
        self.file.dump(_replace(self.file.load(), bill))
        return bill


class JsonCompanyBillRepository(CompanyBillRepository):
    def __init__(self, path: str | Path) -> None:
        self.file = _JsonFile(path, CompanyBill)

    def list_all(self) -> list[CompanyBill]:
        return self.file.load()

    def update(self, bill: CompanyBill) -> CompanyBill:
        self.file.dump(_replace(self.file.load(), bill))
        return bill


class JsonPaymentRepository(PaymentRepository):
    def __init__(self, path: str | Path) -> None:
        self.file = _JsonFile(path, AppliedPayment)

    def create(self, payment: AppliedPayment) -> AppliedPayment:
        stored = payment.model_copy(update={"id": str(ULID())})
        payments = self.file.load()
        payments.append(stored)
        self.file.dump(payments)
        return stored

    def list_by_bill(self, vendor_bill_id: str) -> list[AppliedPayment]:
        return [p for p in self.file.load() if p.vendor_bill_id == vendor_bill_id]
