from abc import ABC, abstractmethod

from billrecon.models.bill import CompanyBill, VendorBill
from billrecon.models.payment import AppliedPayment


class VendorBillRepository(ABC):
    @abstractmethod
    def list_all(self) -> list[VendorBill]: ...

    @abstractmethod
    def update(self, bill: VendorBill) -> VendorBill: ...


class CompanyBillRepository(ABC):
    @abstractmethod
    def list_all(self) -> list[CompanyBill]: ...

    @abstractmethod
    def update(self, bill: CompanyBill) -> CompanyBill: ...


class PaymentRepository(ABC):
    @abstractmethod
    def create(self, payment: AppliedPayment) -> AppliedPayment: ...

    @abstractmethod
    def list_by_bill(self, vendor_bill_id: str) -> list[AppliedPayment]: ...
