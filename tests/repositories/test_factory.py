from pathlib import Path
from unittest.mock import patch

import pytest

from billrecon.repositories.factory import (
    get_company_bill_repository,
    get_payment_repository,
    get_vendor_bill_repository,
)
from billrecon.repositories.json_file import (
    JsonCompanyBillRepository,
    JsonPaymentRepository,
    JsonVendorBillRepository,
)


class TestRepositoryFactory:
    def _settings(self, mock_settings, tmp_path, backend="json"):
        mock_settings.store_backend = backend
        mock_settings.data_dir = str(tmp_path)
        mock_settings.vendor_bills_file = "vendor.json"
        mock_settings.company_bills_file = "company.json"
        mock_settings.payments_file = "payments.json"

    def test_json_backend(self, tmp_path):
        with patch("billrecon.repositories.factory.settings") as mock_settings:
            self._settings(mock_settings, tmp_path)
            vendor = get_vendor_bill_repository()
            company = get_company_bill_repository()
            payments = get_payment_repository()

        assert isinstance(vendor, JsonVendorBillRepository)
        assert isinstance(company, JsonCompanyBillRepository)
        assert isinstance(payments, JsonPaymentRepository)
        assert vendor.file.path == Path(tmp_path) / "vendor.json"

    def test_unsupported_backend(self, tmp_path):
        with patch("billrecon.repositories.factory.settings") as mock_settings:
            self._settings(mock_settings, tmp_path, backend="mysql")
            with pytest.raises(ValueError, match="Unsupported store backend"):
                get_vendor_bill_repository()
