from unittest.mock import patch

import pytest

from billrecon.storage.factory import get_storage
from billrecon.storage.local import LocalStorage


class TestGetStorage:
    def test_local(self, tmp_path):
        with patch("billrecon.storage.factory.settings") as mock_settings:
            mock_settings.storage_backend = "local"
            mock_settings.storage_local_path = str(tmp_path)
            storage = get_storage()
        assert isinstance(storage, LocalStorage)

    def test_unsupported(self):
        with patch("billrecon.storage.factory.settings") as mock_settings:
            mock_settings.storage_backend = "ftp"
            with pytest.raises(ValueError, match="Unsupported storage backend"):
                get_storage()
