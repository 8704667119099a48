import logging
from pathlib import Path

from billrecon.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class LocalStorage(StorageBackend):
    """Writes exports below a local directory, creating it on first use."""

    def __init__(self, base_dir: str) -> None:
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def save(self, key: str, data: bytes, content_type: str = "text/csv") -> str:
        path = self.base_dir / key
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        exported = str(path.resolve())
        logger.debug("Export %s written as %s (%d bytes)", key, content_type, len(data))
        return exported
