import logging

from billrecon.settings import settings
from billrecon.storage.base import StorageBackend

logger = logging.getLogger(__name__)


def get_storage() -> StorageBackend:
    backend = settings.storage_backend

    if backend == "local":
        from billrecon.storage.local import LocalStorage

        logger.info("Using storage backend: local path=%s", settings.storage_local_path)
        return LocalStorage(settings.storage_local_path)

    raise ValueError(f"Unsupported storage backend: {backend}")
