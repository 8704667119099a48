from abc import ABC, abstractmethod


class StorageBackend(ABC):
    """Destination for CSV bill exports."""

    @abstractmethod
    def save(self, key: str, data: bytes, content_type: str = "text/csv") -> str:
        """Write an export under ``key`` and return where it landed."""
        ...
