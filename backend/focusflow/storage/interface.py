"""
Storage Interface - Abstract key-value store backing the watch history.
Implementations can target the local filesystem, browser-synced folders, S3, etc.
"""

from abc import ABC, abstractmethod
from typing import Optional


class StorageInterface(ABC):
    """
    Contract for durable storage.
    Keys are relative paths; values are whole documents written and read in one piece.
    """

    @abstractmethod
    async def save(self, key: str, content: bytes | str) -> bool:
        """
        Replace the document stored under key.

        Args:
            key: Relative key (e.g., "focusflow_history.json")
            content: Full document, bytes or text

        Returns:
            bool: True if the write reached durable storage, False otherwise
        """
        pass

    @abstractmethod
    async def load(self, key: str) -> Optional[bytes]:
        """
        Read the document stored under key.

        Args:
            key: Relative key

        Returns:
            Optional[bytes]: Document content, or None when the key is absent

        Raises:
            PersistenceFailure: If the key exists but cannot be read
        """
        pass
