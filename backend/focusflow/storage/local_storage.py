"""
Local Filesystem Storage Implementation.
Keeps each key as a file below a base directory on this machine.
"""

import logging
import os
import aiofiles
import aiofiles.os
from pathlib import Path
from typing import Optional

from .interface import StorageInterface
from ..core.errors import PersistenceFailure

logger = logging.getLogger(__name__)


class LocalStorage(StorageInterface):
    """
    Local filesystem storage implementation.
    Writes go to a temporary sibling first and are renamed into place,
    so a crash mid-write never leaves a truncated history file behind.
    """

    def __init__(self, base_dir: str = "./data"):
        """
        Initialize local storage with a base directory.

        Args:
            base_dir: Directory holding all stored documents
        """
        self.base_dir = Path(base_dir).resolve()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, key: str) -> Path:
        """Map a key to an absolute path inside the base directory."""
        full_path = (self.base_dir / key).resolve()

        # Security check: ensure path is within base_dir
        if full_path != self.base_dir and self.base_dir not in full_path.parents:
            raise ValueError(f"Invalid key: {key} - path traversal detected")

        return full_path

    async def save(self, key: str, content: bytes | str) -> bool:
        """Atomically replace the file for key."""
        try:
            full_path = self._get_full_path(key)
            full_path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = full_path.with_name(f".{full_path.name}.{os.getpid()}.tmp")

            data = content.encode("utf-8") if isinstance(content, str) else content
            async with aiofiles.open(tmp_path, "wb") as f:
                await f.write(data)
            await aiofiles.os.replace(tmp_path, full_path)

            logger.debug(f"Saved {len(data)} bytes to {key}")
            return True
        except (OSError, ValueError) as e:
            logger.error(
                f"Error saving {key}: {e}",
                extra={"extra_fields": {"key": key, "error": str(e)}}
            )
            return False

    async def load(self, key: str) -> Optional[bytes]:
        """Read the file for key, None if it does not exist."""
        full_path = self._get_full_path(key)
        if not full_path.exists():
            return None

        try:
            async with aiofiles.open(full_path, "rb") as f:
                return await f.read()
        except OSError as e:
            logger.error(
                f"Error loading {key}: {e}",
                extra={"extra_fields": {"key": key, "error": str(e)}}
            )
            raise PersistenceFailure(f"Could not read {key}: {e}") from e
