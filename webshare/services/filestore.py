# webshare/services/filestore.py
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO, Tuple

from webshare.core.errors import StorageError

logger = logging.getLogger(__name__)

PREFIX = "share-"
DELIMITER = "-"

def safe_filename(filename: str) -> str:
    """Strip any client-supplied directory parts; never returns an empty name."""
    name = Path((filename or "").replace("\\", "/")).name
    return name or "upload"

class FileStore:
    """
    Uploads directory. Files are named share-<random>-<original filename>;
    the random part comes from tempfile.mkstemp, which guarantees the name is new.
    """

    def __init__(self, base_dir):
        self.base_dir = Path(base_dir).resolve()

    def ensure_dir(self):
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def save(self, filename: str, src: BinaryIO) -> Tuple[str, int]:
        """Stream ``src`` into a new upload file. Returns (path, bytes written)."""
        try:
            fd, path = tempfile.mkstemp(
                prefix=PREFIX,
                suffix=DELIMITER + safe_filename(filename),
                dir=self.base_dir,
            )
        except OSError as e:
            logger.error(f"Could not create upload file for {filename!r}: {e}")
            raise StorageError("Could not create temp file") from e

        try:
            with os.fdopen(fd, "wb") as out:
                shutil.copyfileobj(src, out)
                size = out.tell()
        except OSError as e:
            logger.error(f"Could not write upload {path}: {e}")
            Path(path).unlink(missing_ok=True)
            raise StorageError("Could not save file") from e
        return path, size
