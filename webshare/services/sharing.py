"""
Upload/download protocol on top of the registry and the file store.

share(): store bytes -> draw code -> register. A code is only registered
after the bytes are fully on disk.
resolve(): look a code up.
"""

from __future__ import annotations

import logging
import secrets
from typing import BinaryIO, Optional

from webshare.core.errors import CodeGenerationError
from webshare.services.filestore import FileStore, safe_filename
from webshare.services.registry import ShareEntry, ShareRegistry
from webshare.services.share_codes import SHARE_CODE_BYTES, TokenSource, generate_share_code, is_share_code

logger = logging.getLogger(__name__)


class ShareService:
    def __init__(
        self,
        registry: ShareRegistry,
        store: FileStore,
        code_bytes: int = SHARE_CODE_BYTES,
        max_attempts: int = 5,
        token_source: TokenSource = secrets.token_bytes,
    ):
        self.registry = registry
        self.store = store
        self.code_bytes = code_bytes
        self.max_attempts = max(1, max_attempts)
        self.token_source = token_source

    def share(self, filename: str, src: BinaryIO) -> ShareEntry:
        filename = safe_filename(filename)
        path, size = self.store.save(filename, src)

        for attempt in range(1, self.max_attempts + 1):
            try:
                code = generate_share_code(self.code_bytes, self.token_source)
            except (OSError, NotImplementedError, ValueError) as e:
                # the stored file is left behind; nothing points at it
                logger.error(f"Share code generation failed for {path}: {e}")
                raise CodeGenerationError("Could not generate code") from e

            entry = ShareEntry(code=code, path=path, filename=filename, size=size)
            if self.registry.put_if_absent(code, entry):
                logger.info(f"File uploaded: {filename} (Code: {code}, {size} bytes)")
                return entry
            logger.warning(f"Share code collision on {code} (attempt {attempt}/{self.max_attempts})")

        raise CodeGenerationError("Could not generate code")

    def resolve(self, code: str) -> Optional[ShareEntry]:
        """Exact lookup; malformed codes never reach the registry."""
        if not is_share_code(code, self.code_bytes):
            return None
        return self.registry.get(code)
