import re
import secrets
from typing import Callable

SHARE_CODE_BYTES = 3

TokenSource = Callable[[int], bytes]

def generate_share_code(nbytes: int = SHARE_CODE_BYTES, token_source: TokenSource = secrets.token_bytes) -> str:
    """
    Draw ``nbytes`` from a CSPRNG and hex-encode them (3 bytes -> 6 lowercase hex chars).
    Errors from the random source propagate to the caller.
    """
    raw = token_source(nbytes)
    if len(raw) != nbytes:
        raise ValueError(f"random source returned {len(raw)} bytes, expected {nbytes}")
    return raw.hex()

def is_share_code(value: str, nbytes: int = SHARE_CODE_BYTES) -> bool:
    return re.fullmatch(f"[0-9a-f]{{{nbytes * 2}}}", value or "") is not None
