from __future__ import annotations

import hashlib
import hmac
from typing import Callable

TokenVerifier = Callable[[str], bool]


def md5_16(text: str) -> str:
    """Middle 16 hex characters of the MD5 digest, lower case."""
    return hashlib.md5(text.encode("utf-8")).hexdigest()[8:24].lower()


def make_md5_token_verifier(token_md5: str) -> TokenVerifier:
    expected = (token_md5 or "").strip().lower()

    def verify(token: str) -> bool:
        if not expected or not token:
            return False
        return hmac.compare_digest(md5_16(token), expected)

    return verify
