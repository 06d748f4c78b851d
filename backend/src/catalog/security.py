"""Password digests and one-time account tokens."""

import hashlib
import hmac
import time
import uuid


def hash_password(password: str) -> str:
    """SHA-256 hex digest of the UTF-8 encoded password."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def verify_password(password: str, digest: str) -> bool:
    return hmac.compare_digest(hash_password(password), digest)


def generate_token() -> str:
    """Random token of the form ``<uuid4>_<unix seconds>``."""
    return f"{uuid.uuid4()}_{int(time.time())}"
