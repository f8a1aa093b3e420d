"""
PBKDF2 password hashing
"""
import hashlib
import hmac
import secrets
from typing import Tuple

SALT_BYTES = 16
KEY_BYTES = 32
ITERATIONS = 100_000


def _derive(password: str, salt: bytes) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, ITERATIONS, dklen=KEY_BYTES)


def hash_password(password: str) -> Tuple[bytes, bytes]:
    """Return (hash, salt) for a new credential"""
    salt = secrets.token_bytes(SALT_BYTES)
    return _derive(password, salt), salt


def verify_password(password: str, password_hash: bytes, salt: bytes) -> bool:
    return hmac.compare_digest(_derive(password, salt), password_hash)
