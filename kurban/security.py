"""Password hashing and order identifiers."""

from __future__ import annotations

import base64
import binascii
import hmac
import os
import uuid
from datetime import datetime

from cryptography.hazmat.primitives.kdf.argon2 import Argon2id

_SALT_LENGTH = 16
_KEY_LENGTH = 32
_ITERATIONS = 1
_MEMORY_KIB = 64 * 1024
_LANES = 4


def _derive(password: str, salt: bytes) -> bytes:
    kdf = Argon2id(
        salt=salt,
        length=_KEY_LENGTH,
        iterations=_ITERATIONS,
        lanes=_LANES,
        memory_cost=_MEMORY_KIB,
    )
    return kdf.derive(password.encode())


def _encode(data: bytes) -> str:
    return base64.b64encode(data).decode().rstrip("=")


def _decode(text: str) -> bytes:
    if "=" in text:
        raise ValueError("unexpected padding in encoded value")
    try:
        return base64.b64decode(text + "=" * (-len(text) % 4), validate=True)
    except binascii.Error as exc:
        raise ValueError(f"invalid base64 value: {exc}") from exc


def generate_password_hash(password: str) -> str:
    """Hash a password with Argon2id and a random salt."""
    salt = os.urandom(_SALT_LENGTH)
    digest = _derive(password, salt)
    return "$".join(["argon2id", "v=19", _encode(salt), _encode(digest)])


def verify_password_hash(encoded_hash: str, password: str) -> bool:
    """Tell whether password matches encoded_hash; malformed hashes raise ValueError."""
    parts = encoded_hash.split("$")
    if len(parts) != 4:
        raise ValueError("invalid password hash format")
    salt = _decode(parts[2])
    expected = _decode(parts[3])
    return hmac.compare_digest(_derive(password, salt), expected)


def generate_order_id() -> str:
    """Return an order id of the form ORDER-YYYYMMDD-xxxxxxxx."""
    today = datetime.now().strftime("%Y%m%d")
    return f"ORDER-{today}-{str(uuid.uuid4())[:8]}"