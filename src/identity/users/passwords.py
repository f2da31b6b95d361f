"""Password hashing with bcrypt.

bcrypt is slow on purpose, so hashing runs in a worker thread and never
blocks the event loop.
"""

import asyncio

import bcrypt
from protean.exceptions import ValidationError

# bcrypt only reads the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


def _encode(password) -> bytes:
    if not isinstance(password, str) or not password:
        raise ValidationError({"password": ["Password is required"]})
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationError({"password": [f"Password must be at most {MAX_PASSWORD_BYTES} bytes"]})
    return encoded


async def hash_password(password: str, rounds: int = 12) -> str:
    encoded = _encode(password)
    hashed = await asyncio.to_thread(bcrypt.hashpw, encoded, bcrypt.gensalt(rounds=rounds))
    return hashed.decode("ascii")


async def verify_password(password: str, password_hash: str) -> bool:
    """True when ``password`` matches ``password_hash``."""
    try:
        encoded = _encode(password)
    except ValidationError:
        return False
    return await asyncio.to_thread(bcrypt.checkpw, encoded, password_hash.encode("ascii"))
