# =============================================================================
# lib/passwords.py - Password Hashing
# =============================================================================
# One-way salted password hashing with bcrypt.
#
# bcrypt is CPU-bound on purpose, so the async helpers push the work onto a
# worker thread and the event loop keeps serving other requests.
# =============================================================================

import asyncio

import bcrypt

DEFAULT_ROUNDS = 10

# bcrypt only looks at the first 72 bytes of a password.
_MAX_PASSWORD_BYTES = 72


def _encode(plain: str) -> bytes:
    return plain.encode("utf-8")[:_MAX_PASSWORD_BYTES]


def hash_password(plain: str, rounds: int = DEFAULT_ROUNDS) -> str:
    if not plain:
        raise ValueError("Password must not be empty")
    hashed = bcrypt.hashpw(_encode(plain), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    if not plain or not hashed:
        return False
    try:
        return bcrypt.checkpw(_encode(plain), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


async def hash_password_async(plain: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password without blocking the event loop."""
    return await asyncio.to_thread(hash_password, plain, rounds)


async def verify_password_async(plain: str, hashed: str) -> bool:
    """Compare a password against a stored hash without blocking the event loop."""
    return await asyncio.to_thread(verify_password, plain, hashed)
