"""Security utilities: password hashing and opaque token minting."""

import secrets

from passlib.context import CryptContext

from liftlog.core.errors import PasswordHashError

# Argon2id: memory-hard, random salt per hash, constant-structure verify.
password_context = CryptContext(schemes=["argon2"], deprecated="auto")

TOKEN_BYTES = 32


def hash_password(plain: str) -> str:
    try:
        return password_context.hash(plain)
    except (TypeError, ValueError) as exc:
        raise PasswordHashError() from exc


def verify_password(plain: str, hashed: str) -> bool:
    """True on match, False on mismatch. An unreadable stored hash is an error, not a mismatch."""
    try:
        return password_context.verify(plain, hashed)
    except (TypeError, ValueError) as exc:
        raise PasswordHashError() from exc


def dummy_verify() -> None:
    """Burn one verification's worth of work when no user matched."""
    password_context.dummy_verify()


def new_token(nbytes: int = TOKEN_BYTES) -> str:
    """High-entropy URL-safe token from the OS CSPRNG."""
    return secrets.token_urlsafe(nbytes)
