"""
Password hashing with Argon2id.

Argon2id is memory-hard and side-channel resistant. The cost parameters are
fixed for the process; stored hashes carry their own parameters so
``needs_rehash`` can tell when one was produced with older settings.
"""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

ph = PasswordHasher(
    time_cost=3,        # Number of iterations
    memory_cost=65536,  # 64 MB memory usage
    parallelism=4,      # Number of parallel threads
    hash_len=32,        # Length of the hash in bytes
    salt_len=16,        # Length of the random salt
)


def hash_password(password: str) -> str:
    """
    Hash a password using Argon2id.

    Args:
        password: The plaintext password to hash

    Returns:
        The hashed password string (includes algorithm, params, salt, and hash)

    Raises:
        argon2.exceptions.HashingError: If hashing fails
    """
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify a password against its hash.

    A mismatch or a malformed stored hash is reported as ``False``.
    """
    try:
        return ph.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def needs_rehash(password_hash: str) -> bool:
    """Check if a stored hash was produced with different parameters."""
    try:
        return ph.check_needs_rehash(password_hash)
    except InvalidHashError:
        return True
