"""
Password hashing utilities using bcrypt.

Usage:
    from apptracker.utils.password_hash import hash_password, verify_password

    hashed = hash_password("my-secret", rounds=10)
    is_valid = verify_password("my-secret", hashed)
"""
import bcrypt
import logging

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes; newer releases raise instead of
# truncating, so we truncate ourselves.
BCRYPT_MAX_BYTES = 72


def _encode(plaintext: str) -> bytes:
    return plaintext.encode('utf-8')[:BCRYPT_MAX_BYTES]


def hash_password(plaintext: str, rounds: int = 10) -> str:
    """
    Hash a password using bcrypt.

    A fresh salt is generated for every call and embedded in the result, so
    hashing the same password twice gives different strings.

    Args:
        plaintext: Plain text password
        rounds: bcrypt cost factor (log2 of the iteration count)

    Returns:
        Bcrypt hash as string (60 characters)
    """
    if not plaintext:
        raise ValueError("Cannot hash empty password")

    salt = bcrypt.gensalt(rounds=rounds)
    hashed_bytes = bcrypt.hashpw(_encode(plaintext), salt)

    # Return as string for database storage
    return hashed_bytes.decode('utf-8')


def verify_password(plaintext: str, password_hash: str) -> bool:
    """
    Verify a password against a stored bcrypt hash.

    Args:
        plaintext: Plain text password to verify
        password_hash: Stored bcrypt hash to verify against

    Returns:
        True if password matches hash, False otherwise (including malformed hashes)
    """
    if not plaintext or not password_hash:
        logger.warning("Attempted to verify with empty password or hash")
        return False

    try:
        return bcrypt.checkpw(_encode(plaintext), password_hash.encode('utf-8'))
    except ValueError as e:
        logger.error(f"Error verifying password hash: {e}")
        return False
