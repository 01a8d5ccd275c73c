"""
Password utilities for admin login.
Uses bcrypt for password hashing.
"""
import bcrypt
from photogallery.config import settings


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Hashed password string
    """
    salt = bcrypt.gensalt(rounds=12)
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


def verify_password(password: str, hashed_password: str) -> bool:
    """
    Verify a password against a hashed password.
    A malformed hash never matches.
    """
    try:
        return bcrypt.checkpw(
            password.encode('utf-8'),
            hashed_password.encode('utf-8')
        )
    except ValueError:
        return False


def verify_admin_password(password: str) -> bool:
    """
    Verify admin password against stored hash.

    Raises:
        ValueError: If ADMIN_PASSWORD_HASH is not configured
    """
    if not settings.ADMIN_PASSWORD_HASH:
        raise ValueError("ADMIN_PASSWORD_HASH not configured")

    return verify_password(password, settings.ADMIN_PASSWORD_HASH)
