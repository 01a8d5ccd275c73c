"""
JWT token-based authentication.
Write endpoints only need a yes/no answer: a valid access token means authenticated.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from fastapi import Header, Request
import logging

from photogallery.config import settings
from photogallery.exceptions import UnauthenticatedError
from photogallery.utils.auth import verify_admin_password

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
TOKEN_COOKIE_NAME = "gallery_token"


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: Dictionary of claims to include in token
        expires_delta: Optional custom expiration time

    Returns:
        str: Encoded JWT token
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))

    to_encode.update({
        "exp": expire,
        "iat": now,
        "type": "access"
    })

    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=ALGORITHM)


def verify_token(token: str) -> dict:
    """
    Verify and decode a JWT token.

    Raises:
        UnauthenticatedError: If token is invalid, expired, or not an access token
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.info(f"Rejected token: {str(e)}")
        raise UnauthenticatedError("Invalid token", detail="Authentication token is invalid or expired")

    if payload.get("type") != "access":
        raise UnauthenticatedError("Invalid token type", detail="Token is not an access token")

    return payload


def require_authenticated(
    request: Request,
    authorization: Optional[str] = Header(None, description="Bearer token (fallback to cookie)")
) -> bool:
    """
    FastAPI dependency gating write endpoints.
    Reads the token from the httpOnly cookie first, then the Authorization header.

    Raises:
        UnauthenticatedError: if no valid token is presented
    """
    token = request.cookies.get(TOKEN_COOKIE_NAME)

    if not token and authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            token = parts[1]

    if not token:
        raise UnauthenticatedError("Authentication required", detail="Missing token")

    verify_token(token)
    return True


def authenticate_user(password: str) -> dict:
    """
    Authenticate the admin with a password and return token claims.

    Raises:
        UnauthenticatedError: if the password is wrong or no admin password is configured
    """
    try:
        valid = verify_admin_password(password)
    except ValueError as e:
        logger.error(f"Login attempted without admin password configured: {str(e)}")
        valid = False

    if not valid:
        raise UnauthenticatedError("Invalid credentials", detail="Incorrect password")

    return {
        "role": "admin",
        "sub": "gallery_admin"
    }
