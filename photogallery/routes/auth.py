"""
Admin login route.
Exchanges the admin password for a JWT access token.
"""
from fastapi import APIRouter, Request, Response
import logging

from photogallery.config import settings
from photogallery.schemas import LoginRequest, TokenResponse
from photogallery.utils.jwt_auth import TOKEN_COOKIE_NAME, authenticate_user, create_access_token
from photogallery.utils.rate_limit import RATE_LIMITS, limiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
@limiter.limit(RATE_LIMITS["login"])
async def login(request: Request, response: Response, credentials: LoginRequest):
    """
    Log in with the admin password.
    The token is returned in the body and set as an httpOnly cookie.

    Raises:
        UnauthenticatedError: 401 on a wrong password
    """
    claims = authenticate_user(credentials.password)
    token = create_access_token(claims)

    response.set_cookie(
        key=TOKEN_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    logger.info("Admin logged in")

    return TokenResponse(access_token=token)
