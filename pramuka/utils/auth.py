"""
Authentication utilities for bearer tokens and the admin action token.

Sessions are owned by the external auth provider; this service only
verifies the JWT it issues and loads the matching profile.
"""

import logging
import secrets
from datetime import timedelta
from typing import Optional
from jose import JWTError, jwt
from fastapi import HTTPException, status, Depends, Header
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from pramuka.database import get_db
from pramuka.models.profile import Profile
from pramuka.config import settings
from pramuka.utils.datetime_utils import utc_now

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme, missing headers are reported by get_token_claims
security = HTTPBearer(auto_error=False)

class AuthError(Exception):
    """Custom authentication error"""
    pass

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: Data to encode in the token
        expires_delta: Token expiration time delta

    Returns:
        Encoded JWT token string
    """
    to_encode = data.copy()

    if expires_delta:
        expire = utc_now() + expires_delta
    else:
        expire = utc_now() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def verify_token(token: str) -> dict:
    """
    Verify and decode a JWT token.

    Raises:
        AuthError: If token is invalid or expired
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise AuthError("Could not validate credentials")

async def get_token_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> dict:
    """
    Decode the bearer token of the request.

    Returns:
        token claims; ``sub`` is always present

    Raises:
        HTTPException: 401 for a missing or invalid token
    """
    if credentials is None or not credentials.credentials.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization token dibutuhkan.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = verify_token(credentials.credentials.strip())
    except AuthError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Sesi sudah tidak berlaku.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not payload.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token tidak valid.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return payload

async def get_current_user_id(claims: dict = Depends(get_token_claims)) -> str:
    return claims["sub"]

async def get_optional_profile(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
) -> Optional[Profile]:
    """
    Profile of the token owner, None before the first profile save.

    Raises:
        HTTPException: 403 when the profile lookup fails
    """
    try:
        return db.query(Profile).filter(Profile.id == user_id).first()
    except SQLAlchemyError as e:
        logger.error(f"Profile lookup for {user_id} failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Profil tidak dapat dimuat."
        )

def require_roles(*roles: str, detail: str = "Akses ditolak."):
    """Dependency factory allowing only profiles with one of ``roles``"""
    async def role_checker(current_profile: Optional[Profile] = Depends(get_optional_profile)) -> Profile:
        if current_profile is None or current_profile.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=detail
            )
        return current_profile

    return role_checker

def check_action_token(provided_token: Optional[str]) -> None:
    """
    Compare a token against ADMIN_ACTION_TOKEN.

    Raises:
        HTTPException: 500 when the server token is not configured, 401 on mismatch
    """
    configured_token = settings.get_action_token()
    if not configured_token:
        logger.error("ADMIN_ACTION_TOKEN is not configured")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Konfigurasi server belum lengkap. Hubungi administrator."
        )

    if not provided_token or not secrets.compare_digest(provided_token.encode(), configured_token.encode()):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token tidak valid."
        )

async def require_action_token(x_action_token: Optional[str] = Header(None)) -> None:
    """Dependency guarding admin actions with the x-action-token header"""
    check_action_token(x_action_token)
