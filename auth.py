"""
Authentication Utilities Module

Resolves the calling user from a bearer token. Sign-in itself happens
elsewhere; this service only verifies tokens and reads the user id from
the "sub" claim.

Usage:
    from auth import get_current_user_id
    
    @router.get("/transcripts")
    async def list_transcripts(user_id: str = Depends(get_current_user_id)):
        ...
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from config.settings import settings
from utils.exceptions import AuthenticationError
from utils.logging import get_logger

logger = get_logger(__name__)

# Bearer token extraction from Authorization header
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="login", auto_error=False)

DEFAULT_TOKEN_LIFETIME = timedelta(hours=24)


# =============================================================================
# Token Management
# =============================================================================

def create_access_token(
    user_id: str,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a signed access token for a user.
    
    Args:
        user_id: Stored in the "sub" claim
        expires_delta: Token lifetime, 24 hours by default
    
    Returns:
        str: Encoded token
    """
    expire = datetime.now(timezone.utc) + (expires_delta or DEFAULT_TOKEN_LIFETIME)
    return jwt.encode(
        {"sub": user_id, "exp": expire},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def decode_access_token(token: str) -> Optional[dict]:
    """
    Decode and validate an access token.
    
    Returns:
        dict: Decoded token payload, or None if invalid
    """
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError as e:
        logger.warning(f"Token decode failed: {e}")
        return None


# =============================================================================
# User Dependencies
# =============================================================================

async def get_current_user_id(token: Optional[str] = Depends(oauth2_scheme)) -> str:
    """
    FastAPI dependency returning the authenticated user's id.
    
    Raises:
        AuthenticationError: Token missing, invalid, expired or without "sub"
    """
    if not token:
        raise AuthenticationError("Missing bearer token")
    
    payload = decode_access_token(token)
    if payload is None:
        raise AuthenticationError("Could not validate credentials")
    
    user_id = payload.get("sub")
    if not user_id:
        logger.warning("Token missing 'sub' claim")
        raise AuthenticationError("Could not validate credentials")
    
    return str(user_id)
