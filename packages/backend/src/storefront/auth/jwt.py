"""Session token creation and verification.

The token carries the user id (sub) and role (rol). It is short-lived;
logging in again issues a fresh one.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from storefront.config import settings


class TokenError(Exception):
    """Raised when token verification fails."""


def create_session_token(
    user_id: str,
    rol: str,
    expires_minutes: Optional[int] = None,
) -> str:
    expires = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes or settings.access_token_expire_minutes
    )
    payload = {
        "sub": user_id,
        "rol": rol,
        "type": "session",
        "exp": expires,
        "iat": datetime.now(timezone.utc),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> dict:
    """Verify and decode a session token.

    Returns the payload dict on success.
    Raises TokenError on failure.
    """
    try:
        return jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise TokenError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise TokenError(f"Invalid token: {e}")
