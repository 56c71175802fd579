"""JWT token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel, ConfigDict, Field


class TokenPayload(BaseModel):
    """JWT token payload.

    Claims use the camelCase names the frontend already reads.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    email: str
    iat: datetime | None = None
    exp: datetime


class TokenPair(BaseModel):
    """Access and refresh tokens issued together."""

    access_token: str
    refresh_token: str


class JWTError(Exception):
    """JWT-related error."""

    pass


class TokenExpiredError(JWTError):
    """Token signature is valid but the token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Token is malformed or signed with a different secret."""

    pass


def create_token(
    user_id: str,
    email: str,
    secret: str,
    expires_in: timedelta,
    algorithm: str = "HS256",
) -> str:
    """Create a signed JWT for the user.

    Args:
        user_id: User ID
        email: User email
        secret: Signing secret
        expires_in: Token lifetime (negative values produce an expired token)
        algorithm: JWT signing algorithm

    Returns:
        Encoded JWT token
    """
    issued_at = datetime.now(timezone.utc)

    payload = {
        "userId": user_id,
        "email": email,
        "iat": issued_at,
        "exp": issued_at + expires_in,
    }

    return jwt.encode(payload, secret, algorithm=algorithm)


def verify_token(token: str, secret: str, algorithm: str = "HS256") -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        secret: Secret the token must be signed with
        algorithm: Expected signing algorithm

    Returns:
        Token payload if valid

    Raises:
        TokenExpiredError: If the token has expired
        InvalidTokenError: If the token is malformed, tampered with or
            missing required claims
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": ["exp", "userId"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError("Token has expired")
    except jwt.InvalidTokenError:
        raise InvalidTokenError("Invalid token")

    try:
        return TokenPayload(**payload)
    except ValueError:
        raise InvalidTokenError("Token claims are malformed")
