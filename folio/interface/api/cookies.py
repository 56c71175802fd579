"""Auth cookie helpers.

The access/refresh cookies and the ``oauth_state`` cookie are always written
and deleted with the same attributes, otherwise browsers keep the old copy.
"""

import base64
import binascii
import json

from fastapi import Response

from folio.config import Settings
from folio.util.jwt import TokenPair

ACCESS_TOKEN_COOKIE = "access_token"
REFRESH_TOKEN_COOKIE = "refresh_token"
OAUTH_STATE_COOKIE = "oauth_state"


def set_auth_cookies(
    response: Response, tokens: TokenPair, settings: Settings
) -> None:
    """Set the access and refresh cookies.

    Args:
        response: Response to attach the cookies to
        tokens: Token pair to store
        settings: Application settings
    """
    auth = settings.auth
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=tokens.access_token,
        max_age=auth.access_token_max_age,
        path="/",
        domain=auth.cookie_domain,
        secure=settings.api.cookie_secure,
        httponly=True,
        samesite=auth.cookie_samesite,
    )
    response.set_cookie(
        key=REFRESH_TOKEN_COOKIE,
        value=tokens.refresh_token,
        max_age=auth.refresh_token_max_age,
        path="/",
        domain=auth.cookie_domain,
        secure=settings.api.cookie_secure,
        httponly=True,
        samesite=auth.cookie_samesite,
    )


def clear_auth_cookies(response: Response, settings: Settings) -> None:
    """Delete the access and refresh cookies."""
    for key in (ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE):
        response.delete_cookie(
            key=key,
            path="/",
            domain=settings.auth.cookie_domain,
            secure=settings.api.cookie_secure,
            httponly=True,
            samesite=settings.auth.cookie_samesite,
        )


def encode_oauth_state(state: str, provider: str) -> str:
    """Encode ``{state, provider}`` as cookie-safe base64url JSON."""
    payload = json.dumps({"state": state, "provider": provider}).encode()
    return base64.urlsafe_b64encode(payload).decode()


def set_oauth_state_cookie(
    response: Response, state: str, provider: str, settings: Settings
) -> None:
    """Remember the login nonce and provider until the callback.

    ``SameSite=Lax`` is required: the callback is a top-level cross-site
    navigation from the provider.
    """
    response.set_cookie(
        key=OAUTH_STATE_COOKIE,
        value=encode_oauth_state(state, provider),
        max_age=settings.auth.oauth_state_max_age,
        path="/",
        domain=settings.auth.cookie_domain,
        secure=settings.api.cookie_secure,
        httponly=True,
        samesite="lax",
    )


def read_oauth_state_cookie(value: str | None) -> tuple[str | None, str | None]:
    """Parse the ``oauth_state`` cookie.

    Args:
        value: Raw cookie value

    Returns:
        ``(state, provider)``; both None when the cookie is absent or malformed
    """
    if not value:
        return None, None
    try:
        data = json.loads(base64.urlsafe_b64decode(value.encode()))
    except (binascii.Error, ValueError):
        return None, None
    if not isinstance(data, dict):
        return None, None

    state = data.get("state")
    provider = data.get("provider")
    if not isinstance(state, str) or not isinstance(provider, str):
        return None, None
    return state, provider


def clear_oauth_state_cookie(response: Response, settings: Settings) -> None:
    """Delete the ``oauth_state`` cookie."""
    response.delete_cookie(
        key=OAUTH_STATE_COOKIE,
        path="/",
        domain=settings.auth.cookie_domain,
        secure=settings.api.cookie_secure,
        httponly=True,
        samesite="lax",
    )
