"""Authentication routes."""

import logging
from urllib.parse import urlencode

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, Response, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field

from folio.application.usecase.auth import (
    CompleteLoginRequest,
    CompleteLoginUseCase,
    LoginFailure,
    RefreshSessionRequest,
    RefreshSessionUseCase,
    RefreshSuccess,
    StartLoginRequest,
    StartLoginUseCase,
)
from folio.config import Settings
from folio.domain.value import UserRole
from folio.interface.api.cookies import (
    OAUTH_STATE_COOKIE,
    REFRESH_TOKEN_COOKIE,
    clear_auth_cookies,
    clear_oauth_state_cookie,
    read_oauth_state_cookie,
    set_auth_cookies,
    set_oauth_state_cookie,
)
from folio.interface.api.security import REFRESH_TOKEN_HEADER, OptionalUser
from folio.interface.error import UnauthorizedError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


class MessageResponse(BaseModel):
    """Plain success response."""

    success: bool
    message: str


class RefreshTokenBody(BaseModel):
    """Optional body for bearer-style callers that do not use cookies."""

    refresh_token: str | None = None


class SessionData(BaseModel):
    """Session status payload."""

    authenticated: bool
    user_id: str | None = Field(default=None, serialization_alias="userId")
    role: UserRole | None = None


class SessionResponse(BaseModel):
    """Session status response."""

    success: bool = True
    data: SessionData


@router.get("/oauth", status_code=status.HTTP_302_FOUND)
async def start_oauth(
    start_login: FromDishka[StartLoginUseCase],
    settings: FromDishka[Settings],
    provider: str | None = Query(default=None, alias="type"),
) -> RedirectResponse:
    """Start an OAuth login and redirect to the provider.

    An unknown or unconfigured provider is answered with a 400 JSON error;
    there is no login state yet to redirect with.

    Example:
        GET /auth/oauth?type=github

        Redirects to: https://github.com/login/oauth/authorize?...
        Sets cookie: oauth_state
    """
    result = await start_login.execute(StartLoginRequest(provider=provider))

    logger.info(f"Redirecting to {result.provider.value} for login")

    redirect = RedirectResponse(
        url=result.authorization_url,
        status_code=status.HTTP_302_FOUND,
    )
    set_oauth_state_cookie(redirect, result.state, result.provider.value, settings)
    return redirect


@router.get("/oauth/callback", status_code=status.HTTP_302_FOUND)
async def oauth_callback(
    complete_login: FromDishka[CompleteLoginUseCase],
    settings: FromDishka[Settings],
    code: str | None = None,
    state: str | None = None,
    oauth_state: str | None = Cookie(default=None, alias=OAUTH_STATE_COOKIE),
) -> RedirectResponse:
    """Handle the provider redirect and finish login.

    Always answers with a redirect to the frontend: the browser is in the
    middle of a page navigation, so errors become
    ``/auth/error?message=<code>`` rather than JSON.

    Example:
        GET /auth/oauth/callback?code=abc123&state=xyz789

        Redirects to: http://localhost:3000/auth/callback?provider=github
        Sets cookies: access_token, refresh_token
    """
    stored_state, stored_provider = read_oauth_state_cookie(oauth_state)

    result = await complete_login.execute(
        CompleteLoginRequest(
            code=code,
            state=state,
            stored_state=stored_state,
            stored_provider=stored_provider,
        )
    )

    frontend_url = settings.api.frontend_url

    if isinstance(result, LoginFailure):
        logger.warning(f"OAuth callback failed: {result.code.value}")
        query = urlencode({"message": result.code.value})
        redirect = RedirectResponse(
            url=f"{frontend_url}/auth/error?{query}",
            status_code=status.HTTP_302_FOUND,
        )
        if result.state_consumed:
            clear_oauth_state_cookie(redirect, settings)
        return redirect

    query = urlencode({"provider": result.provider.value})
    redirect = RedirectResponse(
        url=f"{frontend_url}/auth/callback?{query}",
        status_code=status.HTTP_302_FOUND,
    )
    clear_oauth_state_cookie(redirect, settings)
    set_auth_cookies(redirect, result.tokens, settings)

    logger.info(f"Login complete for user {result.user_id}")
    return redirect


@router.post("/refresh", response_model=MessageResponse)
async def refresh(
    response: Response,
    refresh_session: FromDishka[RefreshSessionUseCase],
    settings: FromDishka[Settings],
    body: RefreshTokenBody | None = None,
    refresh_cookie: str | None = Cookie(default=None, alias=REFRESH_TOKEN_COOKIE),
) -> MessageResponse:
    """Exchange a refresh token for a new token pair.

    Cookie callers get new cookies. Callers that send the token in the JSON
    body get the pair back in the ``Authorization`` and ``X-Refresh-Token``
    response headers.

    Raises:
        UnauthorizedError: If the refresh token is missing, invalid, expired
            or belongs to an inactive user (cookies are cleared)
    """
    uses_body = body is not None and bool(body.refresh_token)
    refresh_token = body.refresh_token if uses_body else refresh_cookie

    result = await refresh_session.execute(
        RefreshSessionRequest(refresh_token=refresh_token)
    )

    if not isinstance(result, RefreshSuccess):
        logger.info(f"Refresh refused: {result.reason}")
        raise UnauthorizedError("Invalid refresh token", clear_credentials=True)

    if uses_body:
        response.headers["Authorization"] = f"Bearer {result.tokens.access_token}"
        response.headers[REFRESH_TOKEN_HEADER] = result.tokens.refresh_token
    else:
        set_auth_cookies(response, result.tokens, settings)

    return MessageResponse(success=True, message="Tokens refreshed")


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    settings: FromDishka[Settings],
) -> MessageResponse:
    """Logout by clearing the auth cookies.

    Always succeeds. Tokens are not revoked; they simply stop being sent.
    """
    clear_auth_cookies(response, settings)
    return MessageResponse(success=True, message="Successfully logged out")


@router.get(
    "/session", response_model=SessionResponse, response_model_exclude_none=True
)
async def get_session(user: OptionalUser) -> SessionResponse:
    """Report whether the request is authenticated.

    Never fails: an anonymous caller is a valid answer, not an error.

    Examples:
        Authenticated:
        {"success": true,
         "data": {"authenticated": true, "userId": "...", "role": "MEMBER"}}

        Unauthenticated:
        {"success": true, "data": {"authenticated": false}}
    """
    if user is None:
        return SessionResponse(data=SessionData(authenticated=False))

    return SessionResponse(
        data=SessionData(authenticated=True, user_id=user.user_id, role=user.role)
    )
