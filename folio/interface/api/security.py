"""Session gate dependencies.

Routes declare their authentication policy through these dependencies:

    @router.get("/users/me")
    async def me(user: RequiredUser): ...

    @router.get("/auth/session")
    async def session(user: OptionalUser): ...

    @router.get("/users")
    async def list_users(user: OwnerUser): ...

Bearer-style callers send ``Authorization: Bearer <access>`` and
``X-Refresh-Token: <refresh>``; refreshed tokens come back in the same
headers. Everyone else is a cookie caller and gets new cookies.
"""

import logging
from typing import Annotated

from fastapi import Depends, Request, Response

from folio.application.usecase.auth import (
    AuthenticateRequest,
    AuthenticateUseCase,
    AuthenticationResult,
    CurrentUser,
)
from folio.config import Settings
from folio.interface.api.cookies import (
    ACCESS_TOKEN_COOKIE,
    REFRESH_TOKEN_COOKIE,
    clear_auth_cookies,
    set_auth_cookies,
)
from folio.interface.error import ForbiddenError, UnauthorizedError

logger = logging.getLogger(__name__)

REFRESH_TOKEN_HEADER = "X-Refresh-Token"


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_authentication(
    request: Request, response: Response
) -> AuthenticationResult:
    """Run the session gate once per request.

    FastAPI caches the result, so the optional, required and owner policies
    can be combined on one route without re-verifying tokens.
    """
    container = request.state.dishka_container
    use_case = await container.get(AuthenticateUseCase)
    settings = await container.get(Settings)

    uses_headers = "authorization" in request.headers
    if uses_headers:
        credentials = AuthenticateRequest(
            access_token=_bearer_token(request.headers.get("authorization")),
            refresh_token=request.headers.get(REFRESH_TOKEN_HEADER) or None,
        )
    else:
        credentials = AuthenticateRequest(
            access_token=request.cookies.get(ACCESS_TOKEN_COOKIE) or None,
            refresh_token=request.cookies.get(REFRESH_TOKEN_COOKIE) or None,
        )

    result = await use_case.execute(credentials)

    if result.tokens is not None:
        if uses_headers:
            response.headers["Authorization"] = f"Bearer {result.tokens.access_token}"
            response.headers[REFRESH_TOKEN_HEADER] = result.tokens.refresh_token
        else:
            set_auth_cookies(response, result.tokens, settings)
        transport = "headers" if uses_headers else "cookies"
        logger.info(f"Session refreshed, new tokens sent via {transport}")
    elif result.clear_credentials and not uses_headers:
        clear_auth_cookies(response, settings)

    return result


async def optional_user(
    auth: Annotated[AuthenticationResult, Depends(get_authentication)],
) -> CurrentUser | None:
    """Authenticated user, or None."""
    return auth.user


async def required_user(
    auth: Annotated[AuthenticationResult, Depends(get_authentication)],
) -> CurrentUser:
    """Authenticated user, or 401.

    Raises:
        UnauthorizedError: If the request is not authenticated
    """
    if auth.user is None:
        raise UnauthorizedError(clear_credentials=auth.clear_credentials)
    return auth.user


async def require_owner(
    user: Annotated[CurrentUser, Depends(required_user)],
) -> CurrentUser:
    """Authenticated owner, or 403.

    A user known only from token claims has no role and is refused.

    Raises:
        ForbiddenError: If the user is not the owner
    """
    if not user.is_owner:
        raise ForbiddenError("Owner role required")
    return user


OptionalUser = Annotated[CurrentUser | None, Depends(optional_user)]
RequiredUser = Annotated[CurrentUser, Depends(required_user)]
OwnerUser = Annotated[CurrentUser, Depends(require_owner)]
