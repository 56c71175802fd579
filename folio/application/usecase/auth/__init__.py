"""Authentication use cases."""

from .authenticate import (
    AuthenticateRequest,
    AuthenticateUseCase,
    AuthenticationResult,
    CurrentUser,
)
from .complete_login import (
    CompleteLoginRequest,
    CompleteLoginUseCase,
    LoginFailure,
    LoginResult,
    LoginSuccess,
)
from .error import InvalidProviderError, LoginErrorCode
from .refresh_session import (
    RefreshFailure,
    RefreshResult,
    RefreshSessionRequest,
    RefreshSessionUseCase,
    RefreshSuccess,
)
from .start_login import StartLoginRequest, StartLoginResponse, StartLoginUseCase

__all__ = [
    "AuthenticateRequest",
    "AuthenticateUseCase",
    "AuthenticationResult",
    "CompleteLoginRequest",
    "CompleteLoginUseCase",
    "CurrentUser",
    "InvalidProviderError",
    "LoginErrorCode",
    "LoginFailure",
    "LoginResult",
    "LoginSuccess",
    "RefreshFailure",
    "RefreshResult",
    "RefreshSessionRequest",
    "RefreshSessionUseCase",
    "RefreshSuccess",
    "StartLoginRequest",
    "StartLoginResponse",
    "StartLoginUseCase",
]
