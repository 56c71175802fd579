"""Domain services."""

from .auth_service import AuthService, OAuthClient
from .base import Service
from .identity_resolver import IdentityResolver
from .token_service import TokenService
from .user_identity_service import UserIdentityService
from .user_service import UserService

__all__ = [
    "AuthService",
    "IdentityResolver",
    "OAuthClient",
    "Service",
    "TokenService",
    "UserIdentityService",
    "UserService",
]
