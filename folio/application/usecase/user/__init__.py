"""User use cases."""

from .get_current_user import GetCurrentUserRequest, GetCurrentUserUseCase
from .list_users import ListUsersRequest, ListUsersUseCase

__all__ = [
    "GetCurrentUserRequest",
    "GetCurrentUserUseCase",
    "ListUsersRequest",
    "ListUsersUseCase",
]
