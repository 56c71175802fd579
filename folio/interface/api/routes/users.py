"""User routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query
from pydantic import BaseModel

from folio.application.usecase.user import (
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
    ListUsersRequest,
    ListUsersUseCase,
)
from folio.application.usecase.user.get_current_user import GetCurrentUserResponse
from folio.application.usecase.user.list_users import ListUsersResponse
from folio.domain.error import NotFoundError as DomainNotFoundError
from folio.interface.api.security import OwnerUser, RequiredUser
from folio.interface.error import NotFoundError

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class CurrentUserEnvelope(BaseModel):
    """Current user response envelope."""

    success: bool = True
    data: GetCurrentUserResponse


class UserListEnvelope(BaseModel):
    """User list response envelope."""

    success: bool = True
    data: ListUsersResponse


@router.get("/me", response_model=CurrentUserEnvelope)
async def get_my_profile(
    user: RequiredUser,
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
) -> CurrentUserEnvelope:
    """Get the authenticated user's profile and linked providers.

    Raises:
        UnauthorizedError: If not authenticated
        NotFoundError: If the account disappeared after authentication
    """
    try:
        profile = await get_current_user_use_case.execute(
            GetCurrentUserRequest(user_id=user.user_id)
        )
    except DomainNotFoundError:
        raise NotFoundError("User not found")

    return CurrentUserEnvelope(data=profile)


@router.get("", response_model=UserListEnvelope)
async def list_users(
    user: OwnerUser,
    list_users_use_case: FromDishka[ListUsersUseCase],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
) -> UserListEnvelope:
    """List all users, one page at a time. Owner only.

    Example:
        GET /users?page=2&limit=10
    """
    result = await list_users_use_case.execute(
        ListUsersRequest(page=page, limit=limit)
    )
    return UserListEnvelope(data=result)
