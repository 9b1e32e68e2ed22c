"""Staff account management (admin only)."""

import logging

from fastapi import APIRouter, Depends, status

from alumni_api.api.deps import Principal, get_user_repository, require_user_manage
from alumni_api.core.exceptions import BadRequestError, ConflictError, NotFoundError
from alumni_api.core.pagination import PaginationParams, pagination_params
from alumni_api.core.security import hash_password
from alumni_api.repositories.base import USER_SORT_FIELDS, UserRepository
from alumni_api.schemas.user import UserCreate, UserListResponse, UserResponse, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=UserListResponse, summary="List users")
async def list_users(
    params: PaginationParams = Depends(pagination_params),
    _: Principal = Depends(require_user_manage),
    users: UserRepository = Depends(get_user_repository),
) -> UserListResponse:
    """List staff accounts with search, sorting and pagination."""
    items, total = await users.paginate(params)
    return UserListResponse.build(
        [UserResponse.model_validate(item) for item in items],
        total,
        params,
        params.resolve_sort(USER_SORT_FIELDS),
    )


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
)
async def create_user(
    user_data: UserCreate,
    principal: Principal = Depends(require_user_manage),
    users: UserRepository = Depends(get_user_repository),
) -> UserResponse:
    """Create a staff account."""
    duplicate = await users.find_duplicate(user_data.username, user_data.email)
    if duplicate:
        raise ConflictError(f"{duplicate.capitalize()} already registered")

    data = user_data.model_dump(exclude={"password"})
    data["role"] = user_data.role.value
    data["password_hash"] = hash_password(user_data.password)
    user = await users.create(data)
    logger.info("User %s created by %s", user.username, principal.id)
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse, summary="Get a user")
async def get_user(
    user_id: str,
    _: Principal = Depends(require_user_manage),
    users: UserRepository = Depends(get_user_repository),
) -> UserResponse:
    """Get a staff account by ID."""
    user = await users.get(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse, summary="Update a user")
async def update_user(
    user_id: str,
    user_data: UserUpdate,
    principal: Principal = Depends(require_user_manage),
    users: UserRepository = Depends(get_user_repository),
) -> UserResponse:
    """Update a staff account. Admins cannot disable or demote themselves."""
    if await users.get(user_id) is None:
        raise NotFoundError("User", user_id)

    changes = {
        field: value
        for field, value in user_data.model_dump(exclude_unset=True).items()
        if value is not None or field == "full_name"
    }
    if user_id == principal.id and (
        changes.get("is_active") is False or changes.get("role") not in (None, "admin")
    ):
        raise BadRequestError("Admins cannot disable or demote themselves")

    duplicate = await users.find_duplicate(
        changes.get("username"), changes.get("email"), exclude_id=user_id
    )
    if duplicate:
        raise ConflictError(f"{duplicate.capitalize()} already registered")

    if "password" in changes:
        changes["password_hash"] = hash_password(changes.pop("password"))
    if "role" in changes:
        changes["role"] = user_data.role.value

    user = await users.update(user_id, changes)
    logger.info("User %s updated by %s", user_id, principal.id)
    return UserResponse.model_validate(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a user",
)
async def delete_user(
    user_id: str,
    principal: Principal = Depends(require_user_manage),
    users: UserRepository = Depends(get_user_repository),
) -> None:
    """Delete a staff account. Admins cannot delete themselves."""
    if user_id == principal.id:
        raise BadRequestError("Admins cannot delete their own account")
    if not await users.delete(user_id):
        raise NotFoundError("User", user_id)
    logger.info("User %s deleted by %s", user_id, principal.id)
