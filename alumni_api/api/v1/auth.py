"""Authentication endpoints for staff accounts plus token refresh and logout."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from alumni_api.api.deps import (
    Principal,
    get_alumni_repository,
    get_current_principal,
    get_user_repository,
)
from alumni_api.core.permissions import Role
from alumni_api.core.security import verify_password, verify_refresh_token
from alumni_api.repositories.base import AlumniRepository, UserRepository
from alumni_api.schemas.alumni import AlumniResponse
from alumni_api.schemas.auth import (
    ProfileResponse,
    TokenRefresh,
    TokenResponse,
    UserLogin,
    UserTokenResponse,
)
from alumni_api.schemas.user import UserResponse
from alumni_api.services.sessions import (
    is_current_refresh_token,
    issue_tokens,
    revoke_session,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/login",
    response_model=UserTokenResponse,
    summary="Login with username or email",
)
async def login(
    credentials: UserLogin,
    users: UserRepository = Depends(get_user_repository),
) -> UserTokenResponse:
    """Authenticate a staff account and return access tokens."""
    user = await users.get_by_login(credentials.username)

    if user is None or not verify_password(credentials.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is disabled",
        )

    tokens = await issue_tokens(user.id, user.role, user.full_name or user.username)
    logger.info("User %s logged in", user.username)
    return UserTokenResponse(**tokens, user=UserResponse.model_validate(user))


@router.post(
    "/refresh",
    response_model=TokenResponse,
    summary="Refresh access token",
)
async def refresh_token(
    token_data: TokenRefresh,
    users: UserRepository = Depends(get_user_repository),
    alumni: AlumniRepository = Depends(get_alumni_repository),
) -> TokenResponse:
    """Exchange the current refresh token for a new token pair."""
    try:
        payload = verify_refresh_token(token_data.refresh_token)
        role = Role(payload["role"])
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    subject = payload["sub"]

    if not await is_current_refresh_token(role.value, subject, token_data.refresh_token):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Refresh token has been revoked",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if role == Role.ALUMNI:
        record = await alumni.get(subject)
        name = record.name if record else None
    else:
        user = await users.get(subject)
        if user is not None and user.is_active:
            role = Role(user.role)
            name = user.full_name or user.username
        else:
            name = None

    if name is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if role.value != payload["role"]:
        await revoke_session(payload["role"], subject)

    tokens = await issue_tokens(subject, role.value, name)
    return TokenResponse(**tokens)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Logout and revoke refresh token",
)
async def logout(
    principal: Principal = Depends(get_current_principal),
) -> None:
    """Drop the stored refresh token. Access tokens stay valid until expiry."""
    await revoke_session(principal.role.value, principal.id)


@router.get(
    "/profile",
    response_model=ProfileResponse,
    summary="Get current account profile",
)
async def get_profile(
    principal: Principal = Depends(get_current_principal),
    users: UserRepository = Depends(get_user_repository),
    alumni: AlumniRepository = Depends(get_alumni_repository),
) -> ProfileResponse:
    """Return the account behind the token."""
    profile = ProfileResponse(id=principal.id, role=principal.role.value, name=principal.name)
    if principal.is_alumni:
        record = await alumni.get(principal.id)
        profile.alumni = AlumniResponse.model_validate(record)
    else:
        user = await users.get(principal.id)
        profile.user = UserResponse.model_validate(user)
    return profile
