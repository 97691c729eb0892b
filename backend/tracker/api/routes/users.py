"""User Routes — signup, signin, and the current user's profile.

Invariants:
    - POST /signup returns 201 and never echoes the password or its hash
    - POST /signin returns a bearer token for ACTIVE accounts only
    - GET /me and PATCH /me require a valid bearer token
    - PATCH /me returns 409 when the new email belongs to another account
"""

from fastapi import APIRouter, Depends, status

from tracker.api.dependencies import (
    get_account_service, get_user_repository, require_actor_id,
)
from tracker.core.domain_types import UserId
from tracker.core.errors import AuthorizationError
from tracker.infrastructure.repositories import SqlUserRepository
from tracker.schemas.user import (
    TokenResponse, UserProfileUpdate, UserResponse, UserSignin, UserSignup,
)
from tracker.services.accounts import AccountService

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post(
    "/signup", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def signup(
    body: UserSignup, accounts: AccountService = Depends(get_account_service),
):
    return await accounts.signup(body)


@router.post("/signin", response_model=TokenResponse)
async def signin(
    body: UserSignin, accounts: AccountService = Depends(get_account_service),
):
    token, user = await accounts.signin(body)
    return TokenResponse(
        access_token=token, user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
async def me(
    actor_id: UserId = Depends(require_actor_id),
    users: SqlUserRepository = Depends(get_user_repository),
):
    user = await users.get(actor_id)
    if not user:
        raise AuthorizationError("Unauthorized: unknown user")
    return user


@router.patch("/me", response_model=UserResponse)
async def update_me(
    body: UserProfileUpdate,
    actor_id: UserId = Depends(require_actor_id),
    accounts: AccountService = Depends(get_account_service),
):
    """Change the actor's name and/or email."""
    return await accounts.update_profile(actor_id, body)
