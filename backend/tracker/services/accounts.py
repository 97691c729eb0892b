"""Accounts — signup, signin and profile updates.

Invariants:
    - Duplicate email → ConflictError (409), checked before insert and again by
      the unique index when two signups race
    - Wrong email or password → the same AuthorizationError (no account enumeration)
    - Only ACTIVE accounts receive a token
    - A profile update may not take an email owned by another account (409)
"""

import logging

from tracker.core.domain_types import UserId, UserStatus
from tracker.core.errors import AuthorizationError, ConflictError
from tracker.core.repository_protocols import UserLike, UserRepository
from tracker.core.security import (
    create_access_token, hash_password, verify_password,
)
from tracker.schemas.user import UserProfileUpdate, UserSignin, UserSignup

logger = logging.getLogger(__name__)


class AccountService:

    def __init__(
        self,
        users: UserRepository,
        secret_key: str,
        algorithm: str = "HS256",
        expires_minutes: int = 1440,
    ):
        self.users = users
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes

    async def signup(self, body: UserSignup) -> UserLike:
        if await self.users.get_by_email(body.email):
            raise ConflictError("Email is already registered")
        user = await self.users.create(
            body.name, body.email, hash_password(body.password),
        )
        logger.info("User signed up", extra={"user_id": str(user.id)})
        return user

    async def signin(self, body: UserSignin) -> tuple[str, UserLike]:
        """Return (access_token, user) for valid credentials."""
        user = await self.users.get_by_email(body.email)
        if not user or not verify_password(body.password, user.password_hash):
            raise AuthorizationError("Invalid email or password")
        if user.status != UserStatus.ACTIVE.value:
            raise AuthorizationError("Account is not active")
        token = create_access_token(
            user.id, self.secret_key, self.algorithm, self.expires_minutes,
        )
        return token, user

    async def update_profile(
        self, user_id: UserId, body: UserProfileUpdate,
    ) -> UserLike:
        user = await self.users.get(user_id)
        if not user:
            raise AuthorizationError("Unauthorized: unknown user")
        fields = body.changed_fields()
        if "email" in fields and fields["email"] != user.email:
            owner = await self.users.get_by_email(fields["email"])
            if owner and owner.id != user.id:
                raise ConflictError("Email is already registered")
        if not fields:
            return user
        updated = await self.users.update(user.id, fields)
        logger.info("Profile updated", extra={"user_id": str(user.id)})
        return updated
