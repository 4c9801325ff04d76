"""User service layer: registration, login and session lookups."""

import asyncio
from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.gravatar import gravatar_url
from infrastructure.auth.passwords import hash_password, verify_password
from infrastructure.auth.provider import IAuthProvider, TokenUser

logger = structlog.get_logger()


class UserService:
    """Service layer for User business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        auth_provider: IAuthProvider,
    ) -> None:
        self._uow_factory = uow_factory
        self._auth = auth_provider

    async def register(self, name: str, email: str, password: str) -> str:
        """Register a new user and return a session token."""
        async with self._uow_factory() as uow:
            if await uow.users.get_by_email(email):
                raise UserAlreadyExistsError(email)

            # bcrypt runs in a worker thread
            password_hash = await asyncio.to_thread(hash_password, password)
            user = User(
                name=name,
                email=email,
                password_hash=password_hash,
                avatar=gravatar_url(email),
            )
            created = await uow.users.create(user)
            await uow.commit()

        logger.info("user_registered", user_id=str(created.id))
        return self._issue_token(created)

    async def login(self, email: str, password: str) -> str:
        """Check credentials and return a session token."""
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(email)

        if not user or not await asyncio.to_thread(
            verify_password, password, user.password_hash
        ):
            raise InvalidCredentialsError()

        return self._issue_token(user)

    async def get_current(self, user_id: UUID) -> User:
        """Load the user a session token belongs to."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            return user

    def _issue_token(self, user: User) -> str:
        return self._auth.create_token(
            TokenUser(id=user.id, email=user.email, name=user.name)
        )
