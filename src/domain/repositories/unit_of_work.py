"""Unit of Work protocol."""

from typing import Any, Protocol

from domain.repositories.post_repository import IPostRepository
from domain.repositories.profile_repository import IProfileRepository
from domain.repositories.user_repository import IUserRepository


class IUnitOfWork(Protocol):
    """A transaction spanning the user, profile and post repositories.

    Services open one per operation, load and change documents through the
    repositories, then ``commit()``; anything not committed is discarded.
    """

    users: IUserRepository
    profiles: IProfileRepository
    posts: IPostRepository

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    async def __aenter__(self) -> "IUnitOfWork": ...

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None: ...
