"""UserRepository protocol (port).

The credential store: user records, confirmation flag and lockout counters.
Implementations flush but never commit; the calling handler owns the
transaction.
"""

from typing import Protocol
from uuid import UUID

from marketplace_auth.domain.entities import User


class UserRepository(Protocol):
    """Persistence port for User entities."""

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID.

        Returns:
            User if found, None otherwise.
        """
        ...

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email (case-insensitive).

        Returns:
            User if found, None otherwise.
        """
        ...

    async def add(self, user: User) -> None:
        """Stage a new user for insertion."""
        ...

    async def update(self, user: User) -> None:
        """Persist changes to an existing user.

        Raises:
            NoResultFound: If the user does not exist.
        """
        ...
