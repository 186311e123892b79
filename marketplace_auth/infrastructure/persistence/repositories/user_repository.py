"""UserRepository - SQLAlchemy implementation of the UserRepository protocol.

Maps between domain User entities and the ``users`` table. Changes are
flushed, never committed: the calling handler owns the transaction.
"""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace_auth.domain.entities import User
from marketplace_auth.domain.enums import UserRole
from marketplace_auth.infrastructure.persistence.models.user import User as UserModel


class UserRepository:
    """SQLAlchemy adapter for the UserRepository port.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> repo = UserRepository(session)
        >>> user = await repo.find_by_email("user@example.com")
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, user_id: UUID) -> User | None:
        stmt = (
            select(UserModel)
            .where(UserModel.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        user_model = result.scalar_one_or_none()
        return self._to_domain(user_model) if user_model else None

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email address (case-insensitive).

        Args:
            email: User's email address.

        Returns:
            Domain User entity if found, None otherwise.
        """
        stmt = (
            select(UserModel)
            .where(func.lower(UserModel.email) == email.strip().lower())
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        user_model = result.scalar_one_or_none()
        return self._to_domain(user_model) if user_model else None

    async def add(self, user: User) -> None:
        """Stage a new user.

        Raises:
            IntegrityError: If the email already exists.
        """
        self.session.add(self._to_model(user))
        await self.session.flush()

    async def update(self, user: User) -> None:
        """Copy mutable fields from the domain entity onto the row.

        Raises:
            NoResultFound: If the user doesn't exist.
        """
        stmt = select(UserModel).where(UserModel.id == user.id)
        result = await self.session.execute(stmt)
        user_model = result.scalar_one()

        user_model.email = user.email
        user_model.password_hash = user.password_hash
        user_model.first_name = user.first_name
        user_model.last_name = user.last_name
        user_model.role = user.role.value
        user_model.email_confirmed = user.email_confirmed
        user_model.failed_access_count = user.failed_access_count
        user_model.lockout_end = user.lockout_end
        user_model.updated_at = user.updated_at

        await self.session.flush()

    def _to_domain(self, user_model: UserModel) -> User:
        return User(
            id=user_model.id,
            email=user_model.email,
            password_hash=user_model.password_hash,
            email_confirmed=user_model.email_confirmed,
            failed_access_count=user_model.failed_access_count,
            lockout_end=user_model.lockout_end,
            role=UserRole(user_model.role),
            first_name=user_model.first_name,
            last_name=user_model.last_name,
            created_at=user_model.created_at,
            updated_at=user_model.updated_at,
        )

    def _to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            email=user.email,
            password_hash=user.password_hash,
            email_confirmed=user.email_confirmed,
            failed_access_count=user.failed_access_count,
            lockout_end=user.lockout_end,
            role=user.role.value,
            first_name=user.first_name,
            last_name=user.last_name,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
