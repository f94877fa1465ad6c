"""PostgreSQL implementation of User repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from port42.domain.model import User
from port42.domain.repository import UserRepository
from port42.domain.value import UserId, Username
from port42.persistence.mappers import row_to_user, user_to_dict
from port42.persistence.retry import idempotent_read, mutation
from port42.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @idempotent_read
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    @idempotent_read
    async def find_by_username(self, username: Username) -> Optional[User]:
        """Find a user by username."""
        stmt = select(users_table).where(users_table.c.username == username.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    @mutation
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user
        """
        existing = await self.find_by_id(user.id)

        user_dict = user_to_dict(user)

        if existing:
            stmt = (
                users_table.update()
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
        else:
            stmt = users_table.insert().values(**user_dict)
        await self.session.execute(stmt)

        await self.session.flush()
        return user

    @mutation
    async def adjust_reputation(
        self,
        user_id: UserId,
        reputation_delta: int,
        upvote_delta: int = 0,
        downvote_delta: int = 0,
    ) -> Optional[User]:
        """Atomically shift reputation and received-vote totals (each minimum 0)."""
        stmt = (
            users_table.update()
            .where(users_table.c.id == user_id)
            .values(
                reputation=func.greatest(
                    users_table.c.reputation + reputation_delta, 0
                ),
                total_upvotes=func.greatest(
                    users_table.c.total_upvotes + upvote_delta, 0
                ),
                total_downvotes=func.greatest(
                    users_table.c.total_downvotes + downvote_delta, 0
                ),
                updated_at=datetime.now(),
            )
            .returning(users_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_user(dict(row)) if row else None
