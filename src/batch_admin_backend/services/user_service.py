'''

'''
from typing import Optional, Annotated
from uuid import UUID
from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.engine import get_db_session
from ..database import models as db_models
from ..common.logger import log


class UserService:
    """
    Base service for user-related database operations.
    Users are polymorphic on their role, so every lookup returns the
    specific Admins, Mentors, or Teachers object.
    """
    def __init__(self, db: Annotated[AsyncSession, Depends(get_db_session)]):
        self.db = db

    async def get_user_by_email(self, email: str) -> db_models.Users | None:
        """
        Fetches the complete polymorphic user object by email.
        """
        log.info(f"Fetching full user profile for email: {email}")
        try:
            stmt = select(db_models.Users).filter(db_models.Users.email == email)
            result = await self.db.execute(stmt)
            return result.scalars().first()
        except Exception as e:
            log.error(f"Database error fetching full user by email {email}: {e}", exc_info=True)
            raise

    async def get_user_by_id(self, user_id: UUID) -> db_models.Users | None:
        """
        Fetches the complete polymorphic user object by ID.
        """
        log.info(f"Fetching full user profile for ID: {user_id}")
        try:
            stmt = select(db_models.Users).filter(db_models.Users.id == user_id)
            result = await self.db.execute(stmt)
            return result.scalars().first()
        except Exception as e:
            log.error(f"Database error fetching full user by ID {user_id}: {e}", exc_info=True)
            raise

    async def get_teachers_by_ids(self, teacher_ids: list[UUID]) -> list[db_models.Teachers]:
        """Fetches every teacher whose id is in the list. Unknown ids are skipped."""
        if not teacher_ids:
            return []
        log.info(f"Fetching {len(teacher_ids)} teachers by ID list.")
        stmt = select(db_models.Teachers).filter(db_models.Teachers.id.in_(teacher_ids))
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def email_in_use(self, email: str, exclude_user_id: Optional[UUID] = None) -> bool:
        """True when another user already holds this email."""
        stmt = select(db_models.Users.id).filter(db_models.Users.email == email)
        if exclude_user_id is not None:
            stmt = stmt.filter(db_models.Users.id != exclude_user_id)
        result = await self.db.execute(stmt.limit(1))
        return result.scalars().first() is not None

