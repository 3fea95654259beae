'''

'''
from typing import Annotated
from uuid import UUID
from fastapi import Depends, HTTPException, status
from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.engine import get_db_session
from ..database import models as db_models
from ..common.logger import log
from ..common.security_utils import HashedPassword
from ..models import teacher as teacher_models
from .user_service import UserService
from .earnings_service import EarningsService


class TeacherService(UserService):
    """Service for teacher-specific logic."""

    def __init__(
        self,
        db: Annotated[AsyncSession, Depends(get_db_session)],
        earnings_service: Annotated[EarningsService, Depends(EarningsService)]
    ):
        super().__init__(db)
        self.earnings_service = earnings_service

    async def get_teacher(self, teacher_id: UUID) -> db_models.Teachers:
        """Fetches a teacher or raises 404."""
        teacher = await self.db.get(db_models.Teachers, teacher_id)
        if teacher is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Teacher not found"
            )
        return teacher

    async def get_all(self) -> list[db_models.Teachers]:
        """
        Fetches all teachers after recomputing every teacher's total earnings.
        """
        log.info("Listing teachers with fresh earnings.")
        await self.earnings_service.recompute_all_earnings()

        stmt = select(db_models.Teachers).order_by(db_models.Teachers.name)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def create_teacher(self, teacher_data: teacher_models.TeacherCreate) -> teacher_models.TeacherRead:
        """
        Creates a new teacher from the admin form.
        - Rejects an email already in use.
        - Hashes the password.
        """
        log.info(f"Attempting to create teacher {teacher_data.email}.")

        if await self.email_in_use(teacher_data.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Teacher with this email already exists"
            )

        new_teacher = db_models.Teachers(
            name=teacher_data.name,
            email=teacher_data.email,
            phone=teacher_data.phone,
            specialization=teacher_data.specialization,
            status=teacher_data.status.value,
            password=HashedPassword.get_hash(teacher_data.password)
        )
        self.db.add(new_teacher)
        try:
            await self.db.flush()
        except IntegrityError:
            log.warning(f"Concurrent signup for {teacher_data.email} hit the unique email constraint.")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Teacher with this email already exists"
            )

        log.info(f"Created teacher {new_teacher.id}.")
        return teacher_models.TeacherRead.model_validate(new_teacher)

    async def update_teacher(
        self,
        teacher_id: UUID,
        update_data: teacher_models.TeacherUpdate
    ) -> teacher_models.TeacherRead:
        """
        Updates a teacher's profile. Only the fields sent are changed.
        """
        log.info(f"Attempting to update teacher {teacher_id}.")

        update_dict = update_data.model_dump(exclude_unset=True, exclude_none=True)

        if "email" in update_dict and await self.email_in_use(update_dict["email"], exclude_user_id=teacher_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Another teacher with this email already exists"
            )

        teacher_to_update = await self.get_teacher(teacher_id)

        for key, value in update_dict.items():
            if key == "status":
                setattr(teacher_to_update, key, value.value)
            else:
                setattr(teacher_to_update, key, value)

        try:
            await self.db.flush()
        except IntegrityError:
            log.warning(f"Email change for teacher {teacher_id} hit the unique email constraint.")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Another teacher with this email already exists"
            )
        return teacher_models.TeacherRead.model_validate(teacher_to_update)

    async def delete_teacher(self, teacher_id: UUID) -> bool:
        """
        Deletes a teacher and sweeps the references to it:
        - batches taught by the teacher keep existing, unassigned;
        - students keep existing, with the teacher removed from their list.
        All of it happens in the request's transaction.
        """
        log.info(f"Attempting to delete teacher {teacher_id}.")

        teacher_to_delete = await self.get_teacher(teacher_id)

        await self.db.delete(teacher_to_delete)
        await self.db.flush()

        batches_result = await self.db.execute(
            update(db_models.Batches)
            .where(db_models.Batches.teacher_id == teacher_id)
            .values(teacher_id=None)
        )
        students_result = await self.db.execute(
            delete(db_models.t_student_teachers)
            .where(db_models.t_student_teachers.c.teacher_id == teacher_id)
        )
        await self.db.flush()

        log.info(
            f"Deleted teacher {teacher_id}; unassigned {batches_result.rowcount} batches, "
            f"detached from {students_result.rowcount} students."
        )
        return True
