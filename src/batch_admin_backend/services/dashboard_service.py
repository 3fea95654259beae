'''

'''
from decimal import Decimal
from typing import Annotated
from fastapi import Depends, HTTPException, status
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.engine import get_db_session
from ..database import models as db_models
from ..database.db_enums import UserRole, BatchStatusEnum
from ..models import dashboard as dashboard_models
from ..models import teacher as teacher_models
from ..common.logger import log
from .batch_service import BatchService


class DashboardService:
    """
    Builds the dashboard of the signed-in user.
    - Teacher: own batches, own earnings, students taught.
    - Mentor: every batch, all teachers' earnings combined, every student.
    """
    def __init__(
        self,
        db: Annotated[AsyncSession, Depends(get_db_session)],
        batch_service: Annotated[BatchService, Depends(BatchService)]
    ):
        self.db = db
        self.batch_service = batch_service

    async def _count_students(self, teacher_id=None) -> int:
        if teacher_id is None:
            stmt = select(func.count()).select_from(db_models.Students)
        else:
            stmt = select(func.count()).select_from(db_models.t_student_teachers).where(
                db_models.t_student_teachers.c.teacher_id == teacher_id
            )
        return (await self.db.execute(stmt)).scalar_one()

    async def _sum_earnings(self) -> Decimal:
        stmt = select(func.coalesce(func.sum(db_models.Teachers.total_earnings), 0))
        total = (await self.db.execute(stmt)).scalar_one()
        return Decimal(str(total))

    async def get_dashboard(self, current_user: db_models.Users) -> dashboard_models.DashboardRead:
        log.info(f"Building dashboard for user {current_user.id} (Role: {current_user.role}).")

        if current_user.role == UserRole.TEACHER.value:
            batches = await self.batch_service.get_all_batches_for_api(teacher_id=current_user.id)
            teacher = teacher_models.TeacherRead.model_validate(current_user)
            total_earnings = current_user.total_earnings
            total_students = await self._count_students(current_user.id)
        elif current_user.role == UserRole.MENTOR.value:
            batches = await self.batch_service.get_all_batches_for_api()
            teacher = None
            total_earnings = await self._sum_earnings()
            total_students = await self._count_students()
        else:
            log.warning(f"User {current_user.id} with role {current_user.role} has no dashboard.")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to view this resource."
            )

        counts = {state.value: 0 for state in BatchStatusEnum}
        for batch in batches:
            counts[batch.status.value] += 1

        return dashboard_models.DashboardRead(
            role=current_user.role,
            teacher=teacher,
            total_earnings=total_earnings,
            total_students=total_students,
            batch_counts=dashboard_models.BatchStatusCounts(**counts),
            batches=batches
        )
