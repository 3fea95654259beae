'''
Recomputes and persists teacher earnings from the completed sales of their students.
'''
from decimal import Decimal
from typing import Annotated
from uuid import UUID
from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.engine import get_db_session
from ..database import models as db_models
from ..database.db_enums import SaleStatusEnum
from ..common.exceptions import TeacherNotFoundError
from ..common.logger import log
from ..core.revenue import teacher_earnings_from_sales


class EarningsService:
    """
    Materialises Teacher.total_earnings.

    A full recompute walks teacher -> students -> completed sales, so the
    listing endpoint that calls recompute_all_earnings costs
    O(teachers x students x sales). Concurrent recomputes of the same
    teacher race and the last write wins.
    """
    def __init__(self, db: Annotated[AsyncSession, Depends(get_db_session)]):
        self.db = db

    async def _student_ids_for_teacher(self, teacher_id: UUID) -> list[UUID]:
        stmt = select(db_models.t_student_teachers.c.student_id).where(
            db_models.t_student_teachers.c.teacher_id == teacher_id
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _completed_sale_amounts(self, student_ids: list[UUID]) -> list[Decimal]:
        if not student_ids:
            return []
        stmt = select(db_models.Sales.amount).where(
            db_models.Sales.student_id.in_(student_ids),
            db_models.Sales.status == SaleStatusEnum.COMPLETED.value
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _recompute(self, teacher: db_models.Teachers) -> Decimal:
        student_ids = await self._student_ids_for_teacher(teacher.id)
        amounts = await self._completed_sale_amounts(student_ids)
        total = teacher_earnings_from_sales(amounts)

        teacher.total_earnings = total
        await self.db.flush()
        log.info(f"Teacher {teacher.id}: {len(amounts)} completed sales across {len(student_ids)} students -> earnings {total}.")
        return total

    async def recompute_teacher_earnings(self, teacher_id: UUID) -> Decimal:
        """
        Recomputes one teacher's total earnings and persists it.
        Raises TeacherNotFoundError for an unknown teacher.
        """
        teacher = await self.db.get(db_models.Teachers, teacher_id)
        if teacher is None:
            raise TeacherNotFoundError(f"Teacher {teacher_id} not found.")
        return await self._recompute(teacher)

    async def recompute_all_earnings(self) -> None:
        """
        Recomputes every teacher in turn. The first failure propagates and
        aborts the whole run.
        """
        result = await self.db.execute(select(db_models.Teachers))
        teachers = result.scalars().all()
        log.info(f"Recomputing earnings for {len(teachers)} teachers.")
        for teacher in teachers:
            await self._recompute(teacher)

    async def recompute_for_student(self, student_id: UUID) -> dict[UUID, Decimal]:
        """
        Recomputes every teacher of one student. Called whenever one of the
        student's sales is created or changes status.
        """
        stmt = select(db_models.t_student_teachers.c.teacher_id).where(
            db_models.t_student_teachers.c.student_id == student_id
        )
        teacher_ids = (await self.db.execute(stmt)).scalars().all()
        updated = {}
        for teacher_id in teacher_ids:
            updated[teacher_id] = await self.recompute_teacher_earnings(teacher_id)
        return updated
