'''
Students and their sales. Both are the records the earnings recompute walks,
so every sale write refreshes the earnings of the student's teachers.
'''
from typing import Optional, Annotated
from uuid import UUID
from fastapi import Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..database.engine import get_db_session
from ..database import models as db_models
from ..database.db_enums import SaleStatusEnum
from ..models import student as student_models
from ..common.logger import log
from .user_service import UserService
from .earnings_service import EarningsService


class StudentService:
    def __init__(
        self,
        db: Annotated[AsyncSession, Depends(get_db_session)],
        user_service: Annotated[UserService, Depends(UserService)]
    ):
        self.db = db
        self.user_service = user_service

    def _format_student_for_api(self, student: db_models.Students) -> student_models.StudentRead:
        return student_models.StudentRead(
            id=student.id,
            name=student.name,
            email=student.email,
            teachers=[teacher.id for teacher in student.teachers],
            created_at=student.created_at
        )

    async def _get_student_by_id_internal(self, student_id: UUID) -> db_models.Students:
        stmt = select(db_models.Students).options(
            selectinload(db_models.Students.teachers)
        ).filter(db_models.Students.id == student_id)
        result = await self.db.execute(stmt)
        student = result.scalars().first()
        if not student:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
        return student

    async def create_student(self, student_data: student_models.StudentCreate) -> student_models.StudentRead:
        """
        Creates a student linked to the given teachers.
        Every listed teacher must exist.
        """
        log.info(f"Attempting to create student '{student_data.name}' with {len(student_data.teachers)} teachers.")
        wanted_ids = set(student_data.teachers)
        teachers = await self.user_service.get_teachers_by_ids(list(wanted_ids))

        missing = wanted_ids - {teacher.id for teacher in teachers}
        if missing:
            log.warning(f"Student creation references unknown teachers: {missing}")
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Teacher not found")

        new_student = db_models.Students(
            name=student_data.name,
            email=student_data.email,
            teachers=teachers
        )
        self.db.add(new_student)
        await self.db.flush()

        log.info(f"Created student {new_student.id}.")
        return self._format_student_for_api(new_student)

    async def get_all_students_for_api(self) -> list[student_models.StudentRead]:
        stmt = select(db_models.Students).options(
            selectinload(db_models.Students.teachers)
        ).order_by(db_models.Students.name)
        result = await self.db.execute(stmt)
        return [self._format_student_for_api(student) for student in result.scalars().all()]

    async def get_student_by_id_for_api(self, student_id: UUID) -> student_models.StudentRead:
        student = await self._get_student_by_id_internal(student_id)
        return self._format_student_for_api(student)


class SaleService:
    """
    Records sales. Creating a sale or changing its status recomputes the
    earnings of every teacher of the sale's student.
    """
    def __init__(
        self,
        db: Annotated[AsyncSession, Depends(get_db_session)],
        earnings_service: Annotated[EarningsService, Depends(EarningsService)]
    ):
        self.db = db
        self.earnings_service = earnings_service

    def _format_sale_for_api(self, sale: db_models.Sales) -> student_models.SaleRead:
        return student_models.SaleRead(
            id=sale.id,
            student=sale.student_id,
            amount=sale.amount,
            status=sale.status,
            created_at=sale.created_at
        )

    async def create_sale(self, sale_data: student_models.SaleCreate) -> student_models.SaleRead:
        log.info(f"Recording a {sale_data.status.value} sale of {sale_data.amount} for student {sale_data.student}.")
        student = await self.db.get(db_models.Students, sale_data.student)
        if student is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")

        new_sale = db_models.Sales(
            student_id=student.id,
            amount=sale_data.amount,
            status=sale_data.status.value
        )
        self.db.add(new_sale)
        await self.db.flush()

        await self.earnings_service.recompute_for_student(student.id)
        return self._format_sale_for_api(new_sale)

    async def get_all_sales_for_api(
        self,
        student_id: Optional[UUID] = None,
        status_filter: Optional[SaleStatusEnum] = None
    ) -> list[student_models.SaleRead]:
        stmt = select(db_models.Sales).order_by(db_models.Sales.created_at)
        if student_id is not None:
            stmt = stmt.filter(db_models.Sales.student_id == student_id)
        if status_filter is not None:
            stmt = stmt.filter(db_models.Sales.status == status_filter.value)
        result = await self.db.execute(stmt)
        return [self._format_sale_for_api(sale) for sale in result.scalars().all()]

    async def update_sale_status(
        self,
        sale_id: UUID,
        update_data: student_models.SaleStatusUpdate
    ) -> student_models.SaleRead:
        """Changes a sale's status and refreshes the affected earnings."""
        sale = await self.db.get(db_models.Sales, sale_id)
        if sale is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sale not found")

        log.info(f"Sale {sale_id}: {sale.status} -> {update_data.status.value}.")
        sale.status = update_data.status.value
        await self.db.flush()

        await self.earnings_service.recompute_for_student(sale.student_id)
        return self._format_sale_for_api(sale)
