'''

'''
from datetime import datetime
from typing import Optional, Annotated
from uuid import UUID
from fastapi import Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..database.engine import get_db_session
from ..database import models as db_models
from ..database.db_enums import BatchStatusEnum
from ..models import batch as batch_models
from ..core.batch_lifecycle import derive_status, ensure_valid_window, to_utc_instant
from ..core.revenue import allocate, round2
from ..common.exceptions import InvalidBatchDatesError
from ..common.logger import log


class BatchService:
    """
    Service for managing batches. Every batch leaving this service is
    projected with its derived status and revenue shares.
    """
    def __init__(self, db: Annotated[AsyncSession, Depends(get_db_session)]):
        self.db = db

    # --- 1. Internal Helpers ---

    async def _get_batch_by_id_internal(self, batch_id: UUID) -> db_models.Batches:
        log.info(f"Internal fetch for batch by ID: {batch_id}")
        stmt = select(db_models.Batches).options(
            selectinload(db_models.Batches.teacher)
        ).filter(db_models.Batches.id == batch_id)

        result = await self.db.execute(stmt)
        batch = result.scalars().first()
        if not batch:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Batch not found")
        return batch

    async def _resolve_teacher(self, teacher_id: Optional[UUID]) -> Optional[db_models.Teachers]:
        """Returns the teacher to assign, or None when the batch is unassigned."""
        if teacher_id is None:
            return None
        teacher = await self.db.get(db_models.Teachers, teacher_id)
        if teacher is None:
            log.warning(f"Batch references unknown teacher {teacher_id}.")
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Teacher not found")
        return teacher

    def _format_batch_for_api(self, batch: db_models.Batches, now: Optional[datetime] = None) -> batch_models.BatchRead:
        shares = allocate(batch.revenue)
        return batch_models.BatchRead(
            id=batch.id,
            batch_name=batch.batch_name,
            teacher=batch.teacher_id,
            teacher_name=batch.teacher.name if batch.teacher else None,
            start_date=to_utc_instant(batch.start_date),
            end_date=to_utc_instant(batch.end_date),
            schedule_days=batch.schedule_days or [],
            session_time=batch.session_time,
            session_topic=batch.session_topic or [],
            total_students=batch.total_students,
            revenue=round2(batch.revenue or 0),
            status=derive_status(batch.start_date, batch.end_date, now),
            teacher_share=shares.teacher_share,
            platform_share=shares.platform_share
        )

    # --- 2. Read Methods ---

    async def get_all_batches_orm(
        self,
        search: Optional[str] = None,
        teacher_id: Optional[UUID] = None
    ) -> list[db_models.Batches]:
        """
        Fetches batch ORM objects, newest start date first.
        Optionally narrowed to one teacher and to names containing `search`.
        """
        stmt = select(db_models.Batches).options(
            selectinload(db_models.Batches.teacher)
        ).order_by(db_models.Batches.start_date.desc())

        if search:
            stmt = stmt.filter(db_models.Batches.batch_name.icontains(search, autoescape=True))
        if teacher_id is not None:
            stmt = stmt.filter(db_models.Batches.teacher_id == teacher_id)

        try:
            result = await self.db.execute(stmt)
            return list(result.scalars().all())
        except Exception as e:
            log.error(f"Database error in get_all_batches_orm: {e}", exc_info=True)
            raise

    async def get_all_batches_for_api(
        self,
        search: Optional[str] = None,
        status_filter: Optional[BatchStatusEnum] = None,
        teacher_id: Optional[UUID] = None,
        now: Optional[datetime] = None
    ) -> list[batch_models.BatchRead]:
        """
        Lists batches with their projection. Status is derived, so the
        status filter is applied after projecting.
        """
        log.info(f"Listing batches (search={search!r}, status={status_filter}, teacher={teacher_id}).")
        batches = await self.get_all_batches_orm(search=search, teacher_id=teacher_id)
        projected = [self._format_batch_for_api(batch, now) for batch in batches]
        if status_filter is not None:
            projected = [batch for batch in projected if batch.status == status_filter]
        return projected

    async def get_batch_by_id_for_api(self, batch_id: UUID) -> batch_models.BatchRead:
        batch = await self._get_batch_by_id_internal(batch_id)
        return self._format_batch_for_api(batch)

    # --- 3. Write Methods ---

    async def create_batch(self, batch_data: batch_models.BatchCreate) -> batch_models.BatchRead:
        """
        Creates a batch. An assigned teacher must exist.
        """
        log.info(f"Attempting to create batch '{batch_data.batch_name}'.")
        teacher = await self._resolve_teacher(batch_data.teacher)

        new_batch = db_models.Batches(
            batch_name=batch_data.batch_name,
            teacher=teacher,
            start_date=batch_data.start_date,
            end_date=batch_data.end_date,
            schedule_days=[day.value for day in batch_data.schedule_days],
            session_time=batch_data.session_time,
            session_topic=list(batch_data.session_topic),
            total_students=batch_data.total_students,
            revenue=batch_data.revenue
        )
        self.db.add(new_batch)
        await self.db.flush()

        log.info(f"Created batch {new_batch.id}.")
        return self._format_batch_for_api(new_batch)

    async def update_batch(self, batch_id: UUID, update_data: batch_models.BatchUpdate) -> batch_models.BatchRead:
        """
        Updates the fields sent. The date window is checked on the merged
        (stored + incoming) dates. Sending `teacher: null` unassigns the batch.
        """
        log.info(f"Attempting to update batch {batch_id}.")
        batch = await self._get_batch_by_id_internal(batch_id)
        update_dict = update_data.model_dump(exclude_unset=True)

        start_date = update_dict.get("start_date") or batch.start_date
        end_date = update_dict.get("end_date") or batch.end_date
        try:
            ensure_valid_window(start_date, end_date)
        except InvalidBatchDatesError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        if "teacher" in update_dict:
            batch.teacher = await self._resolve_teacher(update_dict.pop("teacher"))

        for key, value in update_dict.items():
            if value is None:
                continue
            if key == "schedule_days":
                value = [day.value if hasattr(day, "value") else day for day in value]
            setattr(batch, key, value)

        await self.db.flush()
        return self._format_batch_for_api(batch)

    async def delete_batch(self, batch_id: UUID) -> bool:
        log.info(f"Attempting to delete batch {batch_id}.")
        batch = await self._get_batch_by_id_internal(batch_id)
        await self.db.delete(batch)
        await self.db.flush()
        log.info(f"Deleted batch {batch_id}.")
        return True
