'''
Request and response models for batches.
'''
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from ..core.batch_lifecycle import to_utc_instant, split_session_topics, ensure_valid_window
from ..database.db_enums import BatchStatusEnum, WeekdayEnum
from .teacher import CamelModel, Money, WriteModel


class _BatchWriteBase(WriteModel):
    """Normalisation shared by the create and update bodies."""

    @field_validator('start_date', 'end_date', mode='before', check_fields=False)
    @classmethod
    def normalise_instant(cls, value):
        if value is None or value == "":
            return None
        try:
            return to_utc_instant(value)
        except (TypeError, ValueError):
            # let pydantic report the original value
            return value

    @field_validator('session_topic', mode='before', check_fields=False)
    @classmethod
    def split_topics(cls, value):
        if value is None:
            return value
        return split_session_topics(value)


class BatchCreate(_BatchWriteBase):
    """
    Body of POST /api/batches.
    `teacher` is the id of the assigned teacher.
    `sessionTopic` may be newline-joined text or a list of strings.
    """
    batch_name: str = Field(..., min_length=1)
    teacher: Optional[UUID] = None
    start_date: datetime
    end_date: datetime
    schedule_days: list[WeekdayEnum] = Field(default_factory=list)
    session_time: Optional[str] = None
    session_topic: list[str] = Field(default_factory=list)
    total_students: int = Field(0, ge=0)
    revenue: Decimal = Field(Decimal("0"), ge=0, max_digits=10, decimal_places=2)

    @model_validator(mode='after')
    def check_window(self):
        ensure_valid_window(self.start_date, self.end_date)
        return self


class BatchUpdate(_BatchWriteBase):
    """
    Body of PUT /api/batches/{id}. Only the fields sent are changed;
    the date window is re-checked against the stored dates by the service.
    """
    batch_name: Optional[str] = Field(None, min_length=1)
    teacher: Optional[UUID] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    schedule_days: Optional[list[WeekdayEnum]] = None
    session_time: Optional[str] = None
    session_topic: Optional[list[str]] = None
    total_students: Optional[int] = Field(None, ge=0)
    revenue: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)

    @model_validator(mode='after')
    def check_window(self):
        if self.start_date is not None and self.end_date is not None:
            ensure_valid_window(self.start_date, self.end_date)
        return self


class BatchRead(CamelModel):
    """
    A batch as returned by the API, with its derived status and revenue shares.
    None of status / teacher_share / platform_share is stored.
    """
    id: UUID
    batch_name: str
    teacher: Optional[UUID] = None
    teacher_name: Optional[str] = None
    start_date: datetime
    end_date: datetime
    schedule_days: list[WeekdayEnum] = Field(default_factory=list)
    session_time: Optional[str] = None
    session_topic: list[str] = Field(default_factory=list)
    total_students: int
    revenue: Money
    status: BatchStatusEnum
    teacher_share: Money
    platform_share: Money
