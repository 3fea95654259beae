'''
Response model of GET /api/teachers/dashboard.
'''
from typing import Optional

from pydantic import Field

from ..database.db_enums import UserRole
from .batch import BatchRead
from .teacher import CamelModel, Money, TeacherRead


class BatchStatusCounts(CamelModel):
    upcoming: int = 0
    ongoing: int = 0
    completed: int = 0


class DashboardRead(CamelModel):
    """
    A teacher sees their own batches and earnings.
    A mentor sees every batch and the earnings of all teachers combined.
    """
    role: UserRole
    teacher: Optional[TeacherRead] = None
    total_earnings: Money
    total_students: int
    batch_counts: BatchStatusCounts
    batches: list[BatchRead] = Field(default_factory=list)
