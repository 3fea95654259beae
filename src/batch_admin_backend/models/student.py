'''
Request and response models for students and their sales.
'''
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field

from ..database.db_enums import SaleStatusEnum
from .teacher import CamelModel, Money, WriteModel


class StudentCreate(WriteModel):
    name: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    teachers: list[UUID] = Field(default_factory=list)


class StudentRead(CamelModel):
    """`teachers` lists the ids of the student's teachers."""
    id: UUID
    name: str
    email: Optional[str] = None
    teachers: list[UUID] = Field(default_factory=list)
    created_at: Optional[datetime] = None


class SaleCreate(WriteModel):
    """Only completed sales count toward a teacher's earnings."""
    student: UUID
    amount: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    status: SaleStatusEnum = SaleStatusEnum.PENDING


class SaleStatusUpdate(WriteModel):
    status: SaleStatusEnum


class SaleRead(CamelModel):
    id: UUID
    student: UUID
    amount: Money
    status: SaleStatusEnum
    created_at: Optional[datetime] = None
