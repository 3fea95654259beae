# In models/teacher.py

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from ..database.db_enums import UserRole, TeacherStatusEnum


# Money is kept as Decimal in Python and sent as a JSON number.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """
    Base for every API model: camelCase on the wire, snake_case in Python.
    """
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True
    )


class WriteModel(CamelModel):
    """Request bodies reject any field they do not declare."""
    model_config = ConfigDict(extra='forbid')


# --- Read Models ---

class UserRead(CamelModel):
    """
    Base Pydantic model for reading user data.
    Corresponds to the db_models.Users ORM model.
    """
    id: UUID
    name: str
    email: str
    role: UserRole


class TeacherRead(UserRead):
    """
    Pydantic model for reading a Teacher.
    total_earnings is the value persisted by the last earnings recompute.
    """
    phone: str
    specialization: Optional[str] = None
    status: TeacherStatusEnum
    total_earnings: Money
    created_at: Optional[datetime] = None


# --- Write Models ---

class TeacherCreate(WriteModel):
    """
    Body of POST /api/teachers. Role is always Teacher and is not accepted.
    """
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=1)
    specialization: Optional[str] = None
    status: TeacherStatusEnum = TeacherStatusEnum.ACTIVE
    password: str = Field(..., min_length=1)


class TeacherUpdate(WriteModel):
    """
    Body of PUT /api/teachers/{id}. Only the fields sent are changed.
    """
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1)
    specialization: Optional[str] = None
    status: Optional[TeacherStatusEnum] = None


class MessageResponse(BaseModel):
    message: str
