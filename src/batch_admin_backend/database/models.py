from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Enum, ForeignKeyConstraint, Index, Integer, JSON, Numeric, PrimaryKeyConstraint, String, Table, Text, UniqueConstraint, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
import datetime
import decimal
import uuid

from .db_enums import UserRole, TeacherStatusEnum, SaleStatusEnum

# JSONB on postgres, plain JSON everywhere else (sqlite in tests)
JSONList = JSON().with_variant(JSONB(), 'postgresql')


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class Base(DeclarativeBase):
    pass


t_student_teachers = Table(
    'student_teachers', Base.metadata,
    Column('student_id', Uuid, primary_key=True, nullable=False),
    Column('teacher_id', Uuid, primary_key=True, nullable=False),
    ForeignKeyConstraint(['student_id'], ['students.id'], ondelete='CASCADE', name='student_teachers_student_id_fkey'),
    ForeignKeyConstraint(['teacher_id'], ['teachers.id'], ondelete='CASCADE', name='student_teachers_teacher_id_fkey'),
    PrimaryKeyConstraint('student_id', 'teacher_id', name='student_teachers_pkey'),
    Index('idx_student_teachers_teacher_id', 'teacher_id')
)


class Users(Base):
    __tablename__ = 'users'
    __table_args__ = (
        PrimaryKeyConstraint('id', name='users_pkey'),
        UniqueConstraint('email', name='users_email_key')
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text)
    email: Mapped[str] = mapped_column(String(255))
    password: Mapped[str] = mapped_column(String(255))
    role: Mapped[str] = mapped_column(Enum(*UserRole.get_all_names(), name='user_role'))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    __mapper_args__ = {'polymorphic_on': 'role'}


class Admins(Users):
    __mapper_args__ = {'polymorphic_identity': UserRole.ADMIN.value}


class Mentors(Users):
    __mapper_args__ = {'polymorphic_identity': UserRole.MENTOR.value}


class Teachers(Users):
    __tablename__ = 'teachers'
    __table_args__ = (
        ForeignKeyConstraint(['id'], ['users.id'], ondelete='CASCADE', name='teachers_id_fkey'),
        PrimaryKeyConstraint('id', name='teachers_pkey')
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    phone: Mapped[str] = mapped_column(Text)
    specialization: Mapped[Optional[str]] = mapped_column(Text)
    status: Mapped[str] = mapped_column(Enum(*TeacherStatusEnum.get_all_names(), name='teacher_status_enum'), default=TeacherStatusEnum.ACTIVE.value)
    total_earnings: Mapped[decimal.Decimal] = mapped_column(Numeric(10, 2), default=decimal.Decimal('0.00'))
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(True), default=utc_now)

    # loading through Users must bring the teacher columns along (no async lazy loads)
    __mapper_args__ = {'polymorphic_identity': UserRole.TEACHER.value, 'polymorphic_load': 'inline'}


class Students(Base):
    __tablename__ = 'students'
    __table_args__ = (
        PrimaryKeyConstraint('id', name='students_pkey'),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text)
    email: Mapped[Optional[str]] = mapped_column(String(255))
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(True), default=utc_now)

    # one-directional: deleting a teacher never loads or touches this collection
    teachers: Mapped[list['Teachers']] = relationship('Teachers', secondary=t_student_teachers)
    sales: Mapped[list['Sales']] = relationship('Sales', back_populates='student', passive_deletes=True)


class Batches(Base):
    __tablename__ = 'batches'
    __table_args__ = (
        CheckConstraint('total_students >= 0', name='batches_total_students_check'),
        CheckConstraint('revenue >= 0', name='batches_revenue_check'),
        ForeignKeyConstraint(['teacher_id'], ['teachers.id'], ondelete='SET NULL', name='batches_teacher_id_fkey'),
        PrimaryKeyConstraint('id', name='batches_pkey'),
        Index('idx_batches_teacher_id', 'teacher_id')
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    batch_name: Mapped[str] = mapped_column(Text)
    start_date: Mapped[datetime.datetime] = mapped_column(DateTime(True))
    end_date: Mapped[datetime.datetime] = mapped_column(DateTime(True))
    schedule_days: Mapped[list] = mapped_column(JSONList, default=list)
    session_time: Mapped[Optional[str]] = mapped_column(Text)
    session_topic: Mapped[list] = mapped_column(JSONList, default=list)
    total_students: Mapped[int] = mapped_column(Integer, default=0)
    revenue: Mapped[decimal.Decimal] = mapped_column(Numeric(10, 2), default=decimal.Decimal('0.00'))
    teacher_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid)
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(True), default=utc_now)

    teacher: Mapped[Optional['Teachers']] = relationship('Teachers')


class Sales(Base):
    __tablename__ = 'sales'
    __table_args__ = (
        CheckConstraint('amount >= 0', name='sales_amount_check'),
        ForeignKeyConstraint(['student_id'], ['students.id'], ondelete='CASCADE', name='sales_student_id_fkey'),
        PrimaryKeyConstraint('id', name='sales_pkey'),
        Index('idx_sales_student_status', 'student_id', 'status')
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id: Mapped[uuid.UUID] = mapped_column(Uuid)
    amount: Mapped[decimal.Decimal] = mapped_column(Numeric(10, 2))
    status: Mapped[str] = mapped_column(Enum(*SaleStatusEnum.get_all_names(), name='sale_status_enum'), default=SaleStatusEnum.PENDING.value)
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(True), default=utc_now)

    student: Mapped['Students'] = relationship('Students', back_populates='sales')
