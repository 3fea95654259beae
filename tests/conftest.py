'''
Pytest configuration for the FastAPI application.

This file sets up fixtures for:
1. Forcing the application into TEST_MODE before any app code is imported.
2. A fresh in-memory sqlite database per test.
3. An httpx AsyncClient driving the app, with `get_db_session` overridden.
4. Instances of all service classes, pre-injected with the test session.
5. Seed records built with the factories in tests/database/factories.py.
'''
import os

# must happen before the settings object is created on first import
os.environ["TEST_MODE"] = "True"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ["DATABASE_URL_TEST"] = "sqlite+aiosqlite:///:memory:"

import pytest
from typing import AsyncGenerator
from decimal import Decimal

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker, AsyncEngine
from sqlalchemy.pool import StaticPool

from batch_admin_backend.main import app
from batch_admin_backend.common.config import settings
from batch_admin_backend.database.engine import get_db_session
from batch_admin_backend.database import models as db_models
from batch_admin_backend.database.db_enums import SaleStatusEnum
from batch_admin_backend.services.user_service import UserService
from batch_admin_backend.services.earnings_service import EarningsService
from batch_admin_backend.services.teacher_service import TeacherService
from batch_admin_backend.services.batch_service import BatchService
from batch_admin_backend.services.student_service import StudentService, SaleService
from batch_admin_backend.services.dashboard_service import DashboardService
from tests.database import factories
from tests.constants import PAST_START, PAST_END, CURRENT_START, CURRENT_END, FUTURE_START, FUTURE_END


@pytest.fixture(scope="session")
def anyio_backend():
    """
    Override the default 'anyio_backend' fixture.
    1. Forces the backend to 'asyncio' (aiosqlite does not run on trio).
    2. Promotes the scope to 'session'.
    """
    return "asyncio"


# --- 1. Database Fixtures ---

@pytest.fixture(scope="function")
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """A brand new in-memory database with every table created."""
    assert settings.TEST_MODE is True, \
        "TEST_MODE was not set to True! Check your .env file or environment."

    engine = create_async_engine(
        settings.DATABASE_URL_TEST,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(db_models.Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture(scope="function")
def session_factory(test_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """
    The session used by service tests and by the data fixtures.
    The factories add their objects to it.
    """
    session = session_factory()
    factories.test_db_session = session
    try:
        yield session
    finally:
        factories.test_db_session = None
        await session.rollback()
        await session.close()


@pytest.fixture(scope="function")
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client bound to the FastAPI app. Every request gets its own
    session that commits on success and rolls back on error, like
    `get_db_session` does in production.
    """
    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        session = session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    app.dependency_overrides[get_db_session] = override_get_db_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


# --- 2. Service Fixtures ---

@pytest.fixture(scope="function")
def user_service(db_session: AsyncSession) -> UserService:
    return UserService(db=db_session)

@pytest.fixture(scope="function")
def earnings_service(db_session: AsyncSession) -> EarningsService:
    return EarningsService(db=db_session)

@pytest.fixture(scope="function")
def teacher_service(db_session: AsyncSession, earnings_service: EarningsService) -> TeacherService:
    return TeacherService(db=db_session, earnings_service=earnings_service)

@pytest.fixture(scope="function")
def batch_service(db_session: AsyncSession) -> BatchService:
    return BatchService(db=db_session)

@pytest.fixture(scope="function")
def batch_service_sync() -> BatchService:
    """For the formatting helpers, which never touch the database."""
    return BatchService(db=None)

@pytest.fixture(scope="function")
def student_service(db_session: AsyncSession, user_service: UserService) -> StudentService:
    return StudentService(db=db_session, user_service=user_service)

@pytest.fixture(scope="function")
def sale_service(db_session: AsyncSession, earnings_service: EarningsService) -> SaleService:
    return SaleService(db=db_session, earnings_service=earnings_service)

@pytest.fixture(scope="function")
def dashboard_service(db_session: AsyncSession, batch_service: BatchService) -> DashboardService:
    return DashboardService(db=db_session, batch_service=batch_service)


# --- 3. Data Fixtures ---
# Committed so that requests made through `client` (other sessions) see them.

@pytest.fixture(scope="function")
async def test_teacher_orm(db_session: AsyncSession) -> db_models.Teachers:
    teacher = factories.TeacherFactory(name="Alice Teacher", specialization="Mathematics")
    await db_session.commit()
    return teacher

@pytest.fixture(scope="function")
async def test_other_teacher_orm(db_session: AsyncSession) -> db_models.Teachers:
    teacher = factories.TeacherFactory(name="Bob Teacher", specialization="Physics")
    await db_session.commit()
    return teacher

@pytest.fixture(scope="function")
async def test_admin_orm(db_session: AsyncSession) -> db_models.Admins:
    admin = factories.AdminFactory()
    await db_session.commit()
    return admin

@pytest.fixture(scope="function")
async def test_mentor_orm(db_session: AsyncSession) -> db_models.Mentors:
    mentor = factories.MentorFactory()
    await db_session.commit()
    return mentor

@pytest.fixture(scope="function")
async def earnings_scenario(db_session: AsyncSession, test_teacher_orm: db_models.Teachers) -> dict:
    """
    One teacher with two students:
    - student A: a completed sale of 50 and a pending sale of 1000,
    - student B: a completed sale of 30.
    The teacher's earnings come to (50 + 30) * 0.30 = 24.00.
    """
    student_a = factories.StudentFactory(name="Student A", teachers=[test_teacher_orm])
    student_b = factories.StudentFactory(name="Student B", teachers=[test_teacher_orm])
    await db_session.flush()

    factories.SaleFactory(student_id=student_a.id, amount=Decimal("50.00"), status=SaleStatusEnum.COMPLETED.value)
    factories.SaleFactory(student_id=student_a.id, amount=Decimal("1000.00"), status=SaleStatusEnum.PENDING.value)
    factories.SaleFactory(student_id=student_b.id, amount=Decimal("30.00"), status=SaleStatusEnum.COMPLETED.value)
    await db_session.commit()

    return {"teacher": test_teacher_orm, "students": [student_a, student_b]}

@pytest.fixture(scope="function")
async def teacher_batches(db_session: AsyncSession, test_teacher_orm: db_models.Teachers) -> dict:
    """One past, one current and one future batch for the test teacher."""
    batches = {
        "past": factories.BatchFactory(batch_name="Python Basics", teacher=test_teacher_orm,
                                       start_date=PAST_START, end_date=PAST_END),
        "current": factories.BatchFactory(batch_name="Advanced Python", teacher=test_teacher_orm,
                                          start_date=CURRENT_START, end_date=CURRENT_END,
                                          revenue=Decimal("250.00")),
        "future": factories.BatchFactory(batch_name="Data Science", teacher=test_teacher_orm,
                                         start_date=FUTURE_START, end_date=FUTURE_END),
    }
    await db_session.commit()
    return batches

