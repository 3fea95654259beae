import pytest
from uuid import uuid4
from decimal import Decimal
from fastapi import HTTPException
from sqlalchemy import select, func

from batch_admin_backend.database import models as db_models
from batch_admin_backend.database.db_enums import UserRole, TeacherStatusEnum
from batch_admin_backend.services.teacher_service import TeacherService
from batch_admin_backend.models import teacher as teacher_models
from batch_admin_backend.common.security_utils import HashedPassword


@pytest.mark.anyio
class TestTeacherServiceRead:

    async def test_get_all_recomputes_earnings(
        self,
        teacher_service: TeacherService,
        earnings_scenario: dict
    ):
        teachers = await teacher_service.get_all()

        assert len(teachers) == 1
        assert teachers[0].id == earnings_scenario["teacher"].id
        assert teachers[0].total_earnings == Decimal("24.00")

    async def test_listing_twice_gives_identical_earnings(
        self,
        teacher_service: TeacherService,
        earnings_scenario: dict,
        test_other_teacher_orm: db_models.Teachers
    ):
        first = {t.id: t.total_earnings for t in await teacher_service.get_all()}
        second = {t.id: t.total_earnings for t in await teacher_service.get_all()}

        assert first == second
        assert first[test_other_teacher_orm.id] == Decimal("0.00")

    async def test_get_all_is_ordered_by_name(
        self,
        teacher_service: TeacherService,
        test_teacher_orm: db_models.Teachers,
        test_other_teacher_orm: db_models.Teachers
    ):
        names = [t.name for t in await teacher_service.get_all()]
        assert names == ["Alice Teacher", "Bob Teacher"]

    async def test_get_teacher_not_found(self, teacher_service: TeacherService):
        with pytest.raises(HTTPException) as e:
            await teacher_service.get_teacher(uuid4())
        assert e.value.status_code == 404
        assert e.value.detail == "Teacher not found"


@pytest.mark.anyio
class TestTeacherServiceWrite:

    async def test_create_teacher(self, db_session, teacher_service: TeacherService):
        teacher_data = teacher_models.TeacherCreate(
            name="Carol Teacher",
            email="carol@example.com",
            phone="+1-555-000-1111",
            specialization="Chemistry",
            password="s3cret"
        )

        created = await teacher_service.create_teacher(teacher_data)

        assert created.role == UserRole.TEACHER
        assert created.status == TeacherStatusEnum.ACTIVE
        assert created.total_earnings == Decimal("0.00")

        stored = await db_session.get(db_models.Teachers, created.id)
        assert stored.password != "s3cret"
        assert HashedPassword.verify("s3cret", stored.password)

    async def test_create_duplicate_email_rejected(
        self,
        db_session,
        teacher_service: TeacherService,
        test_teacher_orm: db_models.Teachers
    ):
        teacher_data = teacher_models.TeacherCreate(
            name="Impostor",
            email=test_teacher_orm.email,
            phone="+1-555-000-2222",
            password="whatever"
        )

        with pytest.raises(HTTPException) as e:
            await teacher_service.create_teacher(teacher_data)
        assert e.value.status_code == 400
        assert e.value.detail == "Teacher with this email already exists"

        count = (await db_session.execute(
            select(func.count()).select_from(db_models.Users).filter(db_models.Users.email == test_teacher_orm.email)
        )).scalar_one()
        assert count == 1

    async def test_update_teacher_partial(
        self,
        teacher_service: TeacherService,
        test_teacher_orm: db_models.Teachers
    ):
        updated = await teacher_service.update_teacher(
            test_teacher_orm.id,
            teacher_models.TeacherUpdate(specialization="Statistics", status=TeacherStatusEnum.INACTIVE)
        )

        assert updated.specialization == "Statistics"
        assert updated.status == TeacherStatusEnum.INACTIVE
        assert updated.name == "Alice Teacher"

    async def test_update_teacher_email_conflict(
        self,
        teacher_service: TeacherService,
        test_teacher_orm: db_models.Teachers,
        test_other_teacher_orm: db_models.Teachers
    ):
        with pytest.raises(HTTPException) as e:
            await teacher_service.update_teacher(
                test_teacher_orm.id,
                teacher_models.TeacherUpdate(email=test_other_teacher_orm.email)
            )
        assert e.value.status_code == 400
        assert e.value.detail == "Another teacher with this email already exists"

    async def test_update_teacher_unique_constraint_is_a_conflict(
        self,
        monkeypatch,
        teacher_service: TeacherService,
        test_teacher_orm: db_models.Teachers,
        test_other_teacher_orm: db_models.Teachers
    ):
        async def email_free(email, exclude_user_id=None):
            return False

        monkeypatch.setattr(teacher_service, "email_in_use", email_free)

        with pytest.raises(HTTPException) as e:
            await teacher_service.update_teacher(
                test_teacher_orm.id,
                teacher_models.TeacherUpdate(email=test_other_teacher_orm.email)
            )
        assert e.value.status_code == 400
        assert e.value.detail == "Another teacher with this email already exists"

    async def test_update_teacher_keeping_own_email(
        self,
        teacher_service: TeacherService,
        test_teacher_orm: db_models.Teachers
    ):
        updated = await teacher_service.update_teacher(
            test_teacher_orm.id,
            teacher_models.TeacherUpdate(email=test_teacher_orm.email, phone="+1-555-999-0000")
        )
        assert updated.phone == "+1-555-999-0000"


@pytest.mark.anyio
class TestTeacherServiceDelete:

    async def test_delete_sweeps_batches_and_students(
        self,
        db_session,
        teacher_service: TeacherService,
        earnings_scenario: dict,
        teacher_batches: dict
    ):
        teacher_id = earnings_scenario["teacher"].id

        assert await teacher_service.delete_teacher(teacher_id) is True

        batch_teacher_ids = (await db_session.execute(select(db_models.Batches.teacher_id))).scalars().all()
        assert len(batch_teacher_ids) == 3
        assert all(tid is None for tid in batch_teacher_ids)

        links = (await db_session.execute(
            select(func.count()).select_from(db_models.t_student_teachers)
            .where(db_models.t_student_teachers.c.teacher_id == teacher_id)
        )).scalar_one()
        assert links == 0

        students = (await db_session.execute(select(func.count()).select_from(db_models.Students))).scalar_one()
        assert students == 2

        remaining = (await db_session.execute(
            select(db_models.Users.id).filter(db_models.Users.id == teacher_id)
        )).scalars().first()
        assert remaining is None

    async def test_delete_keeps_other_teachers_links(
        self,
        db_session,
        teacher_service: TeacherService,
        test_teacher_orm: db_models.Teachers,
        test_other_teacher_orm: db_models.Teachers
    ):
        from tests.database import factories
        student = factories.StudentFactory(teachers=[test_teacher_orm, test_other_teacher_orm])
        await db_session.flush()

        await teacher_service.delete_teacher(test_teacher_orm.id)

        teacher_ids = (await db_session.execute(
            select(db_models.t_student_teachers.c.teacher_id)
            .where(db_models.t_student_teachers.c.student_id == student.id)
        )).scalars().all()
        assert teacher_ids == [test_other_teacher_orm.id]

    async def test_second_delete_is_not_found(
        self,
        teacher_service: TeacherService,
        test_teacher_orm: db_models.Teachers
    ):
        await teacher_service.delete_teacher(test_teacher_orm.id)

        with pytest.raises(HTTPException) as e:
            await teacher_service.delete_teacher(test_teacher_orm.id)
        assert e.value.status_code == 404

    async def test_delete_unknown_changes_nothing(
        self,
        db_session,
        teacher_service: TeacherService,
        teacher_batches: dict
    ):
        with pytest.raises(HTTPException) as e:
            await teacher_service.delete_teacher(uuid4())
        assert e.value.status_code == 404

        batch_teacher_ids = (await db_session.execute(select(db_models.Batches.teacher_id))).scalars().all()
        assert all(tid is not None for tid in batch_teacher_ids)
