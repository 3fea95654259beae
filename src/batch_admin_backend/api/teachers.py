'''
API endpoints for managing teachers, plus the signed-in teacher's dashboard.
'''
from typing import Annotated
from fastapi import APIRouter, Depends, status, HTTPException

from ..database import models as db_models
from ..database.db_enums import UserRole
from ..models import teacher as teacher_models
from ..models import dashboard as dashboard_models
from ..services.security import require_roles
from ..services.teacher_service import TeacherService
from ..services.dashboard_service import DashboardService
from ..common.logger import log
from .common import to_pydantic_list, parse_record_id


class TeachersAPI:
    """CRUD endpoints for Teacher users."""
    def __init__(self):
        self.router = APIRouter(
                prefix="/teachers",
                tags=["Teachers"])
        self._register_routes()

    def _register_routes(self):
        self.router.add_api_route(
                "",
                self.get_all,
                methods=["GET"],
                response_model=list[teacher_models.TeacherRead])
        self.router.add_api_route(
                "",
                self.create,
                methods=["POST"],
                status_code=status.HTTP_201_CREATED,
                response_model=teacher_models.TeacherRead)
        # must be registered before "/{teacher_id}"
        self.router.add_api_route(
                "/dashboard",
                self.get_dashboard,
                methods=["GET"],
                response_model=dashboard_models.DashboardRead)
        self.router.add_api_route(
                "/{teacher_id}",
                self.get_by_id,
                methods=["GET"],
                response_model=teacher_models.TeacherRead)
        self.router.add_api_route(
                "/{teacher_id}",
                self.update,
                methods=["PUT"],
                response_model=teacher_models.TeacherRead)
        self.router.add_api_route(
                "/{teacher_id}",
                self.delete,
                methods=["DELETE"],
                response_model=teacher_models.MessageResponse)

    async def get_all(
        self,
        teacher_service: Annotated[TeacherService, Depends(TeacherService)]
    ):
        """
        Lists every teacher. Each teacher's total earnings are recomputed
        from the completed sales of their students before listing.
        """
        try:
            teachers = await teacher_service.get_all()
            return to_pydantic_list(teachers, teacher_models.TeacherRead)
        except Exception as e:
            log.error(f"Failed to fetch teachers: {e}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to fetch teachers")

    async def get_dashboard(
        self,
        current_user: Annotated[db_models.Users, Depends(require_roles(UserRole.TEACHER, UserRole.MENTOR))],
        dashboard_service: Annotated[DashboardService, Depends(DashboardService)]
    ):
        return await dashboard_service.get_dashboard(current_user)

    async def get_by_id(
        self,
        teacher_id: str,
        teacher_service: Annotated[TeacherService, Depends(TeacherService)]
    ):
        parsed_id = parse_record_id(teacher_id, "Invalid Teacher ID")
        try:
            teacher = await teacher_service.get_teacher(parsed_id)
            return teacher_models.TeacherRead.model_validate(teacher)
        except HTTPException:
            raise
        except Exception as e:
            log.error(f"Failed to fetch teacher {teacher_id}: {e}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to fetch teacher")

    async def create(
        self,
        teacher_data: teacher_models.TeacherCreate,
        teacher_service: Annotated[TeacherService, Depends(TeacherService)]
    ):
        try:
            return await teacher_service.create_teacher(teacher_data)
        except HTTPException:
            raise
        except Exception as e:
            log.error(f"Failed to create teacher: {e}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to create teacher")

    async def update(
        self,
        teacher_id: str,
        update_data: teacher_models.TeacherUpdate,
        teacher_service: Annotated[TeacherService, Depends(TeacherService)]
    ):
        parsed_id = parse_record_id(teacher_id, "Invalid Teacher ID")
        try:
            return await teacher_service.update_teacher(parsed_id, update_data)
        except HTTPException:
            raise
        except Exception as e:
            log.error(f"Failed to update teacher {teacher_id}: {e}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to update teacher")

    async def delete(
        self,
        teacher_id: str,
        teacher_service: Annotated[TeacherService, Depends(TeacherService)]
    ):
        """
        Deletes a teacher. Their batches become unassigned and they are
        removed from every student's teacher list.
        """
        parsed_id = parse_record_id(teacher_id, "Invalid Teacher ID")
        try:
            await teacher_service.delete_teacher(parsed_id)
            return teacher_models.MessageResponse(message="Teacher deleted and references cleaned")
        except HTTPException:
            raise
        except Exception as e:
            log.error(f"Failed to delete teacher {teacher_id}: {e}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to delete teacher")


# Instantiate the class and export its router
teachers_api = TeachersAPI()
router = teachers_api.router
