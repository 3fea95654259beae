'''
API endpoints for students.
'''
from typing import Annotated
from fastapi import APIRouter, Depends, status

from ..models import student as student_models
from ..services.student_service import StudentService
from .common import parse_record_id


class StudentsAPI:
    def __init__(self):
        self.router = APIRouter(
                prefix="/students",
                tags=["Students"])
        self._register_routes()

    def _register_routes(self):
        self.router.add_api_route(
                "",
                self.get_all,
                methods=["GET"],
                response_model=list[student_models.StudentRead])
        self.router.add_api_route(
                "",
                self.create,
                methods=["POST"],
                status_code=status.HTTP_201_CREATED,
                response_model=student_models.StudentRead)
        self.router.add_api_route(
                "/{student_id}",
                self.get_by_id,
                methods=["GET"],
                response_model=student_models.StudentRead)

    async def get_all(
        self,
        student_service: Annotated[StudentService, Depends(StudentService)]
    ):
        return await student_service.get_all_students_for_api()

    async def create(
        self,
        student_data: student_models.StudentCreate,
        student_service: Annotated[StudentService, Depends(StudentService)]
    ):
        """Creates a student linked to existing teachers."""
        return await student_service.create_student(student_data)

    async def get_by_id(
        self,
        student_id: str,
        student_service: Annotated[StudentService, Depends(StudentService)]
    ):
        parsed_id = parse_record_id(student_id, "Invalid Student ID")
        return await student_service.get_student_by_id_for_api(parsed_id)


# Instantiate the class and export its router
students_api = StudentsAPI()
router = students_api.router
