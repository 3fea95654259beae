'''
API endpoints for sales.
'''
from typing import Annotated, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status

from ..database.db_enums import SaleStatusEnum
from ..models import student as student_models
from ..services.student_service import SaleService
from .common import parse_record_id


class SalesAPI:
    """
    Endpoints for sales. Recording a sale or changing its status refreshes
    the earnings of the student's teachers.
    """
    def __init__(self):
        self.router = APIRouter(
                prefix="/sales",
                tags=["Sales"])
        self._register_routes()

    def _register_routes(self):
        self.router.add_api_route(
                "",
                self.get_all,
                methods=["GET"],
                response_model=list[student_models.SaleRead])
        self.router.add_api_route(
                "",
                self.create,
                methods=["POST"],
                status_code=status.HTTP_201_CREATED,
                response_model=student_models.SaleRead)
        self.router.add_api_route(
                "/{sale_id}/status",
                self.update_status,
                methods=["PATCH"],
                response_model=student_models.SaleRead)

    async def get_all(
        self,
        sale_service: Annotated[SaleService, Depends(SaleService)],
        student: Annotated[Optional[UUID], Query()] = None,
        status_filter: Annotated[Optional[SaleStatusEnum], Query(alias="status")] = None
    ):
        return await sale_service.get_all_sales_for_api(student_id=student, status_filter=status_filter)

    async def create(
        self,
        sale_data: student_models.SaleCreate,
        sale_service: Annotated[SaleService, Depends(SaleService)]
    ):
        return await sale_service.create_sale(sale_data)

    async def update_status(
        self,
        sale_id: str,
        update_data: student_models.SaleStatusUpdate,
        sale_service: Annotated[SaleService, Depends(SaleService)]
    ):
        parsed_id = parse_record_id(sale_id, "Invalid Sale ID")
        return await sale_service.update_sale_status(parsed_id, update_data)


# Instantiate the class and export its router
sales_api = SalesAPI()
router = sales_api.router
