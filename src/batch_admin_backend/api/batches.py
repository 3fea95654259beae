'''
API endpoints for CRUD operations on batches.
'''
from typing import Annotated, Optional
from fastapi import APIRouter, Depends, Query, status, HTTPException

from ..database.db_enums import BatchStatusEnum
from ..models import batch as batch_models
from ..models import teacher as teacher_models
from ..services.batch_service import BatchService
from ..common.logger import log
from .common import parse_record_id


class BatchesAPI:
    """
    Endpoints for batches. Every batch returned carries its derived
    status and its teacher / platform revenue shares. Money fields are
    JSON numbers and dates are UTC instants ending in "Z".
    """
    def __init__(self):
        self.router = APIRouter(
                prefix="/batches",
                tags=["Batches"])
        self._register_routes()

    def _register_routes(self):
        self.router.add_api_route(
                "",
                self.list_batches,
                methods=["GET"],
                response_model=list[batch_models.BatchRead])
        self.router.add_api_route(
                "",
                self.create_batch,
                methods=["POST"],
                status_code=status.HTTP_201_CREATED,
                response_model=batch_models.BatchRead)
        self.router.add_api_route(
                "/{batch_id}",
                self.get_batch,
                methods=["GET"],
                response_model=batch_models.BatchRead)
        self.router.add_api_route(
                "/{batch_id}",
                self.update_batch,
                methods=["PUT"],
                response_model=batch_models.BatchRead)
        self.router.add_api_route(
                "/{batch_id}",
                self.delete_batch,
                methods=["DELETE"],
                response_model=teacher_models.MessageResponse)

    async def list_batches(
        self,
        batch_service: Annotated[BatchService, Depends(BatchService)],
        search: Annotated[Optional[str], Query(description="Case-insensitive part of the batch name")] = None,
        status_filter: Annotated[Optional[BatchStatusEnum], Query(alias="status")] = None
    ):
        try:
            return await batch_service.get_all_batches_for_api(search=search, status_filter=status_filter)
        except Exception as e:
            log.error(f"Failed to fetch batches: {e}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to fetch batches")

    async def get_batch(
        self,
        batch_id: str,
        batch_service: Annotated[BatchService, Depends(BatchService)]
    ):
        parsed_id = parse_record_id(batch_id, "Invalid Batch ID")
        return await batch_service.get_batch_by_id_for_api(parsed_id)

    async def create_batch(
        self,
        batch_data: batch_models.BatchCreate,
        batch_service: Annotated[BatchService, Depends(BatchService)]
    ):
        """
        Creates a batch. `sessionTopic` may be sent as newline-separated text.
        """
        try:
            return await batch_service.create_batch(batch_data)
        except HTTPException:
            raise
        except Exception as e:
            log.error(f"Failed to create batch: {e}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to create batch")

    async def update_batch(
        self,
        batch_id: str,
        update_data: batch_models.BatchUpdate,
        batch_service: Annotated[BatchService, Depends(BatchService)]
    ):
        parsed_id = parse_record_id(batch_id, "Invalid Batch ID")
        try:
            return await batch_service.update_batch(parsed_id, update_data)
        except HTTPException:
            raise
        except Exception as e:
            log.error(f"Failed to update batch {batch_id}: {e}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to update batch")

    async def delete_batch(
        self,
        batch_id: str,
        batch_service: Annotated[BatchService, Depends(BatchService)]
    ):
        parsed_id = parse_record_id(batch_id, "Invalid Batch ID")
        await batch_service.delete_batch(parsed_id)
        return teacher_models.MessageResponse(message="Batch deleted successfully")


# Instantiate the class and export its router
batches_api = BatchesAPI()
router = batches_api.router
