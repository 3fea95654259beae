'''
Helpers shared by the API routers.
'''
from uuid import UUID
from fastapi import HTTPException, status


def to_pydantic_list(orm_list: list, model):
    """Converts ORM objects to Pydantic models."""
    return [model.model_validate(item) for item in orm_list]


def parse_record_id(raw_id: str, error_detail: str) -> UUID:
    """
    Parses a path identifier. Anything that is not a UUID is answered with
    a 400 carrying `error_detail` (e.g. "Invalid Teacher ID").
    """
    try:
        return UUID(raw_id)
    except (ValueError, TypeError, AttributeError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error_detail)
