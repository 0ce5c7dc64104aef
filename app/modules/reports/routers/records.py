"""
Record Listing Router

Builds the listing and get-by-id endpoints for one transactional entity.
The listing carries the monthly statistics block next to the page of
records.
"""

from typing import Optional, Type

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.dependencies.dbDependecies import session_factory_dependency
from app.modules.auth.dependencies import get_auth_context
from app.modules.auth.schemas import AuthContext
from ..assembler import build_listing_response
from ..entities import ReportEntity
from ..periods import resolve_periods
from ..schemas import RecordDetailResponse, RecordListResponse, RecordOut
from ..services.aggregation import RecordReportService
from ..utils import resolve_pagination

# Largest value of a BIGINT primary key
MAX_RECORD_ID = 2 ** 63 - 1


def build_records_router(entity: ReportEntity, record_schema: Type[RecordOut]) -> APIRouter:
    router = APIRouter(prefix=f"/api/{entity.name}", tags=[entity.name.capitalize()])

    @router.get(
        "",
        response_model=RecordListResponse[record_schema],
        name=f"list_{entity.name}"
    )
    async def list_records(
        session_factory: session_factory_dependency,
        page: Optional[str] = Query(None, description="Page number, starting at 1"),
        limit: Optional[str] = Query(None, description="Records per page (1-200)"),
        search: Optional[str] = Query(None, description="Code, description, category or exact total"),
        month: Optional[str] = Query(None, description="Month to report, YYYY-MM (defaults to current UTC month)"),
        auth_context: AuthContext = Depends(get_auth_context)
    ):
        """
        List live records of the selected month with their statistics.

        Invalid ``page``, ``limit`` or ``month`` values fall back to defaults
        instead of failing.
        """
        periods = resolve_periods(month)
        pagination = resolve_pagination(page, limit)

        service = RecordReportService(session_factory, entity)
        result = await service.aggregate(periods, pagination, search=search)

        return build_listing_response(result, periods, pagination, record_schema)

    @router.get(
        "/{record_id}",
        response_model=RecordDetailResponse[record_schema],
        name=f"get_{entity.name}_by_id"
    )
    async def get_record_by_id(
        record_id: str,
        session_factory: session_factory_dependency,
        auth_context: AuthContext = Depends(get_auth_context)
    ):
        """Get a single live record by id"""
        not_found = HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=entity.not_found_message
        )
        if not record_id.isdecimal() or int(record_id) > MAX_RECORD_ID:
            raise not_found

        service = RecordReportService(session_factory, entity)
        record = await service.get_record(int(record_id))
        if record is None:
            raise not_found

        return RecordDetailResponse[record_schema](
            message=entity.found_message,
            data=record_schema.model_validate(record)
        )

    return router
