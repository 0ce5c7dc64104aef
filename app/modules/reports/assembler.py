"""
Builds the listing payload from an aggregation result. No I/O happens here.
"""

from typing import List, Type

from .changes import PeriodComparison
from .periods import PeriodSet
from .schemas import (
    BreakdownItem,
    MonthlyTotal,
    PaginationMeta,
    PeriodMeta,
    RecordListResponse,
    RecordOut,
    ReportStatistics,
)
from .services.aggregation import AggregationResult, BreakdownGroup
from .utils import Pagination


def _breakdown_items(groups: List[BreakdownGroup]) -> List[BreakdownItem]:
    return [
        BreakdownItem(
            id=group.id,
            descripcion=group.descripcion,
            total=group.total,
            porcentaje=group.porcentaje,
        )
        for group in groups
    ]


def build_statistics(result: AggregationResult) -> ReportStatistics:
    monthly = PeriodComparison(current=result.total_month, previous=result.total_month_prev)
    yearly = PeriodComparison(current=result.total_year, previous=result.total_year_prev)

    return ReportStatistics(
        total_registros=result.total_records,
        total_month=result.total_month,
        total_month_prev=result.total_month_prev,
        total_year=result.total_year,
        total_year_prev=result.total_year_prev,
        diferencia_mensual=monthly.difference,
        diferencia_anual=yearly.difference,
        porcentaje_cambio_mensual=monthly.percentage,
        porcentaje_cambio_anual=yearly.percentage,
        categorias=_breakdown_items(result.categories),
        tipos=_breakdown_items(result.types),
        totals_months=[
            MonthlyTotal(month=bucket.month, month_name=bucket.month_name, total=bucket.total)
            for bucket in result.months
        ],
    )


def build_listing_response(
    result: AggregationResult,
    periods: PeriodSet,
    pagination: Pagination,
    record_schema: Type[RecordOut],
) -> RecordListResponse:
    """Merge page data, pagination, statistics and period metadata"""
    return RecordListResponse[record_schema](
        data=[record_schema.model_validate(record) for record in result.records],
        statistics=build_statistics(result),
        pagination=PaginationMeta(
            page=pagination.page,
            limit=pagination.limit,
            total=result.total_records,
            pages=pagination.pages_for(result.total_records),
        ),
        meta=PeriodMeta(month=periods.month_key, prev_month=periods.previous_month_key),
    )
