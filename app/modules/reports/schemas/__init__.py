"""
Pydantic schemas for Reports module

Response models for the record listing endpoints: pagination metadata,
the statistics block and the period metadata. JSON keys keep the names the
back-office frontend consumes (camelCase / Spanish); Python attributes are
snake_case.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from app.common.schemas import IdStr, OptionalIdStr


class CategoriaOut(BaseModel):
    """Category embedded in each listed record"""
    model_config = ConfigDict(from_attributes=True)

    id: IdStr
    descripcion: str
    id_tipo: OptionalIdStr = None


class RecordOut(BaseModel):
    """Columns shared by every transactional record"""
    model_config = ConfigDict(from_attributes=True)

    id: IdStr
    fecha: date
    total: Decimal
    id_categoria: OptionalIdStr = None
    id_estado: int
    id_usuario: OptionalIdStr = None
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None
    categoria: Optional[CategoriaOut] = None


RecordT = TypeVar("RecordT", bound=RecordOut)


class PaginationMeta(BaseModel):
    page: int = Field(description="Current page (1-based)")
    limit: int = Field(description="Records per page")
    total: int = Field(description="Records matching the filter in the selected month")
    pages: int = Field(description="Total number of pages")


class BreakdownItem(BaseModel):
    """
    One group of the category or type breakdown.

    Field mapping: ``id`` is the category (or type) id, ``descripcion`` its
    description, ``total`` the sum of the selected month and ``porcentaje``
    that sum as a percentage of the month total.
    """
    id: OptionalIdStr = Field(None, description="Category or type id; null groups records without one")
    descripcion: Optional[str] = None
    total: Decimal
    porcentaje: float = Field(description="Share of the month total, 0-100")


class MonthlyTotal(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    month: str = Field(description="YYYY-MM")
    month_name: str = Field(alias="monthName")
    total: Decimal


class ReportStatistics(BaseModel):
    """Monthly and yearly aggregates for the selected period"""
    model_config = ConfigDict(populate_by_name=True)

    total_registros: int = Field(alias="totalRegistros")
    total_month: Decimal = Field(alias="totalMonth")
    total_month_prev: Decimal = Field(alias="totalMonthPrev")
    total_year: Decimal = Field(alias="totalYear")
    total_year_prev: Decimal = Field(alias="totalYearPrev")
    diferencia_mensual: Decimal = Field(alias="diferenciaMensual")
    diferencia_anual: Decimal = Field(alias="diferenciaAnual")
    porcentaje_cambio_mensual: float = Field(alias="porcentajeCambioMensual")
    porcentaje_cambio_anual: float = Field(alias="porcentajeCambioAnual")
    categorias: List[BreakdownItem]
    tipos: List[BreakdownItem]
    totals_months: List[MonthlyTotal] = Field(alias="totalsMonths")


class PeriodMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    month: str
    prev_month: str = Field(alias="prevMonth")


class RecordListResponse(BaseModel, Generic[RecordT]):
    """Response for GET /api/<entity>"""
    data: List[RecordT]
    statistics: ReportStatistics
    pagination: PaginationMeta
    meta: PeriodMeta


class RecordDetailResponse(BaseModel, Generic[RecordT]):
    """Response for GET /api/<entity>/{id}"""
    success: bool = True
    message: str
    data: RecordT
