"""
Record Aggregation Service

Computes the listing page and the statistics block for one transactional
entity: interval sums, category and type breakdowns and the monthly series.
Every sub-query runs in its own session so they can be awaited together.
"""

import asyncio
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import extract, func, select
from sqlalchemy.orm import selectinload

from .base import STORE_ERRORS, BaseReportService, ReportGenerationError
from ..changes import round_percentage, share_of
from ..filters import build_filter
from ..periods import PeriodSet, format_month_key
from ..utils import Pagination, month_name

logger = logging.getLogger(__name__)


@dataclass
class BreakdownGroup:
    id: Optional[int]
    descripcion: Optional[str]
    total: Decimal
    porcentaje: float = 0.0


@dataclass
class CategoryGroup(BreakdownGroup):
    id_tipo: Optional[int] = None


@dataclass
class MonthBucket:
    month: str
    month_name: str
    total: Decimal


@dataclass
class AggregationResult:
    records: List[Any]
    total_records: int
    total_month: Decimal
    total_month_prev: Decimal
    total_year: Decimal
    total_year_prev: Decimal
    categories: List[CategoryGroup] = field(default_factory=list)
    types: List[BreakdownGroup] = field(default_factory=list)
    months: List[MonthBucket] = field(default_factory=list)


def _group_sort_key(group: BreakdownGroup) -> Tuple:
    # biggest first; ties by id with the null group last
    return (-group.total, group.id is None, group.id or 0)


class RecordReportService(BaseReportService):
    """Service for the monthly statistics of a record listing"""

    async def aggregate(
        self,
        periods: PeriodSet,
        pagination: Pagination,
        search: Optional[str] = None
    ) -> AggregationResult:
        """
        Run every sub-query concurrently and combine the results.

        Any data-access failure aborts the whole aggregation.
        """
        criteria = build_filter(self.entity, search)
        logger.debug(
            f"Aggregating {self.entity.name}: month={periods.month_key} "
            f"search={search!r} page={pagination.page} limit={pagination.limit}"
        )

        try:
            (
                records,
                total_records,
                total_month,
                total_month_prev,
                total_year,
                total_year_prev,
                (categories, types),
                months,
            ) = await asyncio.gather(
                self.get_page(criteria, periods, pagination),
                self.count_records(criteria, periods),
                self._sum_between(criteria, periods.current_month),
                self._sum_between(criteria, periods.previous_month),
                self._sum_between(criteria, periods.current_year),
                self._sum_between(criteria, periods.previous_year),
                self.get_breakdowns(criteria, periods),
                self.get_monthly_totals(criteria, periods),
            )
        except STORE_ERRORS as e:
            logger.error(
                f"Error aggregating {self.entity.name} "
                f"(month={periods.month_key}, search={search!r}): {e}"
            )
            raise ReportGenerationError(f"Error generating {self.entity.name} report") from e

        for group in categories + types:
            group.porcentaje = round_percentage(share_of(group.total, total_month))

        return AggregationResult(
            records=records,
            total_records=total_records,
            total_month=total_month,
            total_month_prev=total_month_prev,
            total_year=total_year,
            total_year_prev=total_year_prev,
            categories=categories,
            types=types,
            months=months,
        )

    async def get_page(self, criteria, periods: PeriodSet, pagination: Pagination) -> List[Any]:
        """Records of the selected month, newest first"""
        stmt = (
            select(self.model)
            .options(selectinload(self.entity.category_relationship))
            .where(criteria, *self._in_range(periods.current_month))
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        return await self._objects(stmt)

    async def count_records(self, criteria, periods: PeriodSet) -> int:
        stmt = (
            select(func.count())
            .select_from(self.model)
            .where(criteria, *self._in_range(periods.current_month))
        )
        return int(await self._scalar(stmt) or 0)

    async def get_breakdowns(
        self, criteria, periods: PeriodSet
    ) -> Tuple[List[CategoryGroup], List[BreakdownGroup]]:
        """Category groups first, then the type groups derived from them"""
        categories = await self.get_category_groups(criteria, periods)
        types = await self.get_type_groups(categories)
        return categories, types

    async def get_category_groups(self, criteria, periods: PeriodSet) -> List[CategoryGroup]:
        """Sum of the selected month per category, labelled with its description"""
        stmt = (
            select(self.model.id_categoria, self._sum_total().label("total"))
            .where(criteria, *self._in_range(periods.current_month))
            .group_by(self.model.id_categoria)
        )
        sums = await self._rows(stmt)

        category_ids = [row.id_categoria for row in sums if row.id_categoria is not None]
        catalog = await self._lookup_categories(category_ids)

        groups = []
        for row in sums:
            descripcion, id_tipo = catalog.get(row.id_categoria, (None, None))
            groups.append(CategoryGroup(
                id=row.id_categoria,
                descripcion=descripcion,
                total=Decimal(row.total or 0),
                id_tipo=id_tipo,
            ))
        return sorted(groups, key=_group_sort_key)

    async def get_type_groups(self, categories: List[CategoryGroup]) -> List[BreakdownGroup]:
        """Re-aggregate category sums by the type each category points to"""
        totals: Dict[Optional[int], Decimal] = defaultdict(Decimal)
        for category in categories:
            totals[category.id_tipo] += category.total

        type_ids = [type_id for type_id in totals if type_id is not None]
        descriptions = await self._lookup_types(type_ids)

        groups = [
            BreakdownGroup(id=type_id, descripcion=descriptions.get(type_id), total=total)
            for type_id, total in totals.items()
        ]
        return sorted(groups, key=_group_sort_key)

    async def get_monthly_totals(self, criteria, periods: PeriodSet) -> List[MonthBucket]:
        """Twelve buckets for the selected year, January first"""
        month_expr = extract("month", self.model.fecha)
        stmt = (
            select(month_expr.label("mes"), self._sum_total().label("total"))
            .where(criteria, *self._in_range(periods.current_year))
            .group_by(month_expr)
        )
        rows = await self._rows(stmt)
        by_month = {int(row.mes): Decimal(row.total or 0) for row in rows}

        return [
            MonthBucket(
                month=format_month_key(periods.year, month),
                month_name=month_name(month),
                total=by_month.get(month, Decimal("0")),
            )
            for month in range(1, 13)
        ]

    async def get_record(self, record_id: int) -> Optional[Any]:
        """A single live record with its category"""
        stmt = (
            select(self.model)
            .options(selectinload(self.entity.category_relationship))
            .where(build_filter(self.entity), self.model.id == record_id)
        )
        try:
            records = await self._objects(stmt)
        except STORE_ERRORS as e:
            logger.error(f"Error loading {self.entity.name} {record_id}: {e}")
            raise ReportGenerationError(f"Error loading {self.entity.name}") from e
        return records[0] if records else None

    async def _lookup_categories(self, ids: List[int]) -> Dict[int, Tuple[str, Optional[int]]]:
        if not ids:
            return {}
        category = self.entity.category_model
        stmt = select(category.id, category.descripcion, category.id_tipo).where(category.id.in_(ids))
        rows = await self._rows(stmt)
        return {row.id: (row.descripcion, row.id_tipo) for row in rows}

    async def _lookup_types(self, ids: List[int]) -> Dict[int, str]:
        if not ids:
            return {}
        type_model = self.entity.type_model
        stmt = select(type_model.id, type_model.descripcion).where(type_model.id.in_(ids))
        rows = await self._rows(stmt)
        return {row.id: row.descripcion for row in rows}
