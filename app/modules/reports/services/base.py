"""
Base service class for Reports module

Provides common functionality for report services: session handling
per sub-query, live-record filtering and half-open date ranges.
"""

from decimal import Decimal
from typing import Any, List

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.common.errors import DataAccessError
from ..entities import ReportEntity
from ..periods import DateRange


class ReportGenerationError(DataAccessError):
    """Raised when any sub-query of a report fails"""


# Drivers can fail below SQLAlchemy: refused connections surface as OSError,
# out-of-range bound integers as OverflowError
STORE_ERRORS = (SQLAlchemyError, OSError, OverflowError)


class BaseReportService:
    """Base service class for all report services"""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], entity: ReportEntity):
        self.session_factory = session_factory
        self.entity = entity
        self.model = entity.model

    async def _scalar(self, stmt) -> Any:
        """Run a scalar query in its own session"""
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return result.scalar()

    async def _rows(self, stmt) -> List[Any]:
        """Run a tabular query in its own session"""
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return result.all()

    async def _objects(self, stmt) -> List[Any]:
        """Run an ORM query in its own session"""
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    def _in_range(self, date_range: DateRange):
        """Half-open date range condition on the record date"""
        return (
            self.model.fecha >= date_range.start_date,
            self.model.fecha < date_range.end_date
        )

    def _sum_total(self):
        return func.coalesce(func.sum(self.model.total), 0)

    async def _sum_between(self, criteria, date_range: DateRange) -> Decimal:
        stmt = select(self._sum_total()).where(criteria, *self._in_range(date_range))
        value = await self._scalar(stmt)
        return Decimal(value or 0)
