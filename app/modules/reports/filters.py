"""
Search filter builder for transactional records
"""

from decimal import Decimal, InvalidOperation
from typing import List, Optional

from sqlalchemy import and_, or_
from sqlalchemy.sql.elements import ColumnElement

from app.common.mixins import EstadoRegistro
from .entities import ReportEntity


def live_conditions(model) -> List[ColumnElement]:
    """Conditions every listed or aggregated record must satisfy"""
    return [
        model.id_estado == EstadoRegistro.ACTIVO.value,
        model.deleted_at.is_(None),
    ]


def parse_search_amount(term: str) -> Optional[Decimal]:
    """Return the term as a positive amount, or None when it is not one."""
    try:
        amount = Decimal(term)
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount <= 0:
        return None
    return amount


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def build_filter(entity: ReportEntity, search: Optional[str] = None) -> ColumnElement:
    """
    Build the predicate shared by the paginated query and every aggregate.

    The live-record conditions are always present. A non-blank search term
    adds an OR over the business code, the description (when the entity has
    one), the category description and, for positive numbers, the exact total.
    """
    model = entity.model
    conditions = live_conditions(model)

    term = (search or "").strip()
    if not term:
        return and_(*conditions)

    pattern = f"%{_escape_like(term)}%"
    matches = [entity.code_column.ilike(pattern, escape="\\")]

    if entity.description_column is not None:
        matches.append(entity.description_column.ilike(pattern, escape="\\"))

    matches.append(
        entity.category_relationship.has(
            entity.category_model.descripcion.ilike(pattern, escape="\\")
        )
    )

    amount = parse_search_amount(term)
    if amount is not None:
        matches.append(model.total == amount)

    conditions.append(or_(*matches))
    return and_(*conditions)
