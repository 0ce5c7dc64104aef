"""
Common mixins for back-office models
"""
import enum

from sqlalchemy import BigInteger, Column, Date, DateTime, ForeignKey, Integer, Numeric
from sqlalchemy.sql import func


# SQLite only autoincrements INTEGER PRIMARY KEY columns
BigIntId = BigInteger().with_variant(Integer(), "sqlite")


class EstadoRegistro(enum.IntEnum):
    """Estados de registro (soft delete)"""
    ACTIVO = 1
    INACTIVO = 2


class TimestampMixin:
    """Mixin for models that need timestamp tracking"""

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)


class EstadoMixin:
    """Mixin for the active-state flag used together with deleted_at"""

    id_estado = Column(Integer, default=EstadoRegistro.ACTIVO.value, nullable=False, index=True)


class CatalogMixin(EstadoMixin, TimestampMixin):
    """Shared columns for category and type catalogs"""

    id = Column(BigIntId, primary_key=True, autoincrement=True)


class RecordMixin(EstadoMixin, TimestampMixin):
    """
    Columns shared by every transactional record (compras, gastos, ingresos,
    comprobantes, ventas). The category foreign key is declared per model
    because each record table has its own category table.
    """

    id = Column(BigIntId, primary_key=True, autoincrement=True)
    fecha = Column(Date, nullable=False, index=True)
    total = Column(Numeric(12, 2), nullable=False, default=0)
    id_usuario = Column(BigInteger, nullable=True)


def category_fk(table_name: str) -> Column:
    return Column(BigInteger, ForeignKey(f"{table_name}.id"), nullable=True, index=True)
