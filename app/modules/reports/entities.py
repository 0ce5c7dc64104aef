"""
Report entities

Describes each transactional record type once so that the filter builder
and the aggregation service can be written a single time for compras,
gastos, ingresos, comprobantes and ventas.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Type

from app.modules.compras.models import CategoriaCompra, Compra, TipoCompra
from app.modules.comprobantes.models import CategoriaComprobante, Comprobante, TipoComprobante
from app.modules.gastos.models import CategoriaGasto, Gasto, TipoGasto
from app.modules.ingresos.models import CategoriaIngreso, Ingreso, TipoIngreso
from app.modules.ventas.models import CategoriaVenta, TipoVenta, Venta


@dataclass(frozen=True)
class ReportEntity:
    """Record schema parameters consumed by the reporting core"""
    name: str
    label: str
    model: Type
    category_model: Type
    type_model: Type
    code_field: str
    description_field: Optional[str] = None
    category_relation: str = "categoria"
    feminine: bool = False

    @property
    def not_found_message(self) -> str:
        return f"{self.label} no encontrad{'a' if self.feminine else 'o'}"

    @property
    def found_message(self) -> str:
        return f"{self.label} encontrad{'a' if self.feminine else 'o'}"

    @property
    def code_column(self):
        return getattr(self.model, self.code_field)

    @property
    def description_column(self):
        if self.description_field is None:
            return None
        return getattr(self.model, self.description_field)

    @property
    def category_relationship(self):
        return getattr(self.model, self.category_relation)


COMPRAS = ReportEntity(
    name="compras",
    label="Compra",
    model=Compra,
    category_model=CategoriaCompra,
    type_model=TipoCompra,
    code_field="codigo_compra",
    feminine=True,
)

GASTOS = ReportEntity(
    name="gastos",
    label="Gasto",
    model=Gasto,
    category_model=CategoriaGasto,
    type_model=TipoGasto,
    code_field="codigo_gasto",
    description_field="descripcion",
)

INGRESOS = ReportEntity(
    name="ingresos",
    label="Ingreso",
    model=Ingreso,
    category_model=CategoriaIngreso,
    type_model=TipoIngreso,
    code_field="codigo_ingreso",
    description_field="descripcion",
)

COMPROBANTES = ReportEntity(
    name="comprobantes",
    label="Comprobante",
    model=Comprobante,
    category_model=CategoriaComprobante,
    type_model=TipoComprobante,
    code_field="codigo_comprobante",
)

VENTAS = ReportEntity(
    name="ventas",
    label="Venta",
    model=Venta,
    category_model=CategoriaVenta,
    type_model=TipoVenta,
    code_field="codigo_venta",
    feminine=True,
    description_field="descripcion",
)

REPORT_ENTITIES: Dict[str, ReportEntity] = {
    entity.name: entity
    for entity in (COMPRAS, GASTOS, INGRESOS, COMPROBANTES, VENTAS)
}
