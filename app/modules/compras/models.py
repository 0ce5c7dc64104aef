"""
Modelos SQLAlchemy para el módulo de Compras

- Tipos de compra (TipoCompra): agrupación de segundo nivel
- Categorías de compra (CategoriaCompra): cada una apunta opcionalmente a un tipo
- Compras (Compra): registro transaccional con desglose de impuestos
"""

from sqlalchemy import BigInteger, Column, Date, ForeignKey, Numeric, String
from sqlalchemy.orm import relationship

from app.database.database import Base
from app.common.mixins import CatalogMixin, RecordMixin, category_fk


class TipoCompra(Base, CatalogMixin):
    __tablename__ = "tipos_compras"

    descripcion = Column(String(255), nullable=False)


class CategoriaCompra(Base, CatalogMixin):
    __tablename__ = "categorias_compras"

    descripcion = Column(String(255), nullable=False)
    id_tipo = Column(BigInteger, ForeignKey("tipos_compras.id"), nullable=True)


class Compra(Base, RecordMixin):
    """
    Compras a proveedores

    El total es la suma de gravados, impuestos, exento y exonerado; se
    persiste ya calculado.
    """
    __tablename__ = "compras"

    codigo_compra = Column(String(50), nullable=False, index=True)
    id_categoria = category_fk("categorias_compras")
    id_proveedor = Column(BigInteger, nullable=True)
    id_tipo_operacion = Column(BigInteger, nullable=True)
    fecha_pago = Column(Date, nullable=True)

    # Desglose de impuestos
    gravado15 = Column(Numeric(12, 2), nullable=True)
    gravado18 = Column(Numeric(12, 2), nullable=True)
    impuesto15 = Column(Numeric(12, 2), nullable=True)
    impuesto18 = Column(Numeric(12, 2), nullable=True)
    exento = Column(Numeric(12, 2), nullable=True)
    exonerado = Column(Numeric(12, 2), nullable=True)

    categoria = relationship("CategoriaCompra")
