from sqlalchemy import BigInteger, Column, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from app.database.database import Base
from app.common.mixins import CatalogMixin, RecordMixin, category_fk


class TipoVenta(Base, CatalogMixin):
    __tablename__ = "tipos_ventas"

    descripcion = Column(String(255), nullable=False)


class CategoriaVenta(Base, CatalogMixin):
    __tablename__ = "categorias_ventas"

    descripcion = Column(String(255), nullable=False)
    id_tipo = Column(BigInteger, ForeignKey("tipos_ventas.id"), nullable=True)


class Venta(Base, RecordMixin):
    """Ventas registradas en caja"""
    __tablename__ = "ventas"

    codigo_venta = Column(String(50), nullable=False, index=True)
    descripcion = Column(Text, nullable=True)
    id_categoria = category_fk("categorias_ventas")

    categoria = relationship("CategoriaVenta")
