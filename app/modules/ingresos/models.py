from sqlalchemy import BigInteger, Column, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from app.database.database import Base
from app.common.mixins import CatalogMixin, RecordMixin, category_fk


class TipoIngreso(Base, CatalogMixin):
    __tablename__ = "tipos_ingresos"

    descripcion = Column(String(255), nullable=False)


class CategoriaIngreso(Base, CatalogMixin):
    __tablename__ = "categorias_ingresos"

    descripcion = Column(String(255), nullable=False)
    id_tipo = Column(BigInteger, ForeignKey("tipos_ingresos.id"), nullable=True)


class Ingreso(Base, RecordMixin):
    """Ingresos distintos de ventas (intereses, reembolsos, etc.)"""
    __tablename__ = "ingresos"

    codigo_ingreso = Column(String(50), nullable=False, index=True)
    descripcion = Column(Text, nullable=True)
    id_categoria = category_fk("categorias_ingresos")

    categoria = relationship("CategoriaIngreso")
