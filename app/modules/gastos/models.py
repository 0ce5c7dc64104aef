from sqlalchemy import BigInteger, Column, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from app.database.database import Base
from app.common.mixins import CatalogMixin, RecordMixin, category_fk


class TipoGasto(Base, CatalogMixin):
    __tablename__ = "tipos_gastos"

    descripcion = Column(String(255), nullable=False)


class CategoriaGasto(Base, CatalogMixin):
    __tablename__ = "categorias_gastos"

    descripcion = Column(String(255), nullable=False)
    id_tipo = Column(BigInteger, ForeignKey("tipos_gastos.id"), nullable=True)


class Gasto(Base, RecordMixin):
    """Gastos operativos de la empresa"""
    __tablename__ = "gastos"

    codigo_gasto = Column(String(50), nullable=False, index=True)
    descripcion = Column(Text, nullable=True)
    id_categoria = category_fk("categorias_gastos")

    categoria = relationship("CategoriaGasto")
