"""
Modelos SQLAlchemy para el módulo de Comprobantes (facturas emitidas)
"""

from sqlalchemy import BigInteger, Column, Date, DateTime, ForeignKey, Numeric, String
from sqlalchemy.orm import relationship

from app.database.database import Base
from app.common.mixins import CatalogMixin, RecordMixin, category_fk


class TipoComprobante(Base, CatalogMixin):
    __tablename__ = "tipos_comprobantes"

    descripcion = Column(String(255), nullable=False)


class CategoriaComprobante(Base, CatalogMixin):
    __tablename__ = "categorias_comprobantes"

    descripcion = Column(String(255), nullable=False)
    id_tipo = Column(BigInteger, ForeignKey("tipos_comprobantes.id"), nullable=True)


class Comprobante(Base, RecordMixin):
    __tablename__ = "comprobantes"

    codigo_comprobante = Column(String(50), nullable=False, index=True)
    id_categoria = category_fk("categorias_comprobantes")
    id_cliente = Column(BigInteger, nullable=True)
    fecha_hora = Column(DateTime(timezone=True), nullable=True)
    fecha_vencimiento = Column(Date, nullable=True)

    gravado15 = Column(Numeric(12, 2), nullable=True)
    gravado18 = Column(Numeric(12, 2), nullable=True)
    impuesto15 = Column(Numeric(12, 2), nullable=True)
    impuesto18 = Column(Numeric(12, 2), nullable=True)
    exento = Column(Numeric(12, 2), nullable=True)
    exonerado = Column(Numeric(12, 2), nullable=True)
    descuentos = Column(Numeric(12, 2), nullable=True)
    subtotal = Column(Numeric(12, 2), nullable=True)

    categoria = relationship("CategoriaComprobante")
