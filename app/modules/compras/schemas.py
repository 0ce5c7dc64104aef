from datetime import date
from decimal import Decimal
from typing import Optional

from app.common.schemas import OptionalIdStr
from app.modules.reports.schemas import RecordOut


class CompraOut(RecordOut):
    codigo_compra: str
    id_proveedor: OptionalIdStr = None
    id_tipo_operacion: OptionalIdStr = None
    fecha_pago: Optional[date] = None
    gravado15: Optional[Decimal] = None
    gravado18: Optional[Decimal] = None
    impuesto15: Optional[Decimal] = None
    impuesto18: Optional[Decimal] = None
    exento: Optional[Decimal] = None
    exonerado: Optional[Decimal] = None
