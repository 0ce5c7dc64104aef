from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from app.common.schemas import OptionalIdStr
from app.modules.reports.schemas import RecordOut


class ComprobanteOut(RecordOut):
    codigo_comprobante: str
    id_cliente: OptionalIdStr = None
    fecha_hora: Optional[datetime] = None
    fecha_vencimiento: Optional[date] = None
    gravado15: Optional[Decimal] = None
    gravado18: Optional[Decimal] = None
    impuesto15: Optional[Decimal] = None
    impuesto18: Optional[Decimal] = None
    exento: Optional[Decimal] = None
    exonerado: Optional[Decimal] = None
    descuentos: Optional[Decimal] = None
    subtotal: Optional[Decimal] = None
