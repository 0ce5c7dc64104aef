from typing import Optional

from app.modules.reports.schemas import RecordOut


class VentaOut(RecordOut):
    codigo_venta: str
    descripcion: Optional[str] = None
