from typing import Optional

from app.modules.reports.schemas import RecordOut


class IngresoOut(RecordOut):
    codigo_ingreso: str
    descripcion: Optional[str] = None
