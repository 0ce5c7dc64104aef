from typing import Optional

from app.modules.reports.schemas import RecordOut


class GastoOut(RecordOut):
    codigo_gasto: str
    descripcion: Optional[str] = None
