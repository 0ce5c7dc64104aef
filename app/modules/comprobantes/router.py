from app.modules.reports.entities import COMPROBANTES
from app.modules.reports.routers.records import build_records_router
from .schemas import ComprobanteOut

comprobantes_router = build_records_router(COMPROBANTES, ComprobanteOut)
