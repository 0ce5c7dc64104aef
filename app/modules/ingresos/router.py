from app.modules.reports.entities import INGRESOS
from app.modules.reports.routers.records import build_records_router
from .schemas import IngresoOut

ingresos_router = build_records_router(INGRESOS, IngresoOut)
