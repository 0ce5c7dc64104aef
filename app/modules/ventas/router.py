from app.modules.reports.entities import VENTAS
from app.modules.reports.routers.records import build_records_router
from .schemas import VentaOut

ventas_router = build_records_router(VENTAS, VentaOut)
