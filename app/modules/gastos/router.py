from app.modules.reports.entities import GASTOS
from app.modules.reports.routers.records import build_records_router
from .schemas import GastoOut

gastos_router = build_records_router(GASTOS, GastoOut)
