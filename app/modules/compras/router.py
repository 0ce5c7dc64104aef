from app.modules.reports.entities import COMPRAS
from app.modules.reports.routers.records import build_records_router
from .schemas import CompraOut

compras_router = build_records_router(COMPRAS, CompraOut)
