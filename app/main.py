from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
import logging

# Import database components
from app.database.database import Database

# Import middleware and error handlers
from app.common.middleware import SecurityHeadersMiddleware
from app.common.errors import register_exception_handlers

# Import routers (also registers the models on Base.metadata)
from app.modules.compras.router import compras_router
from app.modules.gastos.router import gastos_router
from app.modules.ingresos.router import ingresos_router
from app.modules.comprobantes.router import comprobantes_router
from app.modules.ventas.router import ventas_router

from app.core.config import settings

# Configure logging
logging.basicConfig(
    level=logging.INFO if settings.ENVIRONMENT == "production" else logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Back-office API starting up...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    database = Database.from_settings(settings)
    # Create database tables (only for development - use migrations in production)
    if settings.ENVIRONMENT == "development":
        await database.create_all()
    app.state.database = database

    yield

    logger.info("Back-office API shutting down...")
    await database.dispose()


# FastAPI app
app = FastAPI(
    title="Back-office API",
    description="Purchases, expenses, income, invoices and sales with monthly statistics",
    version="1.0.0",
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None,
    lifespan=lifespan
)

# Add middleware (order matters!)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(SecurityHeadersMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(compras_router)
app.include_router(gastos_router)
app.include_router(ingresos_router)
app.include_router(comprobantes_router)
app.include_router(ventas_router)


@app.get("/")
async def read_root():
    return {
        "message": "Back-office API is running",
        "version": "1.0.0",
        "environment": settings.ENVIRONMENT
    }


@app.get("/health")
async def health_check():
    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}
