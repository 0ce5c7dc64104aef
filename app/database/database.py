from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool
from app.core.config import Settings
import logging

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """
    Dueño del engine asíncrono y de la fábrica de sesiones.

    Se construye al arrancar la aplicación y se libera al apagarla; los
    endpoints reciben la fábrica por inyección de dependencias.
    """

    def __init__(self, url: str, echo: bool = False, use_null_pool: bool = False):
        engine_kwargs = {"echo": echo, "pool_pre_ping": True}
        if use_null_pool:
            engine_kwargs["poolclass"] = NullPool

        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False
        )
        logger.info(f"Database engine created for dialect: {self.engine.dialect.name}")

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.async_database_url,
            echo=settings.DEBUG,
            use_null_pool=settings.ENVIRONMENT == "test"
        )

    async def create_all(self):
        """Crea las tablas declaradas (solo desarrollo, en producción usar migraciones)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self):
        await self.engine.dispose()
        logger.info("Database engine disposed")
