from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from typing import Annotated


def get_session_factory(request: Request) -> async_sessionmaker[AsyncSession]:
    """Fábrica de sesiones creada en el lifespan de la aplicación."""
    return request.app.state.database.session_factory


# Report services open one session per concurrent sub-query
session_factory_dependency = Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)]
