"""
Dependencias de autenticación para FastAPI.

La emisión de tokens vive en el servicio de autenticación; aquí solo se
valida el bearer token y se construye el contexto del usuario.
"""
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import jwt
import logging

from app.modules.auth.schemas import AuthContext
from app.core.config import settings

logger = logging.getLogger(__name__)

# Security scheme (missing header handled below to keep our own message)
security = HTTPBearer(auto_error=False)


class AuthDependencies:
    """Dependencias de autenticación reutilizables."""

    @staticmethod
    def get_auth_context(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
    ) -> AuthContext:
        """
        Obtener contexto de autenticación desde el token JWT.
        El id de usuario viaja en el claim ``userId`` (o ``sub``).
        """
        if credentials is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Token no proporcionado",
                headers={"WWW-Authenticate": "Bearer"},
            )

        credentials_exception = HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token inválido",
            headers={"WWW-Authenticate": "Bearer"},
        )

        try:
            payload = jwt.decode(
                credentials.credentials,
                settings.APP_SECRET_STRING,
                algorithms=[settings.ALGORITHM]
            )
        except jwt.PyJWTError as e:
            logger.warning(f"Rejected bearer token: {e}")
            raise credentials_exception

        user_id = payload.get("userId", payload.get("sub"))
        try:
            return AuthContext(user_id=int(user_id))
        except (TypeError, ValueError):
            logger.warning("Bearer token without a numeric user id")
            raise credentials_exception


# Instancias de dependencias
get_auth_context = AuthDependencies.get_auth_context
