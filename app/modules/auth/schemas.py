from pydantic import BaseModel


class AuthContext(BaseModel):
    """Authenticated user extracted from the bearer token"""
    user_id: int
