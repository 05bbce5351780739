# fitness_api/schemas/token.py
from pydantic import BaseModel

from fitness_api.schemas.user import UserOut


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class AuthResponse(TokenPair):
    user: UserOut


class RefreshIn(BaseModel):
    refresh_token: str
