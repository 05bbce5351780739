# fitness_api/api/deps.py
from typing import Any, Dict

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from fitness_api.core.errors import AccessDeniedError, AuthenticationError
from fitness_api.core.security_password import PasswordHasher
from fitness_api.core.tiers import MembershipTier
from fitness_api.core.tokens import TokenService
from fitness_api.db.session import get_db
from fitness_api.models.enums import UserRole
from fitness_api.models.user import User
from fitness_api.services.access import resolve_user_tier
from fitness_api.services.auth import AuthService

__all__ = [
    "get_db",
    "get_auth_service",
    "get_bearer_token",
    "get_current_claims",
    "get_current_user",
    "get_user_tier",
    "require_roles",
]


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.passwords


def get_auth_service(
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
    passwords: PasswordHasher = Depends(get_password_hasher),
) -> AuthService:
    return AuthService(db, tokens, passwords)

# ----------------------------------------------------------------------
# Bearer token from the Authorization header
# ----------------------------------------------------------------------
def get_bearer_token(authorization: str = Header(None, alias="Authorization")) -> str:
    if not authorization:
        raise AuthenticationError("Missing Authorization header")
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthenticationError("Invalid Authorization header")
    return parts[1]


def get_current_claims(
    token: str = Depends(get_bearer_token),
    tokens: TokenService = Depends(get_token_service),
) -> Dict[str, Any]:
    payload = tokens.decode_access(token)
    if payload is None:
        raise AuthenticationError("Invalid token")
    return payload


def get_current_user(
    claims: Dict[str, Any] = Depends(get_current_claims),
    auth: AuthService = Depends(get_auth_service),
) -> User:
    return auth.get_current_user(claims)


def get_user_tier(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MembershipTier:
    return resolve_user_tier(db, user.id)

# ----------------------------------------------------------------------
# Roles
# ----------------------------------------------------------------------
def require_roles(*roles: UserRole):
    allowed = {UserRole(r).value for r in roles}

    def dep(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            raise AccessDeniedError("Insufficient role")
        return user
    return dep
