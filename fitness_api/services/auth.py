# fitness_api/services/auth.py
"""Credential verification and the access/refresh session lifecycle.

Each user holds at most one live refresh token, stored on the user row. A
login or a refresh overwrites it and a logout clears it, so a refresh token
is accepted only while it equals the stored value.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fitness_api.core.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from fitness_api.core.security_password import PasswordHasher
from fitness_api.core.tokens import TokenService, subject_id
from fitness_api.crud.user import user_crud
from fitness_api.models.enums import UserRole
from fitness_api.models.user import User

logger = logging.getLogger(__name__)


def _require(value: Optional[str], field: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required")
    return value


class AuthService:
    def __init__(self, db: Session, tokens: TokenService, passwords: PasswordHasher):
        self.db = db
        self.tokens = tokens
        self.passwords = passwords

    def _issue(self, user: User) -> Dict[str, str]:
        pair = self.tokens.issue_pair(user_id=user.id, email=user.email, role=user.role)
        user_crud.set_refresh_token(self.db, user, pair["refresh_token"])
        return pair

    def register(self, email: str, password: str, first_name: str, last_name: str,
                 role: Optional[str] = None, phone: Optional[str] = None) -> Dict[str, Any]:
        _require(email, "email")
        _require(password, "password")
        _require(first_name, "first_name")
        _require(last_name, "last_name")
        if role is None:
            role = UserRole.CLIENT.value
        else:
            try:
                role = UserRole(role).value
            except ValueError:
                raise ValidationError(f"Unknown role: {role!r}")

        if user_crud.get_by_email(self.db, email) is not None:
            raise ConflictError("User with this email already exists")

        try:
            user = user_crud.create(self.db, {
                "email": email,
                "hashed_password": self.passwords.hash(password),
                "first_name": first_name,
                "last_name": last_name,
                "role": role,
                "phone": phone,
            })
        except IntegrityError:
            # lost a race with a concurrent registration
            self.db.rollback()
            raise ConflictError("User with this email already exists")
        pair = self._issue(user)
        logger.info("registered user id=%s role=%s", user.id, user.role)
        return {"user": user, **pair}

    def login(self, email: str, password: str) -> Dict[str, Any]:
        user = user_crud.get_by_email(self.db, email) if email else None
        if user is None:
            logger.warning("login failed: unknown account")
            raise AuthenticationError()

        ok, new_hash = self.passwords.verify_and_maybe_upgrade(password, user.hashed_password)
        if not ok:
            logger.warning("login failed for user id=%s", user.id)
            raise AuthenticationError()
        if new_hash:
            user_crud.update(self.db, user, {"hashed_password": new_hash})
            logger.info("password hash upgraded for user id=%s", user.id)

        pair = self._issue(user)
        logger.info("login ok for user id=%s", user.id)
        return {"user": user, **pair}

    def refresh(self, refresh_token: str) -> Dict[str, str]:
        payload = self.tokens.decode_refresh(refresh_token)
        if payload is None:
            logger.warning("refresh rejected: token did not verify")
            raise AuthenticationError("Invalid token")

        user_id = subject_id(payload)
        user = user_crud.get(self.db, user_id) if user_id is not None else None
        if user is None:
            logger.warning("refresh rejected: unknown subject")
            raise AuthenticationError("Invalid token")
        if not user.refresh_token or user.refresh_token != refresh_token:
            logger.warning("refresh rejected: superseded token for user id=%s", user.id)
            raise AuthenticationError("Invalid token")

        return self._issue(user)

    def logout(self, user_id: int) -> None:
        user = user_crud.get(self.db, user_id)
        if user is None:
            raise NotFoundError("User not found")
        user_crud.set_refresh_token(self.db, user, None)
        logger.info("logout for user id=%s", user_id)

    def get_current_user(self, claims: Dict[str, Any]) -> User:
        user_id = subject_id(claims)
        if user_id is None:
            raise AuthenticationError("Invalid token")
        user = user_crud.get(self.db, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user
