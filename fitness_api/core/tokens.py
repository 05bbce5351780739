# fitness_api/core/tokens.py
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

from jose import JWTError, jwt

from fitness_api.core.config import Settings

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Signs and verifies the access/refresh pair.

    Access and refresh tokens use separate secrets, so a leaked refresh
    secret cannot mint access tokens and the other way around. Expiry is
    checked by the ``exp`` claim when decoding.
    """

    def __init__(self, settings: Settings, clock: Clock = _utcnow):
        settings.validate_secrets()
        self._access_secret = settings.SECRET_KEY
        self._refresh_secret = settings.REFRESH_SECRET_KEY
        self._algorithm = settings.ALGORITHM
        self.access_ttl = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        self.refresh_ttl = timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
        self._clock = clock

    def _payload(self, token_type: str, sub: Any, ttl: timedelta, extra: Dict[str, Any]) -> Dict[str, Any]:
        now = self._clock()
        payload: Dict[str, Any] = {
            "type": token_type,
            "sub": str(sub),
            "jti": uuid.uuid4().hex,
            "iat": int(now.timestamp()),
            "exp": int((now + ttl).timestamp()),
        }
        payload.update(extra)
        return payload

    def create_access_token(self, *, user_id: int, email: str, role: str) -> str:
        payload = self._payload("access", user_id, self.access_ttl, {"email": email, "role": role})
        return jwt.encode(payload, self._access_secret, algorithm=self._algorithm)

    def create_refresh_token(self, *, user_id: int) -> str:
        payload = self._payload("refresh", user_id, self.refresh_ttl, {})
        return jwt.encode(payload, self._refresh_secret, algorithm=self._algorithm)

    def issue_pair(self, *, user_id: int, email: str, role: str) -> Dict[str, str]:
        return {
            "access_token": self.create_access_token(user_id=user_id, email=email, role=role),
            "refresh_token": self.create_refresh_token(user_id=user_id),
        }

    def _decode(self, token: str, secret: str, token_type: str) -> Optional[Dict[str, Any]]:
        if not token:
            return None
        try:
            payload = jwt.decode(token, secret, algorithms=[self._algorithm])
        except JWTError:
            return None
        if not isinstance(payload, dict):
            return None
        if payload.get("type") != token_type:
            return None
        if not payload.get("sub") or not payload.get("jti"):
            return None
        return payload

    def decode_access(self, token: str) -> Optional[Dict[str, Any]]:
        payload = self._decode(token, self._access_secret, "access")
        if payload is None or not payload.get("email"):
            return None
        return payload

    def decode_refresh(self, token: str) -> Optional[Dict[str, Any]]:
        return self._decode(token, self._refresh_secret, "refresh")


def subject_id(payload: Dict[str, Any]) -> Optional[int]:
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        return None
