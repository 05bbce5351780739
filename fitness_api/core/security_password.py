# fitness_api/core/security_password.py
from __future__ import annotations

from typing import Tuple

from passlib.context import CryptContext


def build_password_context(time_cost: int = 3, memory_cost: int = 65536) -> CryptContext:
    # bcrypt stays verifiable for hashes created before the argon2 switch
    return CryptContext(
        schemes=["argon2", "bcrypt"],
        deprecated="auto",
        argon2__time_cost=time_cost,
        argon2__memory_cost=memory_cost,
        argon2__parallelism=1,
    )


class PasswordHasher:
    def __init__(self, context: CryptContext):
        self.context = context

    def hash(self, plain: str) -> str:
        return self.context.hash(plain)

    def verify_and_maybe_upgrade(self, plain: str, stored_hash: str | None) -> Tuple[bool, str | None]:
        """Return (ok, new_hash); new_hash is set when the stored hash is outdated."""
        if not plain or not stored_hash:
            return False, None
        try:
            ok = self.context.verify(plain, stored_hash)
        except ValueError:
            # unrecognised or malformed hash
            return False, None
        if not ok:
            return False, None
        if self.context.needs_update(stored_hash):
            return True, self.context.hash(plain)
        return True, None
