# fitness_api/crud/user.py
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from fitness_api.crud.base import CRUDBase
from fitness_api.models.user import User
from fitness_api.schemas.user import ProfileUpdate, UserCreate


class CRUDUser(CRUDBase[User, UserCreate, ProfileUpdate]):
    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        # exact match, no case folding
        return db.execute(select(User).where(User.email == email)).scalar_one_or_none()

    def create(self, db: Session, obj_in: UserCreate | Dict[str, Any], extra: Dict[str, Any] | None = None) -> User:
        data = dict(obj_in) if isinstance(obj_in, dict) else obj_in.model_dump()
        data.pop("password", None)
        if extra: data.update(extra)
        user = User(**data)
        db.add(user); db.commit(); db.refresh(user)
        return user

    def set_refresh_token(self, db: Session, user: User, token: Optional[str]) -> User:
        return self.update(db, user, {"refresh_token": token})


user_crud = CRUDUser(User)
