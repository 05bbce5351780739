# fitness_api/services/users.py
from sqlalchemy.orm import Session

from fitness_api.core.errors import ValidationError
from fitness_api.crud.user import user_crud
from fitness_api.models.user import User
from fitness_api.schemas.user import ProfileUpdate


class ProfileService:
    def __init__(self, db: Session):
        self.db = db

    def update(self, user: User, body: ProfileUpdate) -> User:
        if not body.first_name.strip() or not body.last_name.strip():
            raise ValidationError("First name and last name are required")
        return user_crud.update(self.db, user, body)

    def set_picture(self, user: User, url: str) -> User:
        if not url.startswith(("http://", "https://")):
            raise ValidationError("Picture must be an http(s) URL")
        return user_crud.update(self.db, user, {"avatar": url})

    def delete_picture(self, user: User) -> User:
        return user_crud.update(self.db, user, {"avatar": None})
