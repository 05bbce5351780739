# fitness_api/api/v1/users.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fitness_api.api.deps import get_current_user, get_db
from fitness_api.models.user import User
from fitness_api.schemas.user import PictureIn, ProfileUpdate, UserOut
from fitness_api.services.users import ProfileService

router = APIRouter()


@router.get("/profile", response_model=UserOut)
def get_profile(user: User = Depends(get_current_user)):
    return user


@router.put("/profile", response_model=UserOut)
def update_profile(body: ProfileUpdate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return ProfileService(db).update(user, body)


@router.put("/profile/picture", response_model=UserOut)
def set_picture(body: PictureIn, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return ProfileService(db).set_picture(user, str(body.url))


@router.delete("/profile/picture", response_model=UserOut)
def delete_picture(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return ProfileService(db).delete_picture(user)
