# fitness_api/api/v1/auth.py
from fastapi import APIRouter, Depends, status

from fitness_api.api.deps import get_auth_service, get_current_user
from fitness_api.models.user import User
from fitness_api.schemas.token import AuthResponse, RefreshIn, TokenPair
from fitness_api.schemas.user import LoginIn, UserCreate, UserOut
from fitness_api.services.auth import AuthService

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(body: UserCreate, auth: AuthService = Depends(get_auth_service)):
    return auth.register(
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        role=body.role,
        phone=body.phone,
    )


@router.post("/login", response_model=AuthResponse)
def login(body: LoginIn, auth: AuthService = Depends(get_auth_service)):
    return auth.login(body.email, body.password)


@router.post("/refresh-token", response_model=TokenPair)
def refresh_token(body: RefreshIn, auth: AuthService = Depends(get_auth_service)):
    return auth.refresh(body.refresh_token)


@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)):
    return user


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(user: User = Depends(get_current_user), auth: AuthService = Depends(get_auth_service)):
    auth.logout(user.id)
    return None
