"""Auth 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from teamtasks.database import get_db
from teamtasks.schemas.user import (
    LoginRequest,
    ResolveUsernameRequest,
    ResolveUsernameResponse,
    TokenResponse,
    UserOut,
)
from teamtasks.services.auth_service import create_access_token, mock_login, resolve_username
from teamtasks.middleware.auth_middleware import get_current_user
from teamtasks.models.user import User

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    user = mock_login(db, request.username)
    token = create_access_token(user.user_id)
    return TokenResponse(access_token=token, user=UserOut.model_validate(user))


@router.post("/resolve-username", response_model=ResolveUsernameResponse)
def resolve(request: ResolveUsernameRequest, db: Session = Depends(get_db)):
    return ResolveUsernameResponse(email=resolve_username(db, request.username or ""))


@router.post("/logout")
def logout(current_user: User = Depends(get_current_user)):
    return {"message": "로그아웃 되었습니다."}
