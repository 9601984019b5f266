"""Auth Service 도메인 서비스 레이어입니다. 비즈니스 규칙과 데이터 접근 흐름을 캡슐화합니다."""

from datetime import datetime, timedelta
from jose import jwt
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from teamtasks.models.user import User
from teamtasks.config import settings

ALGORITHM = "HS256"


def create_access_token(user_id: int) -> str:
    expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {"sub": str(user_id), "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def _find_active_by_username(db: Session, username: str):
    name = (username or "").strip()
    if not name:
        return None
    return db.query(User).filter(User.username == name, User.is_active == True).first()  # noqa: E712


def mock_login(db: Session, username: str) -> User:
    user = _find_active_by_username(db, username)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"'{username}'에 해당하는 활성 사용자를 찾을 수 없습니다.",
        )
    return user


def resolve_username(db: Session, username: str) -> str:
    if not (username or "").strip():
        raise HTTPException(status_code=400, detail="username은 필수입니다.")
    user = _find_active_by_username(db, username)
    if not user or not user.email:
        raise HTTPException(status_code=404, detail="사용자를 찾을 수 없습니다.")
    return user.email
