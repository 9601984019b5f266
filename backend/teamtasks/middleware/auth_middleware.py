from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from jose import JWTError, jwt
from teamtasks.database import get_db
from teamtasks.models.user import User
from teamtasks.config import settings
from teamtasks.utils.permissions import RequestContext

security = HTTPBearer()

ALGORITHM = "HS256"


def decode_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
        return payload
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def _load_active_user(db: Session, user_id) -> Optional[User]:
    return db.query(User).filter(User.user_id == int(user_id), User.is_active == True).first()  # noqa: E712


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    payload = decode_token(credentials.credentials)
    user_id = payload.get("sub")
    if user_id is None:
        raise HTTPException(status_code=401, detail="Invalid token payload")

    user = _load_active_user(db, user_id)
    if not user:
        raise HTTPException(status_code=401, detail="User not found or inactive")
    return user


def get_request_context(current_user: User = Depends(get_current_user)) -> RequestContext:
    return RequestContext.from_user(current_user)


def get_optional_context(
    credentials: HTTPAuthorizationCredentials = Depends(HTTPBearer(auto_error=False)),
    db: Session = Depends(get_db),
) -> Optional[RequestContext]:
    """익명 호출을 허용하는 엔드포인트용. 토큰이 없거나 무효하면 None."""
    if credentials is None:
        return None
    try:
        payload = jwt.decode(credentials.credentials, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    user_id = payload.get("sub")
    if user_id is None:
        return None
    user = _load_active_user(db, user_id)
    return RequestContext.from_user(user) if user else None
