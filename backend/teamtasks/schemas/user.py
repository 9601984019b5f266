"""User 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class UserOut(BaseModel):
    user_id: int
    username: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[str] = None
    member_team: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class MemberOut(BaseModel):
    user_id: int
    username: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    name: str = ""
    role: Optional[str] = None
    member_team: Optional[str] = None


class MemberListOut(BaseModel):
    items: List[MemberOut]


class MeOut(BaseModel):
    userId: Optional[int] = None
    email: Optional[str] = None
    role: Optional[str] = None
    name: str = ""
    team: Optional[str] = None


class LoginRequest(BaseModel):
    username: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


class ResolveUsernameRequest(BaseModel):
    username: Optional[str] = None


class ResolveUsernameResponse(BaseModel):
    email: str
