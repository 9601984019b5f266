"""User 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from teamtasks.database import Base


class User(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), unique=True, nullable=False)
    email = Column(String(100))
    first_name = Column(String(50))
    last_name = Column(String(50))
    role = Column(String(20), nullable=True)  # admin/captain/member, NULL이면 권한 없음
    member_team = Column(String(30))
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, server_default=func.now())

    assignments = relationship("TaskAssignee", back_populates="user")

    @property
    def full_name(self) -> str:
        parts = [str(p).strip() for p in (self.first_name, self.last_name) if p and str(p).strip()]
        if parts:
            return " ".join(parts)
        email = self.email or ""
        if "@" in email:
            return email.split("@")[0]
        return ""
