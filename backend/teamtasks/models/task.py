"""Task 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Boolean, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from teamtasks.database import Base


class Task(Base):
    __tablename__ = "tasks"

    task_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    start_date = Column(Date)
    end_date = Column(Date)
    due_date = Column(Date)
    status = Column(String(20), nullable=False, default="open")  # open/assigned/done
    assignee_team = Column(String(20))  # yazilim/mekanik/elektronik/sosyal
    # 레거시 단일 담당자. task_assignees 이전 데이터 호환용으로만 읽는다.
    assignee_user_id = Column(Integer, ForeignKey("users.user_id"), nullable=True)
    created_by = Column(Integer, ForeignKey("users.user_id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    __table_args__ = (
        Index("idx_task_status", "status"),
        Index("idx_task_team", "assignee_team"),
        Index("idx_task_dates", "start_date", "end_date"),
    )


class TaskAssignee(Base):
    __tablename__ = "task_assignees"

    id = Column(Integer, primary_key=True, autoincrement=True)
    task_id = Column(Integer, ForeignKey("tasks.task_id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    is_done = Column(Boolean, nullable=False, default=False)
    done_at = Column(DateTime)

    user = relationship("User", back_populates="assignments")

    __table_args__ = (
        UniqueConstraint("task_id", "user_id", name="uq_task_assignee"),
        Index("idx_task_assignee_task", "task_id"),
        Index("idx_task_assignee_user", "user_id"),
    )
