"""SQLAlchemy 모델 패키지 초기화 모듈입니다."""

from teamtasks.models.user import User
from teamtasks.models.task import Task, TaskAssignee

__all__ = [
    "User",
    "Task", "TaskAssignee",
]
