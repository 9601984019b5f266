"""Permissions 관련 공용 유틸리티 헬퍼입니다."""

from dataclasses import dataclass
from typing import Optional

from teamtasks.models.task import TaskAssignee
from teamtasks.models.user import User


ADMIN = "admin"
CAPTAIN = "captain"
MEMBER = "member"

STAFF_ROLES = (ADMIN, CAPTAIN)
ALL_ROLES = (ADMIN, CAPTAIN, MEMBER)


@dataclass(frozen=True)
class RequestContext:
    """요청마다 만들어지는 호출자 신원/역할 정보."""

    user: User
    user_id: int
    email: Optional[str]
    role: Optional[str]

    @classmethod
    def from_user(cls, user: User) -> "RequestContext":
        role = user.role if user.role in ALL_ROLES else None
        return cls(user=user, user_id=user.user_id, email=user.email, role=role)


def is_staff(ctx: RequestContext) -> bool:
    return ctx.role in STAFF_ROLES


def has_role(ctx: RequestContext) -> bool:
    return ctx.role in ALL_ROLES


def can_modify_assignment(ctx: RequestContext, row: TaskAssignee) -> bool:
    # 행 단위 정책: 관리자/캡틴은 모든 행, 멤버는 본인 행만
    return is_staff(ctx) or row.user_id == ctx.user_id
