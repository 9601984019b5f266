"""Member Service 도메인 서비스 레이어입니다. 프로필 조회와 /me 응답 구성을 담당합니다."""

from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from teamtasks.models.user import User
from teamtasks.schemas.user import MeOut, MemberOut
from teamtasks.utils.helpers import TEAMS, normalize_team
from teamtasks.utils.permissions import RequestContext, has_role


def to_member_out(user: User) -> MemberOut:
    return MemberOut(
        user_id=user.user_id,
        username=user.username,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        name=user.full_name,
        role=user.role,
        member_team=normalize_team(user.member_team),
    )


def describe_me(ctx: Optional[RequestContext]) -> MeOut:
    if ctx is None:
        return MeOut()
    return MeOut(
        userId=ctx.user_id,
        email=ctx.email,
        role=ctx.role,
        name=ctx.user.full_name,
        team=normalize_team(ctx.user.member_team),
    )


def list_members(db: Session, ctx: RequestContext, team: Optional[str] = None) -> List[MemberOut]:
    if not has_role(ctx):
        # 역할이 없는 사용자는 본인 프로필만 본다.
        return [to_member_out(ctx.user)]

    team_key = None
    if team:
        team_key = normalize_team(team)
        if team_key not in TEAMS:
            raise HTTPException(status_code=400, detail="유효하지 않은 team 값입니다.")

    users = (
        db.query(User)
        .filter(User.is_active == True)  # noqa: E712
        .order_by(User.first_name, User.user_id)
        .all()
    )
    members = [to_member_out(u) for u in users]
    if team_key:
        # 저장된 member_team 은 표기가 제각각이라 정규화 후 비교한다.
        members = [m for m in members if m.member_team == team_key]
    return members
