"""Members / Me 기능 API 라우터입니다."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from teamtasks.database import get_db
from teamtasks.middleware.auth_middleware import get_optional_context, get_request_context
from teamtasks.schemas.user import MeOut, MemberListOut
from teamtasks.services import member_service
from teamtasks.utils.permissions import RequestContext

router = APIRouter(prefix="/api", tags=["members"])


@router.get("/me", response_model=MeOut)
def me(ctx: Optional[RequestContext] = Depends(get_optional_context)):
    return member_service.describe_me(ctx)


@router.get("/members", response_model=MemberListOut)
def list_members(
    team: Optional[str] = None,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    return MemberListOut(items=member_service.list_members(db, ctx, team=team))
