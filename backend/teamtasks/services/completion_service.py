"""담당자별 완료 표시(Yaptım / 되돌리기)를 처리하는 서비스입니다.

태스크 자체의 status 는 건드리지 않고 task_assignees 행만 수정한다.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from teamtasks.exceptions import StoreError
from teamtasks.services import assignment_store, task_store
from teamtasks.utils.permissions import RequestContext, has_role, is_staff

logger = logging.getLogger(__name__)


def _resolve_target(ctx: RequestContext, assignee_id: Optional[int]) -> int:
    target = assignee_id if assignee_id is not None else ctx.user_id
    if target != ctx.user_id and not is_staff(ctx):
        raise HTTPException(status_code=403, detail="다른 사용자의 완료 상태는 변경할 수 없습니다.")
    return target


def set_completion(
    db: Session,
    ctx: RequestContext,
    task_id: int,
    done: bool,
    assignee_id: Optional[int] = None,
):
    if not has_role(ctx):
        raise HTTPException(status_code=403, detail="완료 상태를 변경할 권한이 없습니다.")
    target = _resolve_target(ctx, assignee_id)
    task = task_store.get_task(db, task_id)
    if not task:
        raise HTTPException(status_code=404, detail="태스크를 찾을 수 없습니다.")

    row = assignment_store.get_assignment(db, task_id, target)
    if done:
        if row is None:
            if task.assignee_user_id != target:
                raise HTTPException(status_code=404, detail="해당 사용자에게 배정된 태스크가 아닙니다.")
            # 레거시 단일 담당자는 첫 완료 시 조인 테이블로 옮긴다.
            assignment_store.insert_one(db, task_id, target, is_done=True, done_at=datetime.utcnow())
            logger.info("task %s: legacy assignee %s migrated and marked done", task_id, target)
            return
        assignment_store.set_done(db, ctx, row, True)
        logger.info("task %s: user %s marked done by %s", task_id, target, ctx.user_id)
        return

    if row is None:
        # 행이 없으면 이미 미완료 상태와 같다.
        return
    try:
        assignment_store.set_done(db, ctx, row, False)
    except StoreError as exc:
        logger.warning("task %s: undo update rejected (%s), deleting assignment", task_id, exc.message)
        assignment_store.delete_assignment(db, ctx, row)
        logger.info("task %s: assignment for user %s removed as undo", task_id, target)
        return
    logger.info("task %s: user %s marked not done by %s", task_id, target, ctx.user_id)
