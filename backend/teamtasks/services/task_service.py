"""Task Service 도메인 서비스 레이어입니다. 비즈니스 규칙과 데이터 접근 흐름을 캡슐화합니다."""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from teamtasks.models.task import Task
from teamtasks.models.user import User
from teamtasks.schemas.task import TaskCreate, TaskOut, TaskUpdate
from teamtasks.services import assignment_store, task_store
from teamtasks.services.task_aggregator import decorate_task, decorate_tasks
from teamtasks.utils.dates import is_blank, parse_ymd
from teamtasks.utils.helpers import TASK_STATUSES, TEAMS, normalize_team, unique_ids
from teamtasks.utils.permissions import RequestContext, has_role, is_staff

logger = logging.getLogger(__name__)

DATE_FIELDS = ("start_date", "end_date", "due_date")


def _ensure_can_read(ctx: RequestContext):
    if not has_role(ctx):
        raise HTTPException(status_code=403, detail="태스크를 볼 권한이 없습니다.")


def _ensure_staff(ctx: RequestContext):
    if not is_staff(ctx):
        raise HTTPException(status_code=403, detail="관리자/캡틴만 태스크를 수정할 수 있습니다.")


def _ensure_can_delete(ctx: RequestContext):
    if not is_staff(ctx):
        raise HTTPException(status_code=403, detail="관리자/캡틴만 태스크를 삭제할 수 있습니다.")


def _validate_status(status: Optional[str]) -> str:
    if status not in TASK_STATUSES:
        raise HTTPException(status_code=400, detail="유효하지 않은 status 값입니다.")
    return status


def _validate_team(raw: Optional[str]) -> Optional[str]:
    if is_blank(raw):
        return None
    team = normalize_team(raw)
    if team not in TEAMS:
        raise HTTPException(status_code=400, detail="유효하지 않은 assignee_team 값입니다.")
    return team


def _validate_date_order(start: Optional[date], end: Optional[date]):
    if start and end and end < start:
        raise HTTPException(status_code=400, detail="종료일은 시작일보다 빠를 수 없습니다.")


def _validate_assignees(db: Session, user_ids: List[int]):
    if not user_ids:
        return
    found = {
        row[0]
        for row in db.query(User.user_id)
        .filter(User.user_id.in_(user_ids), User.is_active == True)  # noqa: E712
        .all()
    }
    missing = [uid for uid in user_ids if uid not in found]
    if missing:
        raise HTTPException(
            status_code=400,
            detail=f"존재하지 않는 담당자입니다: {', '.join(str(m) for m in missing)}",
        )


def _is_visible_to(task: TaskOut, ctx: RequestContext) -> bool:
    if is_staff(ctx):
        return True
    return any(a.id == ctx.user_id for a in task.assignees)


def list_tasks(
    db: Session,
    ctx: RequestContext,
    status: Optional[str] = None,
    team: Optional[str] = None,
    date_from: Any = None,
    date_to: Any = None,
) -> List[TaskOut]:
    _ensure_can_read(ctx)
    start = parse_ymd(date_from, "from")
    end = parse_ymd(date_to, "to")
    if status:
        _validate_status(status)
    if team:
        team = _validate_team(team)

    tasks = task_store.list_tasks(db, status=status, team=team, date_from=start, date_to=end)
    decorated = decorate_tasks(db, tasks)
    # 멤버는 본인에게 배정된 태스크만 본다.
    return [t for t in decorated if _is_visible_to(t, ctx)]


def get_task(db: Session, ctx: RequestContext, task_id: int) -> TaskOut:
    _ensure_can_read(ctx)
    task = task_store.get_task(db, task_id)
    if not task:
        raise HTTPException(status_code=404, detail="태스크를 찾을 수 없습니다.")
    out = decorate_task(db, task)
    if not _is_visible_to(out, ctx):
        raise HTTPException(status_code=404, detail="태스크를 찾을 수 없습니다.")
    return out


def create_task(db: Session, ctx: RequestContext, data: TaskCreate) -> TaskOut:
    _ensure_staff(ctx)
    title = (data.title or "").strip()
    if not title:
        raise HTTPException(status_code=400, detail="제목은 필수입니다.")
    start = parse_ymd(data.start_date, "start_date")
    end = parse_ymd(data.end_date, "end_date")
    due = parse_ymd(data.due_date, "due_date")
    if not start or not end:
        raise HTTPException(status_code=400, detail="시작일과 종료일은 필수입니다.")
    _validate_date_order(start, end)
    status = _validate_status(data.status or "open")
    team = _validate_team(data.assignee_team)

    user_ids = unique_ids(data.assignee_user_ids)
    legacy_id = data.assignee_user_id if data.assignee_user_id is not None else (user_ids[0] if user_ids else None)
    _validate_assignees(db, unique_ids(user_ids + [legacy_id]))

    task = task_store.insert_task(db, {
        "title": title,
        "description": data.description or None,
        "status": status,
        "start_date": start,
        "end_date": end,
        "due_date": due or end,
        "assignee_team": team,
        "assignee_user_id": legacy_id,
        "created_by": ctx.user_id,
    })
    assignment_store.insert_many(db, task.task_id, user_ids)
    logger.info("task %s created by user %s (assignees=%s)", task.task_id, ctx.user_id, user_ids)
    return decorate_task(db, task)


def _build_patch(db: Session, task: Task, data: TaskUpdate) -> Dict[str, Any]:
    fields = data.model_fields_set
    patch: Dict[str, Any] = {}

    if "title" in fields:
        title = (data.title or "").strip()
        if not title:
            raise HTTPException(status_code=400, detail="제목은 비울 수 없습니다.")
        patch["title"] = title
    if "description" in fields:
        patch["description"] = None if is_blank(data.description) else data.description
    if "status" in fields:
        patch["status"] = _validate_status(data.status)
    if "assignee_team" in fields:
        patch["assignee_team"] = _validate_team(data.assignee_team)

    for field in DATE_FIELDS:
        if field in fields:
            patch[field] = parse_ymd(getattr(data, field), field)
    if "end_date" in fields and "due_date" not in fields:
        patch["due_date"] = patch["end_date"]

    _validate_date_order(patch.get("start_date", task.start_date), patch.get("end_date", task.end_date))

    # 레거시 단일 담당자는 명시 값, 없으면 교체 목록의 첫 번째를 따른다.
    if "assignee_user_id" in fields:
        patch["assignee_user_id"] = data.assignee_user_id
    elif "assignee_user_ids" in fields and data.assignee_user_ids is not None:
        # 빈 목록으로 교체하면 레거시 담당자도 비워야 fallback 으로 되살아나지 않는다.
        replacement = unique_ids(data.assignee_user_ids)
        patch["assignee_user_id"] = replacement[0] if replacement else None
    if patch.get("assignee_user_id") is not None:
        _validate_assignees(db, [patch["assignee_user_id"]])
    return patch


def update_task(db: Session, ctx: RequestContext, task_id: Optional[int], data: TaskUpdate) -> TaskOut:
    _ensure_staff(ctx)
    if task_id is None:
        raise HTTPException(status_code=400, detail="id는 필수입니다.")
    task = task_store.get_task(db, task_id)
    if not task:
        raise HTTPException(status_code=404, detail="태스크를 찾을 수 없습니다.")

    patch = _build_patch(db, task, data)
    replace_assignees = "assignee_user_ids" in data.model_fields_set and data.assignee_user_ids is not None
    new_user_ids = unique_ids(data.assignee_user_ids or [])
    if replace_assignees:
        _validate_assignees(db, new_user_ids)
    if not patch and not replace_assignees:
        raise HTTPException(status_code=400, detail="수정할 항목이 없습니다.")

    # 태스크 수정과 담당자 교체는 별도 커밋이다.
    if patch:
        updated = task_store.update_task(db, task_id, patch)
        if not updated:
            raise HTTPException(status_code=404, detail="태스크를 찾을 수 없습니다.")
    if replace_assignees:
        assignment_store.delete_for_task(db, task_id)
        assignment_store.insert_many(db, task_id, new_user_ids)

    logger.info(
        "task %s updated by user %s (fields=%s, assignees=%s)",
        task_id, ctx.user_id, sorted(patch), new_user_ids if replace_assignees else "unchanged",
    )
    task = task_store.get_task(db, task_id)
    if not task:
        raise HTTPException(status_code=404, detail="태스크를 찾을 수 없습니다.")
    return decorate_task(db, task)


def delete_task(db: Session, ctx: RequestContext, task_id: Optional[int]):
    _ensure_can_delete(ctx)
    if task_id is None:
        raise HTTPException(status_code=400, detail="id는 필수입니다.")
    # 조인 행을 먼저 지워 고아 행이 남지 않게 한다.
    removed = assignment_store.delete_for_task(db, task_id)
    count = task_store.delete_task(db, task_id)
    if count == 0:
        raise HTTPException(status_code=404, detail="태스크를 찾을 수 없습니다.")
    logger.info("task %s deleted by user %s (%s assignees removed)", task_id, ctx.user_id, removed)
