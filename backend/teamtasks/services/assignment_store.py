"""task_assignees 조인 테이블 저장소 어댑터입니다.

쓰기 경로 중 개별 행 수정/삭제는 행 단위 접근 정책(can_modify_assignment)을
거친다. 정책에 걸리면 StorePolicyError 를 올린다.
"""

from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from teamtasks.exceptions import StorePolicyError
from teamtasks.models.task import TaskAssignee
from teamtasks.utils.permissions import RequestContext, can_modify_assignment
from teamtasks.utils.store import store_guard


def list_for_tasks(db: Session, task_ids: Iterable[int]) -> List[TaskAssignee]:
    ids = list(task_ids)
    if not ids:
        return []
    with store_guard(db, "select task_assignees"):
        return (
            db.query(TaskAssignee)
            .filter(TaskAssignee.task_id.in_(ids))
            .order_by(TaskAssignee.id)
            .all()
        )


def list_for_task(db: Session, task_id: int) -> List[TaskAssignee]:
    return list_for_tasks(db, [task_id])


def get_assignment(db: Session, task_id: int, user_id: int) -> Optional[TaskAssignee]:
    with store_guard(db, "select task_assignee"):
        return (
            db.query(TaskAssignee)
            .filter(TaskAssignee.task_id == task_id, TaskAssignee.user_id == user_id)
            .first()
        )


def insert_many(db: Session, task_id: int, user_ids: List[int]) -> List[TaskAssignee]:
    if not user_ids:
        return []
    with store_guard(db, "insert task_assignees"):
        rows = [TaskAssignee(task_id=task_id, user_id=uid, is_done=False) for uid in user_ids]
        db.add_all(rows)
        db.commit()
        return rows


def insert_one(
    db: Session,
    task_id: int,
    user_id: int,
    is_done: bool = False,
    done_at: Optional[datetime] = None,
) -> TaskAssignee:
    with store_guard(db, "insert task_assignee"):
        row = TaskAssignee(task_id=task_id, user_id=user_id, is_done=is_done, done_at=done_at)
        db.add(row)
        db.commit()
        db.refresh(row)
        return row


def delete_for_task(db: Session, task_id: int) -> int:
    with store_guard(db, "delete task_assignees"):
        count = (
            db.query(TaskAssignee)
            .filter(TaskAssignee.task_id == task_id)
            .delete(synchronize_session=False)
        )
        db.commit()
        return count


def set_done(
    db: Session,
    ctx: RequestContext,
    row: TaskAssignee,
    done: bool,
) -> TaskAssignee:
    if not can_modify_assignment(ctx, row):
        raise StorePolicyError("permission denied for task_assignees update")
    with store_guard(db, "update task_assignee"):
        row.is_done = done
        row.done_at = datetime.utcnow() if done else None
        db.commit()
        db.refresh(row)
        return row


def delete_assignment(db: Session, ctx: RequestContext, row: TaskAssignee) -> None:
    if not can_modify_assignment(ctx, row):
        raise StorePolicyError("permission denied for task_assignees delete")
    with store_guard(db, "delete task_assignee"):
        db.delete(row)
        db.commit()
