"""tasks 테이블 저장소 어댑터입니다. 조회/삽입/부분 수정/삭제만 담당합니다."""

from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from teamtasks.models.task import Task
from teamtasks.utils.store import store_guard


def list_tasks(
    db: Session,
    status: Optional[str] = None,
    team: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> List[Task]:
    with store_guard(db, "select tasks"):
        q = db.query(Task)
        if status:
            q = q.filter(Task.status == status)
        if team:
            q = q.filter(Task.assignee_team == team)
        if date_from:
            q = q.filter(Task.start_date >= date_from)
        if date_to:
            q = q.filter(Task.end_date <= date_to)
        return q.order_by(Task.created_at.desc(), Task.task_id.desc()).all()


def get_task(db: Session, task_id: int) -> Optional[Task]:
    with store_guard(db, "select task"):
        return db.query(Task).filter(Task.task_id == task_id).first()


def insert_task(db: Session, values: Dict[str, Any]) -> Task:
    with store_guard(db, "insert task"):
        task = Task(**values)
        db.add(task)
        db.commit()
        db.refresh(task)
        return task


def update_task(db: Session, task_id: int, patch: Dict[str, Any]) -> Optional[Task]:
    with store_guard(db, "update task"):
        task = db.query(Task).filter(Task.task_id == task_id).first()
        if not task:
            return None
        for k, v in patch.items():
            setattr(task, k, v)
        db.commit()
        db.refresh(task)
        return task


def delete_task(db: Session, task_id: int) -> int:
    """삭제된 행 수를 돌려준다."""
    with store_guard(db, "delete task"):
        count = db.query(Task).filter(Task.task_id == task_id).delete(synchronize_session=False)
        db.commit()
        return count
