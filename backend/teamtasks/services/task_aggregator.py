"""태스크 행과 담당자 조인 행을 합쳐 응답용 레코드를 만듭니다."""

from collections import defaultdict
from typing import Dict, List

from sqlalchemy.orm import Session

from teamtasks.models.task import Task, TaskAssignee
from teamtasks.schemas.task import AssigneeOut, TaskOut
from teamtasks.services import assignment_store


def group_assignees(rows: List[TaskAssignee]) -> Dict[int, List[AssigneeOut]]:
    grouped: Dict[int, List[AssigneeOut]] = defaultdict(list)
    for row in rows:
        grouped[row.task_id].append(AssigneeOut(id=row.user_id, done=bool(row.is_done)))
    return grouped


def build_task_out(task: Task, assignees: List[AssigneeOut]) -> TaskOut:
    # 조인 행이 없으면 레거시 단일 담당자를 미완료로 보여 준다.
    if not assignees and task.assignee_user_id is not None:
        assignees = [AssigneeOut(id=task.assignee_user_id, done=False)]
    out = TaskOut.model_validate(task)
    out.assignees = list(assignees)
    return out


def decorate_tasks(db: Session, tasks: List[Task]) -> List[TaskOut]:
    """태스크 순서는 그대로 두고, 담당자는 한 번의 IN 조회로 붙인다."""
    if not tasks:
        return []
    rows = assignment_store.list_for_tasks(db, [t.task_id for t in tasks])
    grouped = group_assignees(rows)
    return [build_task_out(t, grouped.get(t.task_id, [])) for t in tasks]


def decorate_task(db: Session, task: Task) -> TaskOut:
    return decorate_tasks(db, [task])[0]
