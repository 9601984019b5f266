"""Task 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel
from typing import List, Optional, Union
from datetime import date, datetime

# 날짜 필드는 서비스 레이어에서 YYYY-MM-DD 로 정규화한다.
DateInput = Optional[Union[str, int, float]]


class AssigneeOut(BaseModel):
    id: int
    done: bool = False


class TaskCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    start_date: DateInput = None
    end_date: DateInput = None
    due_date: DateInput = None
    status: Optional[str] = None
    assignee_team: Optional[str] = None
    assignee_user_id: Optional[int] = None
    assignee_user_ids: List[Optional[int]] = []


class TaskUpdate(BaseModel):
    id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    start_date: DateInput = None
    end_date: DateInput = None
    due_date: DateInput = None
    status: Optional[str] = None
    assignee_team: Optional[str] = None
    assignee_user_id: Optional[int] = None
    assignee_user_ids: Optional[List[Optional[int]]] = None


class TaskOut(BaseModel):
    task_id: int
    title: str
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    due_date: Optional[date] = None
    status: str
    assignee_team: Optional[str] = None
    assignee_user_id: Optional[int] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    assignees: List[AssigneeOut] = []

    model_config = {"from_attributes": True}


class TaskListOut(BaseModel):
    data: List[TaskOut]


class TaskDetailOut(BaseModel):
    data: TaskOut


class TaskEnvelope(BaseModel):
    task: TaskOut


class TaskIdRequest(BaseModel):
    id: Optional[int] = None


class CompletionRequest(BaseModel):
    done: Optional[bool] = None
    is_done: Optional[bool] = None
    assignee_id: Optional[int] = None
    user_id: Optional[int] = None
    uid: Optional[int] = None
    profile_id: Optional[int] = None

    def wants_done(self) -> bool:
        if self.done is not None:
            return self.done
        if self.is_done is not None:
            return self.is_done
        return True

    def target_user_id(self) -> Optional[int]:
        for value in (self.assignee_id, self.user_id, self.uid, self.profile_id):
            if value is not None:
                return value
        return None


class DoneRequest(BaseModel):
    user_id: Optional[int] = None


class OkResponse(BaseModel):
    ok: bool = True
