"""Tasks 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from teamtasks.database import get_db
from teamtasks.exceptions import StoreError, handle_store_error
from teamtasks.middleware.auth_middleware import get_request_context
from teamtasks.schemas.task import (
    CompletionRequest,
    DoneRequest,
    OkResponse,
    TaskCreate,
    TaskDetailOut,
    TaskEnvelope,
    TaskIdRequest,
    TaskListOut,
    TaskUpdate,
)
from teamtasks.services import completion_service, task_service
from teamtasks.utils.permissions import RequestContext

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=TaskListOut)
def list_tasks(
    status_filter: Optional[str] = Query(None, alias="status"),
    team: Optional[str] = None,
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    try:
        tasks = task_service.list_tasks(
            db, ctx, status=status_filter, team=team, date_from=date_from, date_to=date_to,
        )
    except StoreError as e:
        raise handle_store_error(e)
    return TaskListOut(data=tasks)


@router.post("", response_model=TaskEnvelope, status_code=status.HTTP_201_CREATED)
def create_task(
    data: TaskCreate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    try:
        return TaskEnvelope(task=task_service.create_task(db, ctx, data))
    except StoreError as e:
        raise handle_store_error(e)


@router.put("", response_model=TaskEnvelope)
def update_task_by_body(
    data: TaskUpdate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    try:
        return TaskEnvelope(task=task_service.update_task(db, ctx, data.id, data))
    except StoreError as e:
        raise handle_store_error(e)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_task_by_query(
    task_id: Optional[int] = Query(None, alias="id"),
    data: Optional[TaskIdRequest] = Body(None),
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    if task_id is None and data is not None:
        task_id = data.id
    try:
        task_service.delete_task(db, ctx, task_id)
    except StoreError as e:
        raise handle_store_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{task_id}", response_model=TaskDetailOut)
def get_task(task_id: int, db: Session = Depends(get_db), ctx: RequestContext = Depends(get_request_context)):
    try:
        return TaskDetailOut(data=task_service.get_task(db, ctx, task_id))
    except StoreError as e:
        raise handle_store_error(e)


@router.put("/{task_id}", response_model=TaskEnvelope)
def update_task(
    task_id: int,
    data: TaskUpdate,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    try:
        return TaskEnvelope(task=task_service.update_task(db, ctx, task_id, data))
    except StoreError as e:
        raise handle_store_error(e)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: int, db: Session = Depends(get_db), ctx: RequestContext = Depends(get_request_context)):
    try:
        task_service.delete_task(db, ctx, task_id)
    except StoreError as e:
        raise handle_store_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{task_id}/complete", response_model=OkResponse)
def toggle_completion(
    task_id: int,
    data: Optional[CompletionRequest] = Body(None),
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    data = data or CompletionRequest()
    try:
        completion_service.set_completion(db, ctx, task_id, data.wants_done(), data.target_user_id())
    except StoreError as e:
        raise handle_store_error(e)
    return OkResponse()


@router.delete("/{task_id}/complete", response_model=OkResponse)
def undo_completion(
    task_id: int,
    assignee_id: Optional[int] = None,
    user_id: Optional[int] = None,
    uid: Optional[int] = None,
    profile_id: Optional[int] = None,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    target = CompletionRequest(
        assignee_id=assignee_id, user_id=user_id, uid=uid, profile_id=profile_id,
    ).target_user_id()
    try:
        completion_service.set_completion(db, ctx, task_id, False, target)
    except StoreError as e:
        raise handle_store_error(e)
    return OkResponse()


@router.post("/{task_id}/done", response_model=OkResponse)
def mark_done(
    task_id: int,
    data: DoneRequest,
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
):
    # 구 클라이언트 호환 경로. user_id 를 반드시 받는다.
    if data.user_id is None:
        raise HTTPException(status_code=400, detail="user_id는 필수입니다.")
    try:
        completion_service.set_completion(db, ctx, task_id, True, data.user_id)
    except StoreError as e:
        raise handle_store_error(e)
    return OkResponse()
