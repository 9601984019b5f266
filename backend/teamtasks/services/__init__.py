"""서비스 레이어 패키지 초기화 모듈입니다."""

from teamtasks.services import (
    assignment_store,
    task_store,
    task_aggregator,
    task_service,
    completion_service,
    auth_service,
    member_service,
)
