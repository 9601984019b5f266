"""저장소 계층 예외 정의입니다.

저장소 어댑터는 SQLAlchemy 오류를 그대로 노출하지 않고 사람이 읽을 수 있는
메시지를 가진 StoreError 로 감싸서 올린다. 라우터는 handle_store_error 로
이를 HTTPException 으로 바꾼다.
"""

from fastapi import HTTPException, status


class StoreError(Exception):
    """저장소 접근 실패 (연결, 제약 조건 위반 등)."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class StorePolicyError(StoreError):
    """행 단위 접근 정책에 의해 거부된 쓰기."""


def handle_store_error(error: StoreError) -> HTTPException:
    """저장소 오류를 HTTPException 으로 바꾼다. 메시지는 그대로 전달한다."""
    if isinstance(error, StorePolicyError):
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=error.message,
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=error.message,
    )
