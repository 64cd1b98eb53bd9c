# app/core/exceptions.py

"""
도메인 계층에서 발생시키는 예외 정의 모듈입니다.

서비스/CRUD 계층은 HTTP를 알지 못하고 아래 예외만 발생시키며,
`app/main.py`에 등록된 예외 핸들러가 이를 HTTP 응답으로 변환합니다.

- ValidationError: 필수 값 누락 등 요청 자체가 잘못된 경우 (400). 트랜잭션을 열기 전에 발생합니다.
- NotFoundError: 조회 대상이 존재하지 않는 경우 (404).
- TransientStoreError: 커밋 실패, 제약 조건 위반 등 저장소 오류 (500, 재시도 가능).
  트랜잭션은 이미 전부 롤백된 상태입니다.
- CacheUnavailable: 캐시 저장소 장애. 캐시 계층 내부에서만 사용되며 호출자에게 전파되지 않습니다.
"""

from typing import Dict, List, Optional


class DomainError(Exception):
    """모든 도메인 예외의 기본 클래스입니다."""
    status_code: int = 500
    title: str = "Domain error"

    def __init__(self, detail: str, *, title: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        if title is not None:
            self.title = title


class ValidationError(DomainError):
    status_code = 400
    title = "Invalid payload"

    def __init__(self, errors: Dict[str, List[str]], *, title: Optional[str] = None):
        self.errors = errors
        detail = "; ".join(message for messages in errors.values() for message in messages)
        super().__init__(detail, title=title)


class NotFoundError(DomainError):
    status_code = 404
    title = "Not found"


class TransientStoreError(DomainError):
    status_code = 500
    title = "Database update failed"
    retryable = True


class CacheUnavailable(Exception):
    """캐시 백엔드에 접근할 수 없을 때 백엔드가 발생시킵니다. CacheLayer가 흡수합니다."""
