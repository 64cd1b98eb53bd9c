# tests/__init__.py

"""
LogiTrack FastAPI 애플리케이션의 테스트 스위트 패키지입니다.

- `conftest.py`: 인메모리 SQLite 세션, 메모리 캐시, 인증 클라이언트 픽스처.
- `core/`: 캐시 계층 등 공통 구성 요소의 단위 테스트.
- `domains/`: 도메인별(usr, inv, ord) API 통합 테스트.
"""

__title__ = "LogiTrack API Tests"
__version__ = "0.1.0"
__all__ = []
