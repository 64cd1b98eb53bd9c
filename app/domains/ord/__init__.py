# app/domains/ord/__init__.py

"""
FastAPI 애플리케이션의 'ord' 도메인 패키지입니다.

고객 주문(Order)과 주문 생성 시의 품목 조합을 담당합니다.

주요 서브모듈:
- `models.py`: orders 테이블에 매핑되는 SQLModel 정의.
- `schemas.py`: 주문 생성 요청 및 응답 스키마.
- `crud.py`: 주문 조회/삭제와 주문 조합 로직.
- `services.py`: 캐시를 거치는 조회와 커밋 후 캐시 무효화.
- `routers.py`: /orders 엔드포인트.
"""

__title__ = "LogiTrack Order Domain"
__version__ = "0.1.0"
__all__ = []
