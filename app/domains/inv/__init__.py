# app/domains/inv/__init__.py

"""
FastAPI 애플리케이션의 'inv' 도메인 패키지입니다.

창고 재고 품목(InventoryItem)을 관리합니다. 품목은 단독으로 생성되거나
주문 생성 시 함께 생성되며, 최대 하나의 주문에 소속됩니다.

주요 서브모듈:
- `models.py`: inventory_items 테이블에 매핑되는 SQLModel 정의.
- `schemas.py`: 요청 및 응답 스키마.
- `crud.py`: 품목 조회(ID 일괄 조회 포함) 및 생성/삭제.
- `services.py`: 캐시를 거치는 목록 조회와 커밋 후 캐시 무효화.
- `routers.py`: /inventory 엔드포인트.
"""

__title__ = "LogiTrack Inventory Domain"
__version__ = "0.1.0"
__all__ = []
