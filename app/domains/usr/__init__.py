# app/domains/usr/__init__.py

"""
FastAPI 애플리케이션의 'usr' 도메인 패키지입니다.

API 사용자 계정과 인증/권한 부여를 담당합니다.

주요 서브모듈:
- `models.py`: users 테이블에 매핑되는 SQLModel 정의와 UserRole.
- `schemas.py`: 회원 가입, 로그인 요청/응답 스키마.
- `crud.py`: 사용자 생성 및 인증 로직.
- `services.py`: 시작 시 매니저 계정 시드.
- `routers.py`: /auth 엔드포인트 (register, login, token, me).
"""

__title__ = "LogiTrack User Domain"
__version__ = "0.1.0"
__all__ = []
