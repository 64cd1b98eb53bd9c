# tests/domains/__init__.py

"""
도메인별 테스트 스위트 패키지입니다.

- `test_auth_n.py`: 'usr' 도메인 (회원 가입, 로그인, 매니저 시드).
- `test_inv_n.py`: 'inv' 도메인 (재고 품목과 목록 캐시).
- `test_ord_n.py`: 'ord' 도메인 (주문 조합, 원자성, 캐시 무효화).
"""

__title__ = "LogiTrack Domain Tests"
__version__ = "0.1.0"
__all__ = []
