# app/domains/usr/__init__.py

"""
FastAPI 애플리케이션의 'usr' 도메인 패키지입니다.

'usr' 도메인은 현장 사용자 계정(관리자, 엔지니어, 협력업체, 작업자)과
인증(가입, 로그인, 토큰 발급)을 담당합니다.

주요 서브모듈:
- `models.py`: 'usr' 스키마의 테이블에 매핑되는 SQLModel 정의 및 UserRole Enum.
- `schemas.py`: 사용자/인증 요청 및 응답 스키마.
- `crud.py`: 사용자 생성, 인증, 목록 조회 로직.
- `routers.py`: /api/auth, /api/users 엔드포인트 정의.
"""

__title__ = "Construction User Domain"
__description__ = "Manages site user accounts and authentication."
__version__ = "0.1.0"
__all__ = []
