# app/domains/mat/__init__.py

"""
FastAPI 애플리케이션의 'mat' (Material) 도메인 패키지입니다.

현장의 자재 요청과 그 처리 과정(요청 → 승인/반려 → 발주 → 입고)을 관리합니다.

주요 서브모듈:
- `models.py`: 'mat' 스키마의 material_requests 테이블과 상태 Enum.
- `schemas.py`: 자재 요청, 검토, 상태 변경 스키마.
- `crud.py`: 자재 요청 CRUD와 상태 전이 규칙.
- `routers.py`: /api/materials 엔드포인트 정의.
"""

__title__ = "Construction Material Domain"
__description__ = "Manages material requests and their approval lifecycle."
__version__ = "0.1.0"
__all__ = []
