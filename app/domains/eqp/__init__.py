# app/domains/eqp/__init__.py

"""
FastAPI 애플리케이션의 'eqp' (Equipment) 도메인 패키지입니다.

현장 장비의 상태(가용/사용중/정비중/폐기), 상태 등급, 프로젝트 배치와
모든 변경 이력을 관리합니다.

주요 서브모듈:
- `models.py`: 'eqp' 스키마의 equipments, equipment_history 테이블.
- `schemas.py`: 장비 등록, 배치, 상태 변경 스키마.
- `crud.py`: 장비 CRUD와 상태 전이 및 이력 기록 로직.
- `routers.py`: /api/equipment 엔드포인트 정의.
"""

__title__ = "Construction Equipment Domain"
__description__ = "Manages equipment status, project assignment and change history."
__version__ = "0.1.0"
__all__ = []
