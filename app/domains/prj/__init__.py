# app/domains/prj/__init__.py

"""
FastAPI 애플리케이션의 'prj' (Project) 도메인 패키지입니다.

건설 프로젝트, 프로젝트별 담당 엔지니어, 그리고 공정 마일스톤을 관리합니다.

주요 서브모듈:
- `models.py`: 'prj' 스키마의 테이블 (projects, project_engineers, milestones).
- `schemas.py`: 프로젝트/마일스톤 요청 및 응답 스키마.
- `crud.py`: 프로젝트 CRUD, 엔지니어 배정, 마일스톤 상태 전이 규칙.
- `routers.py`: /api/projects 엔드포인트 정의.
"""

__title__ = "Construction Project Domain"
__description__ = "Manages projects, assigned engineers and milestones."
__version__ = "0.1.0"
__all__ = []
