# app/domains/att/__init__.py

"""
FastAPI 애플리케이션의 'att' (Attendance) 도메인 패키지입니다.

작업자의 프로젝트별 일일 출역(출근/결근/휴가) 기록을 관리합니다.
작업자·프로젝트·일자 조합당 하나의 기록만 존재하며, 재기록 시 갱신(upsert)됩니다.

주요 서브모듈:
- `models.py`: 'att' 스키마의 attendance 테이블.
- `schemas.py`: 출역 기록 및 집계 스키마.
- `crud.py`: upsert, 작업자/프로젝트별 조회, 상태별 집계.
- `routers.py`: /api/attendance 엔드포인트 정의.
"""

__title__ = "Construction Attendance Domain"
__description__ = "Manages daily worker attendance per project."
__version__ = "0.1.0"
__all__ = []
