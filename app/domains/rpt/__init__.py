# app/domains/rpt/__init__.py

"""
FastAPI 애플리케이션의 'rpt' (Report) 도메인 패키지입니다.

프로젝트별 일일 현장 보고서(작업 내용, 진척 상황)와 첨부 사진을 관리합니다.
사진 파일은 업로드 디렉토리에 저장되고, 'rpt' 도메인은 파일의 URL과 파일명을 기록합니다.

주요 서브모듈:
- `models.py`: 'rpt' 스키마의 reports, report_images 테이블.
- `schemas.py`: 보고서 응답 스키마.
- `crud.py`: 보고서 생성/조회 로직.
- `services.py`: 첨부 사진 검증 및 저장.
- `routers.py`: /api/reports 엔드포인트 정의.
"""

__title__ = "Construction Report Domain"
__description__ = "Manages daily site reports and their photo attachments."
__version__ = "0.1.0"
__all__ = []
