# app/utils/__init__.py

"""
FastAPI 애플리케이션의 'utils' 패키지입니다.

이 패키지는 특정 비즈니스 도메인에 속하지 않는,
프로젝트 전반에서 재사용될 수 있는 범용 유틸리티 함수들을 포함합니다.

주요 서브모듈:
- `files.py`: 업로드 파일 저장, 삭제, 경로 처리 등 파일 관련 유틸리티 함수.
- `dates.py`: 날짜/일시 값을 달력 일자로 맞추는 변환 함수.
"""

# flake8: noqa
# 서브모듈을 임포트하여 `from app.utils import files` 형태로 사용할 수 있게 합니다.
from . import dates, files

# 패키지 메타데이터
__title__ = "Construction Management Utilities"
__description__ = "Provides common, reusable utility functions for the application."
__version__ = "0.1.0"
__all__ = ["dates", "files"]
