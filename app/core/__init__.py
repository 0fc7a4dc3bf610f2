# app/core/__init__.py

"""
FastAPI 애플리케이션의 핵심 구성 요소 패키지입니다.

- `config.py`: 애플리케이션 설정 및 환경 변수 관리 (Pydantic Settings).
- `database.py`: 비동기 엔진, 세션 관리 (SQLModel 및 AsyncSQLAlchemy).
- `security.py`: 비밀번호 해싱, JWT 발급/검증, 역할 기반 권한 검사.
- `dependencies.py`: 라우터에서 사용하는 공통 의존성 함수들.
- `pagination.py`: 목록 조회 페이징 파라미터 보정 및 응답 구성.
- `crud_base.py`: 도메인 CRUD 클래스의 공통 부모.
- `logging_config.py`: 루트 로거 설정.
- `tasks.py`: ARQ 워커용 공통 태스크.
"""

__title__ = "Construction Core"
__description__ = "Core components for the Construction Management FastAPI application."
__version__ = "0.1.0"
__all__ = []
