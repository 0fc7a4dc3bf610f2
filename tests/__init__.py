# tests/__init__.py

"""
건설 현장 관리 API의 테스트 스위트 패키지입니다.

- `conftest.py`: 테스트 DB(트랜잭션 롤백 격리), 역할별 사용자와 로그인된 클라이언트 픽스처.
- `test_main.py`: 루트/헬스 체크, 업로드 파일 제공, ARQ 워커 설정.
- `test_pagination.py`: 페이징 파라미터 보정.
- `domains/`: 도메인별 API 통합 테스트.

테스트 실행 전 TEST_DATABASE_URL 환경 변수로 PostgreSQL 테스트 DB를 지정합니다.
"""

__title__ = "Construction API Tests"
__description__ = "Test suite for the Construction Management FastAPI application."
__version__ = "0.1.0"
__all__ = []
