# tests/domains/__init__.py

"""
도메인별 API 통합 테스트 패키지입니다.

- `test_usr.py`: 회원가입, 로그인, 사용자 등록 및 목록.
- `test_prj.py`: 프로젝트, 엔지니어 배정, 마일스톤.
- `test_mat.py`: 자재 요청과 상태 전이.
- `test_att.py`: 출역 기록 upsert, 조회, 집계.
- `test_eqp.py`: 장비 배치와 상태 이력.
- `test_rpt.py`: 사진 첨부 보고서와 고아 파일 정리.
"""

__title__ = "Construction Domain Tests"
__description__ = "Categorized tests for each business domain in the Construction Management API."
__version__ = "0.1.0"
__all__ = []
