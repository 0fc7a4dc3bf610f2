# app/core/pagination.py

"""
목록 조회 API 공통 페이징 헬퍼 모듈입니다.

- 쿼리 파라미터 `page`, `limit`를 허용 범위로 보정합니다. (범위를 벗어나거나 숫자가 아니어도 422 대신 보정)
- 응답은 `{"data": [...], "pagination": {page, limit, total, pages}}` 형태입니다.
"""

import math
from typing import Generic, List, Optional, TypeVar, Union

from fastapi import Query
from pydantic import BaseModel

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# OFFSET이 PostgreSQL bigint 범위를 넘지 않도록 페이지 번호 상한을 둡니다.
MAX_PAGE = 100_000

ItemType = TypeVar("ItemType")


class PageParams(BaseModel):
    """보정된 페이징 파라미터"""
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


class PageInfo(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class Page(BaseModel, Generic[ItemType]):
    """페이징 목록 응답 스키마"""
    data: List[ItemType]
    pagination: PageInfo


def _to_int(value: Union[int, str, None]) -> Optional[int]:
    """정수로 해석할 수 없는 값은 None(기본값 사용)으로 처리합니다."""
    if value is None or isinstance(value, int):
        return value
    try:
        return int(value.strip())
    except ValueError:
        return None


def clamp_page_params(page: Union[int, str, None], limit: Union[int, str, None]) -> PageParams:
    """
    page는 1~MAX_PAGE, limit는 1~100 사이로 보정합니다.
    값이 없거나 숫자가 아니면 기본값을 사용합니다.
    """
    page = min(max(_to_int(page) or 1, 1), MAX_PAGE)
    limit = min(max(_to_int(limit) or DEFAULT_PAGE_SIZE, 1), MAX_PAGE_SIZE)
    return PageParams(page=page, limit=limit)


def get_page_params(
    page: Optional[str] = Query(None, description="페이지 번호 (1부터 시작)"),
    limit: Optional[str] = Query(None, description=f"페이지 크기 (최대 {MAX_PAGE_SIZE})"),
) -> PageParams:
    """FastAPI 의존성: 쿼리 파라미터로부터 보정된 페이징 정보를 만듭니다."""
    return clamp_page_params(page, limit)


def build_page(items: list, *, total: int, params: PageParams) -> dict:
    """조회 결과와 전체 건수로 페이징 응답 본문을 구성합니다."""
    return {
        "data": items,
        "pagination": {
            "page": params.page,
            "limit": params.limit,
            "total": total,
            "pages": math.ceil(total / params.limit) if total else 0,
        },
    }
