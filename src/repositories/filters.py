"""타입이 있는 필터 명세 (Filter Specification)

쿼리 조건을 dict로 조립하지 않고 값 객체(tagged union)로 표현합니다.
Repository 어댑터가 이를 SQLAlchemy 표현식으로 컴파일합니다.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional, Sequence, Union


# ============================================================================
# 카탈로그 (검색) 절
# ============================================================================

@dataclass(frozen=True)
class NameEquals:
    """상품명 완전 일치 (대소문자 무시)"""
    value: str


@dataclass(frozen=True)
class NameContains:
    value: str


@dataclass(frozen=True)
class ShortDescriptionContains:
    value: str


@dataclass(frozen=True)
class DescriptionContains:
    value: str


@dataclass(frozen=True)
class TagEquals:
    """태그 집합에 value가 포함되는지 (대소문자 무시)"""
    value: str


@dataclass(frozen=True)
class CategoryNameContains:
    value: str


CatalogClause = Union[
    NameEquals,
    NameContains,
    ShortDescriptionContains,
    DescriptionContains,
    TagEquals,
    CategoryNameContains,
]


@dataclass(frozen=True)
class AnyOf:
    """절들의 OR 결합"""
    clauses: tuple[CatalogClause, ...]


@dataclass(frozen=True)
class CatalogQuery:
    """상품 조회 명세

    Attributes:
        match: OR 결합된 매칭 조건
        in_stock_only: 재고 있는 상품만
        limit: 최대 조회 수
    """
    match: AnyOf
    in_stock_only: bool = True
    limit: Optional[int] = None


@dataclass(frozen=True)
class CategoryQuery:
    """카테고리 조회 명세 (이름에 name_contains_any 중 하나라도 포함)"""
    name_contains_any: tuple[str, ...]
    active_only: bool = True
    limit: Optional[int] = None


def full_text_match(variations: Sequence[str]) -> AnyOf:
    """검색 후보 조회용 매칭 조건 생성

    variation마다 이름 일치/포함, 요약/상세 설명 포함, 태그 일치, 카테고리명 포함을 OR로 묶습니다.
    """
    clauses: list[CatalogClause] = []
    for variation in variations:
        clauses.extend([
            NameEquals(variation),
            NameContains(variation),
            ShortDescriptionContains(variation),
            DescriptionContains(variation),
            TagEquals(variation),
            CategoryNameContains(variation),
        ])
    return AnyOf(tuple(clauses))


def name_match(variations: Sequence[str]) -> AnyOf:
    """자동완성 조회용 매칭 조건 (상품명 포함만)"""
    return AnyOf(tuple(NameContains(v) for v in variations))


# ============================================================================
# 주문 필터
# ============================================================================

@dataclass(frozen=True)
class OrderFilter:
    """주문 목록/통계 공통 필터

    analytics 집계는 목록 조회와 동일한 필터로 계산됩니다.
    """
    search: Optional[str] = None
    status: Optional[str] = None
    payment_status: Optional[str] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    ids: tuple[str, ...] = field(default_factory=tuple)

    def with_payment_status(self, payment_status: str) -> "OrderFilter":
        return replace(self, payment_status=payment_status)
