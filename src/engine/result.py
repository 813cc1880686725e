"""Search Result - 엔진 입출력 값 타입

Catalog store가 돌려주는 CatalogItem과, 점수 계산 후의 ScoredItem을 정의합니다.
ScoredItem의 relevance_score/match_field는 정렬에만 쓰이며 응답에 노출하지 않습니다.
"""

from dataclasses import dataclass, field
from typing import Optional

from .policy import MatchField


@dataclass(frozen=True)
class CatalogItem:
    """검색 대상 상품 (검색 호출 동안 불변)"""

    id: int
    name: str
    slug: str
    category_name: str
    category_slug: str
    price: float
    short_description: Optional[str] = None
    description: Optional[str] = None
    tags: tuple[str, ...] = ()
    original_price: Optional[float] = None
    rating: Optional[float] = None
    is_bestseller: bool = False
    is_featured: bool = False
    is_new: bool = False
    is_on_sale: bool = False
    in_stock: bool = True


@dataclass(frozen=True)
class CategoryItem:
    """카테고리 제안 대상"""

    name: str
    slug: str


@dataclass
class ScoredItem:
    """점수가 매겨진 후보 (쿼리 단위로 생성 후 폐기)"""

    item: CatalogItem
    relevance_score: int = 0
    match_field: Optional[MatchField] = None


@dataclass
class SearchOutcome:
    """엔진 검색 결과

    Attributes:
        query: 정규화된 검색어
        results: 점수 내림차순으로 정렬/절단된 상품
        product_suggestions: 상품명 자동완성 (최대 N개)
        category_suggestions: 카테고리 자동완성
        variations: 검색에 사용된 fuzzy variation (디버깅용)
    """

    query: str
    results: list[CatalogItem] = field(default_factory=list)
    product_suggestions: list[CatalogItem] = field(default_factory=list)
    category_suggestions: list[CategoryItem] = field(default_factory=list)
    variations: list[str] = field(default_factory=list)
