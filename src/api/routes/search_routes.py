"""Search Routes

HTTP Layer는 요청 검증과 DTO 변환만 수행하고 랭킹은 SearchEngine에 위임합니다.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from src.api.errors import error_response, internal_error_response
from src.core.config import settings
from src.core.database import get_db
from src.core.exceptions import StorefrontException
from src.core.logging import logger
from src.core.security import SecurityValidator
from src.engine import CatalogItem, CategoryItem, ScoringPolicy, SearchEngine, load_scoring_policy
from src.repositories.impl import CatalogRepository
from src.schemas.search_schema import CategoryRef, SearchResponse, SearchResultItem, Suggestion

router = APIRouter(prefix="/api", tags=["search"])

# 싱글톤 정책
_policy: Optional[ScoringPolicy] = None


def get_scoring_policy() -> ScoringPolicy:
    """ScoringPolicy 싱글톤 (YAML 리소스에서 1회 로드)"""
    global _policy
    if _policy is None:
        _policy = load_scoring_policy(settings.search_policy_path)
    return _policy


def get_search_engine(
    db: Session = Depends(get_db),
    policy: ScoringPolicy = Depends(get_scoring_policy),
) -> SearchEngine:
    """요청 단위 SearchEngine (세션에 묶인 카탈로그 저장소 사용)"""
    return SearchEngine(CatalogRepository(db), policy=policy)


def to_result_item(item: CatalogItem) -> SearchResultItem:
    return SearchResultItem(
        id=item.id,
        name=item.name,
        slug=item.slug,
        short_description=item.short_description,
        price=item.price,
        original_price=item.original_price,
        category=CategoryRef(name=item.category_name, slug=item.category_slug),
        rating=item.rating,
        is_on_sale=item.is_on_sale,
        is_bestseller=item.is_bestseller,
        is_new=item.is_new,
    )


def product_suggestion(item: CatalogItem) -> Suggestion:
    return Suggestion(type="product", name=item.name, href=f"/products/{item.slug}")


def category_suggestion(category: CategoryItem) -> Suggestion:
    return Suggestion(type="category", name=category.name, href=f"/products?category={category.slug}")


@router.get("/search", response_model=SearchResponse)
def search_products(
    q: str = Query("", description="검색어"),
    limit: int = Query(settings.search_default_limit, ge=1, le=settings.search_max_limit, description="결과 수"),
    engine: SearchEngine = Depends(get_search_engine),
):
    """상품 검색 API (공개)

    Flow:
        1. 검색어 보안 검증
        2. Engine에 위임 (variation → 후보 조회 → 점수 → 정렬)
        3. 결과를 DTO로 변환 (내부 점수 필드 제외)
    """
    try:
        SecurityValidator.validate_query(q)
        outcome = engine.search(q, limit)
    except StorefrontException as e:
        return error_response(e)
    except Exception as e:
        logger.error(f"[API] Search failed unexpectedly: {type(e).__name__}: {e}")
        return internal_error_response()

    results = [to_result_item(item) for item in outcome.results]
    return SearchResponse(
        results=results,
        suggestions=[product_suggestion(item) for item in outcome.product_suggestions],
        categories=[category_suggestion(c) for c in outcome.category_suggestions],
        query=outcome.query,
        total=len(results),
    )


__all__ = ["router", "get_search_engine", "get_scoring_policy"]
