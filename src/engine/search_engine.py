"""Search Relevance Engine

검색어 → (랭킹된 상품, 상품명 제안, 카테고리 제안)

Flow:
    1. 검색어 검증/정규화
    2. fuzzy variation 생성 (단어 분리 + 동의어)
    3. 후보 조회 (재고 있는 상품, limit x 배수)
    4. 후보별 최고 점수 계산 → stable 정렬 → limit개
    5. 상품명 제안 / 카테고리 제안 조회

내부 상태가 없으며 (query, catalog snapshot)에 대한 순수 함수처럼 동작합니다.
"""

from __future__ import annotations

import time
from typing import Optional, Protocol

from src.core.config import settings
from src.core.exceptions import InvalidQueryException, ValidationException
from src.core.logging import logger, sanitize_for_log
from src.repositories.filters import CatalogQuery, CategoryQuery, full_text_match, name_match

from .policy import ScoringPolicy, load_scoring_policy
from .result import CatalogItem, CategoryItem, SearchOutcome
from .scoring import rank, score_item, suggestion_score
from .variations import generate_fuzzy_variations


class CatalogStore(Protocol):
    """카탈로그 저장소 인터페이스"""

    def find_matching(self, query: CatalogQuery) -> list[CatalogItem]:
        ...

    def find_categories(self, query: CategoryQuery) -> list[CategoryItem]:
        ...


class SearchEngine:
    """검색 relevance 엔진

    Args:
        catalog: 카탈로그 저장소
        policy: 점수 정책 (None이면 리소스 파일에서 로드)
        max_limit: limit 상한
        candidate_multiplier: 재정렬용 후보 풀 배수
        suggestion_pool: 상품명 제안 후보 조회 수
        max_suggestions: 상품명 제안 최대 수
        max_category_suggestions: 카테고리 제안 최대 수
    """

    def __init__(
        self,
        catalog: CatalogStore,
        policy: Optional[ScoringPolicy] = None,
        max_limit: int = settings.search_max_limit,
        candidate_multiplier: int = settings.search_candidate_multiplier,
        suggestion_pool: int = settings.search_suggestion_pool,
        max_suggestions: int = settings.search_max_suggestions,
        max_category_suggestions: int = settings.search_max_category_suggestions,
    ):
        self.catalog = catalog
        self.policy = policy or load_scoring_policy()
        self.max_limit = max_limit
        self.candidate_multiplier = candidate_multiplier
        self.suggestion_pool = suggestion_pool
        self.max_suggestions = max_suggestions
        self.max_category_suggestions = max_category_suggestions

    def search(self, query: Optional[str], limit: Optional[int] = None) -> SearchOutcome:
        """검색 실행

        Args:
            query: 원본 검색어
            limit: 결과 수 (기본 10, max_limit으로 절단)

        Returns:
            SearchOutcome

        Raises:
            InvalidQueryException: 빈 검색어
            ValidationException: limit이 양수가 아님
            DatabaseException: 저장소 실패 (부분 결과 없음)
        """
        normalized = (query or "").strip()
        if not normalized:
            raise InvalidQueryException("Search query is required")

        effective_limit = self._resolve_limit(limit)
        started = time.perf_counter()

        variations = generate_fuzzy_variations(normalized, self.policy.synonyms)

        candidates = self.catalog.find_matching(
            CatalogQuery(
                match=full_text_match(variations),
                in_stock_only=True,
                limit=effective_limit * self.candidate_multiplier,
            )
        )
        scored = [score_item(item, normalized, variations, self.policy) for item in candidates]
        ranked = rank(scored, effective_limit)

        outcome = SearchOutcome(
            query=normalized,
            results=[s.item for s in ranked],
            product_suggestions=self._product_suggestions(normalized, variations),
            category_suggestions=self._category_suggestions(variations),
            variations=variations,
        )

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"[Search] query='{sanitize_for_log(normalized, 50)}' variations={len(variations)} "
            f"candidates={len(candidates)} results={len(outcome.results)} elapsed={elapsed_ms:.1f}ms"
        )
        if ranked:
            top = ranked[0]
            logger.debug(
                f"[Search] top match id={top.item.id} score={top.relevance_score} "
                f"field={top.match_field.value if top.match_field else None}"
            )
        return outcome

    def _resolve_limit(self, limit: Optional[int]) -> int:
        if limit is None:
            return min(settings.search_default_limit, self.max_limit)
        if limit <= 0:
            raise ValidationException("limit", "limit must be a positive integer")
        return min(limit, self.max_limit)

    def _product_suggestions(self, query: str, variations: list[str]) -> list[CatalogItem]:
        """상품명 자동완성 (점수 내림차순 상위 N개)"""
        pool = self.catalog.find_matching(
            CatalogQuery(
                match=name_match(variations),
                in_stock_only=True,
                limit=self.suggestion_pool,
            )
        )
        ordered = sorted(pool, key=lambda item: suggestion_score(item, query, self.policy), reverse=True)
        return ordered[: self.max_suggestions]

    def _category_suggestions(self, variations: list[str]) -> list[CategoryItem]:
        """활성 카테고리 자동완성 (점수 없음)"""
        return self.catalog.find_categories(
            CategoryQuery(
                name_contains_any=tuple(variations),
                active_only=True,
                limit=self.max_category_suggestions,
            )
        )
