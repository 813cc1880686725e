"""Relevance Scoring - 필드/variation 조합별 점수 계산

모든 (필드, variation) 조합의 점수를 계산한 뒤 최댓값을 취합니다.
필드 검사 순서에 따라 결과가 달라지지 않습니다.
"""

from __future__ import annotations

from typing import Iterator, Optional, Sequence

from .policy import MatchField, ScoringPolicy
from .result import CatalogItem, ScoredItem


def calculate_relevance_score(
    item: CatalogItem,
    query: str,
    is_exact_match: bool,
    match_field: MatchField,
    policy: ScoringPolicy,
) -> int:
    """단일 (필드, 검색어) 매칭의 점수

    점수 = 필드 기본점수(완전/부분 일치) + 위치 보너스 + 품질 보너스 - 품절 패널티 + 세일 보너스
    """
    query_lower = query.lower()
    name_lower = item.name.lower()

    score = policy.field_score(match_field, is_exact_match)

    # 상품명이 검색어로 시작하면 더 높은 점수
    if name_lower.startswith(query_lower):
        score += policy.starts_with_bonus
    elif f" {query_lower}" in name_lower:
        score += policy.word_boundary_bonus

    if item.is_bestseller:
        score += policy.bestseller_bonus
    if item.is_featured:
        score += policy.featured_bonus
    if item.is_new:
        score += policy.new_bonus
    score += policy.rating_bonus(item.rating)

    # 검색 단계에서 이미 걸러지지만 점수 규칙은 유지
    if not item.in_stock:
        score += policy.out_of_stock_penalty

    if item.is_on_sale:
        score += policy.on_sale_bonus

    return score


def _text_match(text: Optional[str], needle: str) -> Optional[bool]:
    """None: 불일치, True: 완전 일치, False: 부분 일치"""
    if not text:
        return None
    text_lower = text.lower()
    if text_lower == needle:
        return True
    if needle in text_lower:
        return False
    return None


def _tags_match(tags: Sequence[str], needle: str) -> Optional[bool]:
    matched: Optional[bool] = None
    for tag in tags:
        result = _text_match(tag, needle)
        if result is True:
            return True
        if result is False:
            matched = False
    return matched


def iter_field_matches(
    item: CatalogItem,
    query: str,
    variations: Sequence[str],
) -> Iterator[tuple[str, MatchField, bool]]:
    """점수 계산 대상인 (검색어, 필드, 완전일치 여부) 조합 생성

    - 원본 검색어: name, category, short_description, description, tags
    - 각 variation: name
    """
    query_lower = query.lower()
    field_values = (
        (MatchField.NAME, _text_match(item.name, query_lower)),
        (MatchField.CATEGORY, _text_match(item.category_name, query_lower)),
        (MatchField.SHORT_DESCRIPTION, _text_match(item.short_description, query_lower)),
        (MatchField.DESCRIPTION, _text_match(item.description, query_lower)),
        (MatchField.TAGS, _tags_match(item.tags, query_lower)),
    )
    for match_field, exact in field_values:
        if exact is not None:
            yield query, match_field, exact

    for variation in variations:
        exact = _text_match(item.name, variation.lower())
        if exact is not None:
            yield variation, MatchField.NAME, exact


def score_item(
    item: CatalogItem,
    query: str,
    variations: Sequence[str],
    policy: ScoringPolicy,
) -> ScoredItem:
    """후보 하나의 최고 점수와 그 필드

    매칭되는 조합이 없으면 (태그 동의어로만 조회된 경우 등) 점수 0, match_field None.
    동점이면 먼저 평가된 조합을 유지합니다.
    """
    best: Optional[ScoredItem] = None
    for matched_query, match_field, exact in iter_field_matches(item, query, variations):
        score = calculate_relevance_score(item, matched_query, exact, match_field, policy)
        if best is None or score > best.relevance_score:
            best = ScoredItem(item=item, relevance_score=score, match_field=match_field)
    return best or ScoredItem(item=item)


def rank(scored: Sequence[ScoredItem], limit: int) -> list[ScoredItem]:
    """점수 내림차순 정렬 후 limit개 (sorted는 stable: 동점은 조회 순서 유지)"""
    return sorted(scored, key=lambda s: s.relevance_score, reverse=True)[:limit]


def suggestion_score(item: CatalogItem, query: str, policy: ScoringPolicy) -> int:
    """자동완성 점수: 완전 일치 > 접두 일치 > 포함 + 품질 보너스"""
    weights = policy.suggestion
    name_lower = item.name.lower()
    query_lower = query.lower()

    score = 0
    if name_lower == query_lower:
        score += weights.exact
    elif name_lower.startswith(query_lower):
        score += weights.starts_with
    elif query_lower in name_lower:
        score += weights.contains

    if item.is_bestseller:
        score += weights.bestseller
    if item.rating is not None and item.rating >= weights.high_rating_threshold:
        score += weights.high_rating
    return score
