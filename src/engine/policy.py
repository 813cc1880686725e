"""Scoring Policy - 검색 relevance 가중치와 동의어 사전

가중치/동의어는 하드코딩하지 않고 정책 객체로 엔진에 주입합니다.
운영 값은 resources/search/scoring_policy.yaml 에서 로드합니다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

from src.core.config import settings
from src.core.logging import logger
from src.utils.resource_loader import load_search_policy


class MatchField(str, Enum):
    """점수를 만든 필드"""

    NAME = "name"
    CATEGORY = "category"
    SHORT_DESCRIPTION = "short_description"
    DESCRIPTION = "description"
    TAGS = "tags"


DEFAULT_EXACT_MATCH: dict[MatchField, int] = {
    MatchField.NAME: 100,
    MatchField.CATEGORY: 70,
    MatchField.SHORT_DESCRIPTION: 80,
    MatchField.DESCRIPTION: 60,
    MatchField.TAGS: 50,
}

DEFAULT_PARTIAL_MATCH: dict[MatchField, int] = {
    MatchField.NAME: 50,
    MatchField.CATEGORY: 35,
    MatchField.SHORT_DESCRIPTION: 40,
    MatchField.DESCRIPTION: 30,
    MatchField.TAGS: 25,
}

DEFAULT_SYNONYMS: dict[str, list[str]] = {
    "sheet": ["sheets", "sheeting"],
    "pillow": ["pillows", "cushion", "cushions"],
    "blanket": ["blankets", "throw", "throws"],
    "cover": ["covers", "covering"],
    "duvet": ["duvets", "comforter", "comforters"],
    "towel": ["towels", "bath"],
    "cotton": ["100% cotton", "pure cotton"],
    "linen": ["100% linen", "pure linen"],
}


@dataclass(frozen=True)
class SuggestionWeights:
    """자동완성 점수 가중치"""

    exact: int = 100
    starts_with: int = 50
    contains: int = 25
    bestseller: int = 10
    high_rating: int = 5
    high_rating_threshold: float = 4.5


@dataclass(frozen=True)
class ScoringPolicy:
    """검색 점수 정책

    Attributes:
        exact_match: 필드별 완전 일치 점수
        partial_match: 필드별 부분 일치 점수
        starts_with_bonus: 상품명이 검색어로 시작할 때
        word_boundary_bonus: 상품명 중간에 ' 검색어' 형태로 등장할 때
        rating_tiers: (최소 평점, 보너스) 내림차순, 첫 구간만 적용
        synonyms: 단어 → 추가 variation 목록
    """

    exact_match: Mapping[MatchField, int] = field(default_factory=lambda: dict(DEFAULT_EXACT_MATCH))
    partial_match: Mapping[MatchField, int] = field(default_factory=lambda: dict(DEFAULT_PARTIAL_MATCH))
    starts_with_bonus: int = 30
    word_boundary_bonus: int = 15
    bestseller_bonus: int = 20
    featured_bonus: int = 15
    new_bonus: int = 10
    on_sale_bonus: int = 5
    out_of_stock_penalty: int = -50
    rating_tiers: tuple[tuple[float, int], ...] = ((4.5, 15), (4.0, 10), (3.5, 5))
    synonyms: Mapping[str, list[str]] = field(default_factory=lambda: dict(DEFAULT_SYNONYMS))
    suggestion: SuggestionWeights = field(default_factory=SuggestionWeights)

    def field_score(self, match_field: MatchField, exact: bool) -> int:
        table = self.exact_match if exact else self.partial_match
        return table.get(match_field, 0)

    def rating_bonus(self, rating: Optional[float]) -> int:
        if rating is None:
            return 0
        for threshold, bonus in self.rating_tiers:
            if rating >= threshold:
                return bonus
        return 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ScoringPolicy":
        """YAML dict → 정책 (누락된 키는 기본값)"""
        base = cls()

        def _field_table(raw: Optional[Mapping[str, Any]], default: Mapping[MatchField, int]) -> dict[MatchField, int]:
            table = dict(default)
            for key, value in (raw or {}).items():
                table[MatchField(key)] = int(value)
            return table

        position = data.get("position") or {}
        quality = data.get("quality") or {}
        tiers = data.get("rating_tiers")
        synonyms = data.get("synonyms")
        suggestion = data.get("suggestion") or {}

        return cls(
            exact_match=_field_table(data.get("exact_match"), base.exact_match),
            partial_match=_field_table(data.get("partial_match"), base.partial_match),
            starts_with_bonus=int(position.get("starts_with", base.starts_with_bonus)),
            word_boundary_bonus=int(position.get("word_boundary", base.word_boundary_bonus)),
            bestseller_bonus=int(quality.get("bestseller", base.bestseller_bonus)),
            featured_bonus=int(quality.get("featured", base.featured_bonus)),
            new_bonus=int(quality.get("new", base.new_bonus)),
            on_sale_bonus=int(quality.get("on_sale", base.on_sale_bonus)),
            out_of_stock_penalty=int(quality.get("out_of_stock_penalty", base.out_of_stock_penalty)),
            rating_tiers=(
                tuple(sorted(((float(t), int(b)) for t, b in tiers), reverse=True))
                if tiers else base.rating_tiers
            ),
            synonyms=(
                {str(k).lower(): [str(v) for v in values] for k, values in synonyms.items()}
                if synonyms else base.synonyms
            ),
            suggestion=SuggestionWeights(
                exact=int(suggestion.get("exact", base.suggestion.exact)),
                starts_with=int(suggestion.get("starts_with", base.suggestion.starts_with)),
                contains=int(suggestion.get("contains", base.suggestion.contains)),
                bestseller=int(suggestion.get("bestseller", base.suggestion.bestseller)),
                high_rating=int(suggestion.get("high_rating", base.suggestion.high_rating)),
                high_rating_threshold=float(
                    suggestion.get("high_rating_threshold", base.suggestion.high_rating_threshold)
                ),
            ),
        )


def load_scoring_policy(relative_path: Optional[str] = None) -> ScoringPolicy:
    """리소스 파일에서 정책 로드 (없으면 기본 정책)"""
    data = load_search_policy(relative_path or settings.search_policy_path)
    if not data:
        logger.info("[Search] Scoring policy resource empty, using built-in defaults")
        return ScoringPolicy()

    try:
        return ScoringPolicy.from_dict(data)
    except (TypeError, ValueError) as e:
        logger.error(f"[Search] Invalid scoring policy, using built-in defaults: {e}")
        return ScoringPolicy()
