"""Fuzzy variation 생성 (검색어 확장)"""

from __future__ import annotations

from typing import Mapping

MIN_WORD_LENGTH = 3


def generate_fuzzy_variations(query: str, synonyms: Mapping[str, list[str]]) -> list[str]:
    """검색어를 부분 매칭용 variation 목록으로 확장

    1. 원본 검색어
    2. 공백 기준 소문자 단어 중 길이 3 이상
    3. 단어가 동의어 사전 키와 일치하면 그 동의어들

    중복은 대소문자 무시로 제거하며, 먼저 나온 표기를 유지합니다.

    Args:
        query: 정규화(strip)된 검색어
        synonyms: 단어(소문자) → 동의어 목록

    Returns:
        순서가 보존된 variation 목록 (첫 원소는 항상 원본 검색어)
    """
    variations = [query]
    words = query.lower().split()

    variations.extend(word for word in words if len(word) >= MIN_WORD_LENGTH)

    for word in words:
        variations.extend(synonyms.get(word, []))

    seen: set[str] = set()
    unique: list[str] = []
    for variation in variations:
        key = variation.lower()
        if key in seen:
            continue
        seen.add(key)
        unique.append(variation)
    return unique
