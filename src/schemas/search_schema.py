"""검색 API Pydantic 스키마"""
from typing import Literal, Optional

from pydantic import BaseModel, Field


class CategoryRef(BaseModel):
    """결과에 포함되는 카테고리 요약"""
    name: str
    slug: str


class SearchResultItem(BaseModel):
    """검색 결과 DTO

    relevance_score / match_field 같은 내부 랭킹 필드는 포함하지 않습니다.
    """
    id: int
    name: str
    slug: str
    short_description: Optional[str] = None
    price: float = Field(..., ge=0)
    original_price: Optional[float] = None
    category: CategoryRef
    rating: Optional[float] = None
    is_on_sale: bool = False
    is_bestseller: bool = False
    is_new: bool = False


class Suggestion(BaseModel):
    """자동완성 제안"""
    type: Literal["product", "category"]
    name: str
    href: str


class SearchResponse(BaseModel):
    """검색 응답"""
    results: list[SearchResultItem]
    suggestions: list[Suggestion]
    categories: list[Suggestion]
    query: str
    total: int

