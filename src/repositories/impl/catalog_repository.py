"""카탈로그 리포지토리 - 필터 명세를 SQLAlchemy 쿼리로 컴파일"""
from typing import Any, List

from sqlalchemy import String, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.exceptions import DatabaseQueryException
from src.core.logging import logger
from src.engine.result import CatalogItem, CategoryItem
from src.repositories.filters import (
    AnyOf,
    CatalogClause,
    CatalogQuery,
    CategoryNameContains,
    CategoryQuery,
    DescriptionContains,
    NameContains,
    NameEquals,
    ShortDescriptionContains,
    TagEquals,
)
from src.repositories.models import Category, Product, ProductTag


def _icontains(column: Any, value: str) -> Any:
    return func.lower(column, type_=String).contains(value.lower(), autoescape=True)


def compile_clause(clause: CatalogClause) -> Any:
    """단일 절 → SQLAlchemy 표현식 (모두 대소문자 무시)"""
    if isinstance(clause, NameEquals):
        return func.lower(Product.name) == clause.value.lower()
    if isinstance(clause, NameContains):
        return _icontains(Product.name, clause.value)
    if isinstance(clause, ShortDescriptionContains):
        return _icontains(Product.short_description, clause.value)
    if isinstance(clause, DescriptionContains):
        return _icontains(Product.description, clause.value)
    if isinstance(clause, TagEquals):
        return Product.tags.any(func.lower(ProductTag.value) == clause.value.lower())
    if isinstance(clause, CategoryNameContains):
        return Product.category.has(_icontains(Category.name, clause.value))
    raise TypeError(f"Unsupported catalog clause: {type(clause).__name__}")


def compile_any_of(match: AnyOf) -> Any:
    return or_(*(compile_clause(c) for c in match.clauses))


def to_catalog_item(product: Product) -> CatalogItem:
    """ORM Product → 엔진 CatalogItem"""
    return CatalogItem(
        id=product.id,
        name=product.name,
        slug=product.slug,
        category_name=product.category.name if product.category else "",
        category_slug=product.category.slug if product.category else "",
        price=float(product.price),
        short_description=product.short_description,
        description=product.description,
        tags=tuple(product.tag_values),
        original_price=float(product.original_price) if product.original_price is not None else None,
        rating=float(product.rating) if product.rating is not None else None,
        is_bestseller=bool(product.is_bestseller),
        is_featured=bool(product.is_featured),
        is_new=bool(product.is_new),
        is_on_sale=bool(product.is_on_sale),
        in_stock=bool(product.in_stock),
    )


class CatalogRepository:
    """카탈로그 데이터 액세스 레이어 (CatalogStore 구현)"""

    def __init__(self, db: Session):
        self.db = db

    def find_matching(self, query: CatalogQuery) -> List[CatalogItem]:
        """매칭 조건에 맞는 상품 조회 (조회 순서 = id 오름차순)"""
        try:
            q = self.db.query(Product).filter(compile_any_of(query.match))
            if query.in_stock_only:
                q = q.filter(Product.in_stock.is_(True))
            q = q.order_by(Product.id)
            if query.limit:
                q = q.limit(query.limit)
            return [to_catalog_item(p) for p in q.all()]
        except SQLAlchemyError as e:
            logger.error(f"[Catalog] Product query failed: {e}")
            raise DatabaseQueryException("find_matching", str(e))

    def find_categories(self, query: CategoryQuery) -> List[CategoryItem]:
        """이름에 variation 중 하나라도 포함된 카테고리"""
        if not query.name_contains_any:
            return []
        try:
            q = self.db.query(Category).filter(
                or_(*(_icontains(Category.name, v) for v in query.name_contains_any))
            )
            if query.active_only:
                q = q.filter(Category.is_active.is_(True))
            q = q.order_by(Category.id)
            if query.limit:
                q = q.limit(query.limit)
            return [CategoryItem(name=c.name, slug=c.slug) for c in q.all()]
        except SQLAlchemyError as e:
            logger.error(f"[Catalog] Category query failed: {e}")
            raise DatabaseQueryException("find_categories", str(e))
