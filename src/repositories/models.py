"""데이터베이스 모델"""
from datetime import datetime
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from src.core.database import Base


class Category(Base):
    """카테고리 테이블"""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    slug = Column(String(120), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    products = relationship("Product", back_populates="category")

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, slug={self.slug})>"


class Product(Base):
    """상품 테이블 (검색 대상 CatalogItem)"""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    short_description = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    original_price = Column(Numeric(10, 2), nullable=True)
    rating = Column(Float, nullable=True)  # 0~5

    # 품질/노출 플래그
    is_bestseller = Column(Boolean, nullable=False, default=False)
    is_featured = Column(Boolean, nullable=False, default=False)
    is_new = Column(Boolean, nullable=False, default=False)
    is_on_sale = Column(Boolean, nullable=False, default=False)
    in_stock = Column(Boolean, nullable=False, default=True, index=True)

    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    category = relationship("Category", back_populates="products", lazy="joined")
    tags = relationship(
        "ProductTag",
        back_populates="product",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def tag_values(self) -> list[str]:
        return [t.value for t in self.tags]

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name={self.name})>"


class ProductTag(Base):
    """상품 자유 태그"""

    __tablename__ = "product_tags"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    value = Column(String(100), nullable=False)

    product = relationship("Product", back_populates="tags")

    __table_args__ = (
        Index("idx_product_tags_value", "value"),
    )


class Order(Base):
    """주문 테이블

    status/payment_status는 Enum 값(str)으로 저장합니다.
    상태 변경은 OrderLifecycleService를 통해서만 수행합니다.
    """

    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, index=True)
    order_number = Column(String(50), nullable=False, unique=True, index=True)
    status = Column(String(20), nullable=False, default="PENDING", index=True)
    payment_status = Column(String(20), nullable=False, default="PENDING", index=True)
    payment_provider = Column(String(20), nullable=True)  # STRIPE, PAYPAL
    tracking_number = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)
    estimated_delivery = Column(DateTime, nullable=True)
    total = Column(Numeric(10, 2), nullable=False, default=0)

    # 고객 정보 (검색 필터용 비정규화)
    customer_name = Column(String(200), nullable=True)
    customer_email = Column(String(255), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="OrderItem.id",
    )

    # 통계 쿼리 최적화
    __table_args__ = (
        Index("idx_orders_status_created", "status", "created_at"),
        Index("idx_orders_payment_created", "payment_status", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, number={self.order_number}, status={self.status})>"


class OrderItem(Base):
    """주문 상품 (이 범위에서는 읽기 전용)"""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    price = Column(Numeric(10, 2), nullable=False)
    total = Column(Numeric(10, 2), nullable=False)

    order = relationship("Order", back_populates="items")
