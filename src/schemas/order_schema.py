"""주문 관리 Pydantic 스키마 및 상태 Enum"""
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class OrderStatus(str, Enum):
    """주문 상태 (상태 머신의 노드)"""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"  # 종료 상태
    REFUNDED = "REFUNDED"  # 종료 상태


class PaymentStatus(str, Enum):
    """결제 상태"""

    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class BulkAction(str, Enum):
    """관리자 bulk action 종류"""

    UPDATE_STATUS = "updateStatus"
    ADD_NOTES = "addNotes"
    CANCEL = "cancel"
    REFUND = "refund"


def _coerce_status(v: Any) -> Any:
    """소문자 입력 허용 (예: 'shipped' → 'SHIPPED')"""
    if isinstance(v, str):
        return v.strip().upper()
    return v


class OrderUpdateRequest(BaseModel):
    """단건 주문 수정 요청 (PUT)"""
    id: str = Field(..., min_length=1, description="주문 ID")
    status: Optional[OrderStatus] = Field(None, description="변경할 상태")
    tracking_number: Optional[str] = Field(None, alias="trackingNumber", max_length=100, description="운송장 번호")
    notes: Optional[str] = Field(None, max_length=2000, description="관리자 메모")

    model_config = {"populate_by_name": True}

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v: Any) -> Any:
        return _coerce_status(v)


class BulkActionRequest(BaseModel):
    """bulk action 요청 (PATCH)

    orderIds의 비어있음은 서비스 계층에서 EmptySelection으로 처리합니다.
    """
    action: BulkAction = Field(..., description="updateStatus | addNotes | cancel | refund")
    order_ids: list[str] = Field(..., alias="orderIds", description="대상 주문 ID 목록")
    status: Optional[OrderStatus] = Field(None, description="updateStatus용 상태")
    notes: Optional[str] = Field(None, max_length=2000, description="addNotes용 메모")
    reason: Optional[str] = Field(None, max_length=2000, description="cancel/refund 사유")

    model_config = {"populate_by_name": True}

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v: Any) -> Any:
        return _coerce_status(v)


class OrderItemData(BaseModel):
    """주문 상품"""
    id: int
    product_name: str
    quantity: int
    price: float
    total: float


class OrderData(BaseModel):
    """주문 상세 (관계 포함)"""
    id: str
    order_number: str
    status: OrderStatus
    payment_status: PaymentStatus
    payment_provider: Optional[str] = None
    tracking_number: Optional[str] = None
    notes: Optional[str] = None
    estimated_delivery: Optional[datetime] = None
    total: float
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    item_count: int = 0
    items: list[OrderItemData] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, order: Any) -> "OrderData":
        items = [
            OrderItemData(
                id=item.id,
                product_name=item.product_name,
                quantity=item.quantity,
                price=float(item.price),
                total=float(item.total),
            )
            for item in (order.items or [])
        ]
        return cls(
            id=order.id,
            order_number=order.order_number,
            status=order.status,
            payment_status=order.payment_status,
            payment_provider=order.payment_provider,
            tracking_number=order.tracking_number,
            notes=order.notes,
            estimated_delivery=order.estimated_delivery,
            total=float(order.total or 0),
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            item_count=len(items),
            items=items,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderUpdateResponse(BaseModel):
    """단건 수정 응답"""
    success: bool = True
    data: OrderData
    message: str = "Order updated successfully"


class RefundResult(BaseModel):
    """환불 건별 결과"""
    order_id: str
    success: bool
    error: Optional[str] = None


class BulkActionResult(BaseModel):
    """bulk action 결과

    results는 refund에서만 채워지며 입력 ID 순서를 따릅니다.
    """
    action: BulkAction
    count: int
    results: Optional[list[RefundResult]] = None


class BulkActionResponse(BaseModel):
    """bulk action 응답"""
    success: bool = True
    message: str
    count: int
    updated_count: int
    results: Optional[list[RefundResult]] = None


class StatusCount(BaseModel):
    status: str
    count: int


class OrderAnalytics(BaseModel):
    """필터 적용된 주문 집합의 통계 (캐싱 없음)"""
    total_revenue: float = 0.0
    average_order_value: float = 0.0
    status_distribution: list[StatusCount] = Field(default_factory=list)
    payment_status_distribution: list[StatusCount] = Field(default_factory=list)


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class OrderListData(BaseModel):
    orders: list[OrderData]
    pagination: Pagination
    analytics: OrderAnalytics


class OrderListResponse(BaseModel):
    """주문 목록 응답"""
    success: bool = True
    data: OrderListData
