"""주문 목록/통계 Service"""

import math
import re
from datetime import datetime, time, timezone
from typing import Optional

from src.core.config import settings
from src.core.exceptions import InvalidDateRangeException, ValidationException
from src.core.logging import logger
from src.repositories.filters import OrderFilter
from src.repositories.impl.order_repository import SORT_COLUMNS, OrderRepository
from src.schemas.order_schema import (
    OrderAnalytics,
    OrderData,
    OrderListData,
    OrderStatus,
    Pagination,
    PaymentStatus,
    StatusCount,
)

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_date(value: Optional[str], is_end_date: bool = False) -> Optional[datetime]:
    """날짜 문자열 파싱

    - YYYY-MM-DD: 하루의 시작(00:00:00) 또는 끝(23:59:59.999999)으로 정규화
    - ISO datetime: 그대로 사용 (timezone 포함 시 UTC naive로 변환)
    - 파싱 불가: None (필터 무시)
    """
    if not value:
        return None

    text = value.strip()
    try:
        if _DATE_ONLY.match(text):
            day = datetime.strptime(text, "%Y-%m-%d").date()
            return datetime.combine(day, time.max if is_end_date else time.min)

        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        logger.debug(f"[Orders] Ignoring unparseable date filter: {text[:40]}")
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _normalize_enum(value: Optional[str], enum_cls: type, field: str) -> Optional[str]:
    """'all'/빈 값은 필터 없음, 나머지는 대문자 Enum 값"""
    if not value or value.lower() == "all":
        return None
    try:
        return enum_cls(value.upper()).value
    except ValueError:
        raise ValidationException(field, f"Unknown value: {value}")


def build_order_filter(
    search: Optional[str] = None,
    order_status: Optional[str] = None,
    payment_status: Optional[str] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    ids: Optional[str] = None,
) -> OrderFilter:
    """쿼리 파라미터 → OrderFilter

    Raises:
        InvalidDateRangeException: dateFrom > dateTo
        ValidationException: 알 수 없는 상태값
    """
    from_date = parse_date(date_from, is_end_date=False)
    to_date = parse_date(date_to, is_end_date=True)
    if from_date and to_date and from_date > to_date:
        raise InvalidDateRangeException(from_date, to_date)

    id_list = tuple(i.strip() for i in (ids or "").split(",") if i.strip())

    return OrderFilter(
        search=(search or "").strip() or None,
        status=_normalize_enum(order_status, OrderStatus, "orderStatus"),
        payment_status=_normalize_enum(payment_status, PaymentStatus, "paymentStatus"),
        date_from=from_date,
        date_to=to_date,
        ids=id_list,
    )


class OrderQueryService:
    """관리자 주문 목록 조회 + 통계"""

    def __init__(self, repository: OrderRepository):
        self.repository = repository

    def list_orders(
        self,
        order_filter: OrderFilter,
        sort_by: str = "createdAt",
        sort_order: str = "desc",
        page: int = 1,
        limit: int = settings.order_list_default_limit,
    ) -> OrderListData:
        """필터/정렬/페이지네이션 적용 목록 + 동일 필터 통계"""
        if page < 1:
            raise ValidationException("page", "page must be >= 1")
        if limit < 1 or limit > settings.order_list_max_limit:
            raise ValidationException("limit", f"limit must be between 1 and {settings.order_list_max_limit}")
        if sort_by not in SORT_COLUMNS:
            sort_by = "createdAt"
        if sort_order not in ("asc", "desc"):
            sort_order = "desc"

        orders, total = self.repository.list_orders(
            order_filter,
            sort_by=sort_by,
            sort_order=sort_order,
            offset=(page - 1) * limit,
            limit=limit,
        )
        total_pages = math.ceil(total / limit) if total else 0

        logger.info(f"[Orders] Listed {len(orders)}/{total} orders (page={page}, limit={limit})")

        return OrderListData(
            orders=[OrderData.from_model(o) for o in orders],
            pagination=Pagination(
                page=page,
                limit=limit,
                total=total,
                total_pages=total_pages,
                has_next=page < total_pages,
                has_prev=page > 1,
            ),
            analytics=self.get_analytics(order_filter),
        )

    def get_analytics(self, order_filter: OrderFilter) -> OrderAnalytics:
        """통계 (매번 재계산)"""
        aggregate = self.repository.aggregate(order_filter)
        return OrderAnalytics(
            total_revenue=round(aggregate.paid_total, 2),
            average_order_value=round(aggregate.average_total, 2),
            status_distribution=[
                StatusCount(status=status, count=count) for status, count in aggregate.status_counts
            ],
            payment_status_distribution=[
                StatusCount(status=status, count=count) for status, count in aggregate.payment_status_counts
            ],
        )
