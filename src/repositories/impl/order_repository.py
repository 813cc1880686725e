"""주문 리포지토리 - DB 접근 로직"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import String, asc, desc, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.exceptions import DatabaseQueryException, OrderNotFoundException
from src.core.logging import logger
from src.repositories.filters import OrderFilter
from src.repositories.models import Order, OrderItem


SORT_COLUMNS = {
    "createdAt": Order.created_at,
    "total": Order.total,
    "orderNumber": Order.order_number,
    "customer": Order.customer_name,
}


@dataclass
class OrderAggregate:
    """필터 적용된 주문 집합의 집계값"""
    paid_total: float = 0.0
    average_total: float = 0.0
    status_counts: List[Tuple[str, int]] = field(default_factory=list)
    payment_status_counts: List[Tuple[str, int]] = field(default_factory=list)


def _icontains(column: Any, value: str) -> Any:
    return func.lower(column, type_=String).contains(value.lower(), autoescape=True)


def compile_order_filter(order_filter: OrderFilter) -> List[Any]:
    """OrderFilter → WHERE 조건 목록 (AND 결합)"""
    conditions: List[Any] = []

    if order_filter.ids:
        conditions.append(Order.id.in_(order_filter.ids))

    if order_filter.search:
        term = order_filter.search
        conditions.append(or_(
            _icontains(Order.order_number, term),
            _icontains(Order.customer_name, term),
            _icontains(Order.customer_email, term),
            Order.items.any(_icontains(OrderItem.product_name, term)),
        ))

    if order_filter.status:
        conditions.append(Order.status == order_filter.status)

    if order_filter.payment_status:
        conditions.append(Order.payment_status == order_filter.payment_status)

    if order_filter.date_from:
        conditions.append(Order.created_at >= order_filter.date_from)

    if order_filter.date_to:
        conditions.append(Order.created_at <= order_filter.date_to)

    return conditions


class OrderRepository:
    """주문 데이터 액세스 레이어 (OrderStore 구현)"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, order_id: str) -> Optional[Order]:
        """ID로 주문 조회"""
        try:
            return self.db.query(Order).filter(Order.id == order_id).first()
        except SQLAlchemyError as e:
            logger.error(f"[Orders] get_by_id failed: {e}")
            raise DatabaseQueryException("get_by_id", str(e))

    def find_many(self, order_ids: Sequence[str]) -> List[Order]:
        """ID 목록으로 주문 조회 (존재하는 것만)"""
        if not order_ids:
            return []
        try:
            return self.db.query(Order).filter(Order.id.in_(list(order_ids))).all()
        except SQLAlchemyError as e:
            logger.error(f"[Orders] find_many failed: {e}")
            raise DatabaseQueryException("find_many", str(e))

    def update_by_id(self, order_id: str, fields: Dict[str, Any]) -> Order:
        """단일 주문 갱신 (행 단위 원자적)"""
        try:
            order = self.db.query(Order).filter(Order.id == order_id).first()
            if order is None:
                raise OrderNotFoundException(order_id)
            for key, value in fields.items():
                setattr(order, key, value)
            self.db.commit()
            self.db.refresh(order)
            return order
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"[Orders] update_by_id failed: {e}")
            raise DatabaseQueryException("update_by_id", str(e))

    def update_many(self, order_ids: Sequence[str], fields: Dict[str, Any]) -> int:
        """여러 주문을 하나의 UPDATE로 갱신

        Returns:
            실제로 갱신된 행 수
        """
        if not order_ids:
            return 0
        try:
            count = self.db.query(Order).filter(
                Order.id.in_(list(order_ids))
            ).update(fields, synchronize_session=False)
            self.db.commit()
            # 세션에 남아있는 인스턴스는 다음 접근 시 다시 읽도록
            self.db.expire_all()
            return int(count or 0)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"[Orders] update_many failed: {e}")
            raise DatabaseQueryException("update_many", str(e))

    def list_orders(
        self,
        order_filter: OrderFilter,
        sort_by: str = "createdAt",
        sort_order: str = "desc",
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[List[Order], int]:
        """필터/정렬/페이지네이션 적용 목록 조회

        Returns:
            (주문 목록, 필터 적용 전체 건수)
        """
        conditions = compile_order_filter(order_filter)
        column = SORT_COLUMNS.get(sort_by, Order.created_at)
        direction = asc if sort_order == "asc" else desc
        try:
            base = self.db.query(Order).filter(*conditions)
            total = base.count()
            orders = base.order_by(direction(column), Order.id).offset(offset).limit(limit).all()
            return orders, total
        except SQLAlchemyError as e:
            logger.error(f"[Orders] list_orders failed: {e}")
            raise DatabaseQueryException("list_orders", str(e))

    def aggregate(self, order_filter: OrderFilter) -> OrderAggregate:
        """통계 집계 (매 호출 재계산, 캐싱 없음)

        - paid_total: payment_status=PAID 인 주문의 total 합
        - average_total: 필터 집합 전체의 total 평균 (결제 상태 무관)
        - status_counts / payment_status_counts: 분포
        """
        conditions = compile_order_filter(order_filter)
        paid_conditions = compile_order_filter(order_filter.with_payment_status("PAID"))
        try:
            paid_total = self.db.query(func.sum(Order.total)).filter(*paid_conditions).scalar()
            average_total = self.db.query(func.avg(Order.total)).filter(*conditions).scalar()

            status_rows = self.db.query(
                Order.status,
                func.count(Order.id).label("count"),
            ).filter(*conditions).group_by(Order.status).order_by(Order.status).all()

            payment_rows = self.db.query(
                Order.payment_status,
                func.count(Order.id).label("count"),
            ).filter(*conditions).group_by(Order.payment_status).order_by(Order.payment_status).all()
        except SQLAlchemyError as e:
            logger.error(f"[Orders] aggregate failed: {e}")
            raise DatabaseQueryException("aggregate", str(e))

        return OrderAggregate(
            paid_total=float(paid_total or 0),
            average_total=float(average_total or 0),
            status_counts=[(status, int(count)) for status, count in status_rows],
            payment_status_counts=[(status, int(count)) for status, count in payment_rows],
        )
