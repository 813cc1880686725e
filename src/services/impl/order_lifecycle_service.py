"""Order Lifecycle Service - 상태 전이 및 관리자 bulk action

단건 수정은 상태 머신으로 전이를 검증하고, bulk action은 배치 전체에 대한
사전 조건을 먼저 검사한 뒤(all-or-nothing) 변경을 적용합니다.
모든 입력 검증은 DB 변경 이전에 수행됩니다.
"""

from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

from src.core.config import settings
from src.core.exceptions import (
    DatabaseException,
    EmptySelectionException,
    InvalidBulkStateException,
    MissingParameterException,
    OrderNotFoundException,
    StorefrontException,
    ValidationException,
)
from src.core.logging import logger, sanitize_for_log
from src.schemas.order_schema import (
    BulkAction,
    BulkActionResult,
    OrderStatus,
    PaymentStatus,
    RefundResult,
)
from src.services.impl.audit_log import AdminAuditLog
from src.services.impl.order_state_machine import (
    NON_CANCELLABLE_STATES,
    NON_REFUNDABLE_STATES,
    ensure_transition,
)
from src.services.impl.refund_gateway import LoggingRefundGateway, RefundGateway


DEFAULT_CANCEL_NOTE = "Cancelled by admin"
DEFAULT_REFUND_NOTE = "Refunded by admin"


class OrderStore(Protocol):
    """주문 저장소 인터페이스"""

    def get_by_id(self, order_id: str) -> Optional[Any]:
        ...

    def find_many(self, order_ids: Sequence[str]) -> List[Any]:
        ...

    def update_by_id(self, order_id: str, fields: Dict[str, Any]) -> Any:
        ...

    def update_many(self, order_ids: Sequence[str], fields: Dict[str, Any]) -> int:
        ...


def _parse_status(value: Any) -> OrderStatus:
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(str(value).strip().upper())
    except ValueError:
        raise ValidationException("status", f"Unknown order status: {value}")


class OrderLifecycleService:
    """주문 상태 관리 서비스

    Args:
        store: 주문 저장소
        refund_gateway: 결제사 환불 게이트웨이
        audit_log: 관리자 감사 로그
        clock: 현재 시각 함수 (테스트 주입용)
        delivery_estimate_days: SHIPPED 전이 시 예상 배송일 (오늘 + N일)
    """

    def __init__(
        self,
        store: OrderStore,
        refund_gateway: Optional[RefundGateway] = None,
        audit_log: Optional[AdminAuditLog] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
        delivery_estimate_days: int = settings.order_delivery_estimate_days,
    ):
        self.store = store
        self.refund_gateway = refund_gateway or LoggingRefundGateway()
        self.audit_log = audit_log or AdminAuditLog()
        self.clock = clock
        self.delivery_estimate_days = delivery_estimate_days

    # ------------------------------------------------------------------
    # 단건 수정
    # ------------------------------------------------------------------

    def update_status(
        self,
        order_id: str,
        requested_status: Optional[Any] = None,
        tracking_number: Optional[str] = None,
        notes: Optional[str] = None,
        admin_id: Optional[str] = None,
    ) -> Any:
        """단일 주문 상태/운송장/메모 수정

        Raises:
            OrderNotFoundException: 주문 없음
            InvalidTransitionException: 허용되지 않은 전이 (주문은 변경되지 않음)
        """
        order = self.store.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundException(order_id)

        fields: Dict[str, Any] = {}

        if requested_status is not None:
            requested = _parse_status(requested_status)
            current = OrderStatus(order.status)
            if requested != current:
                ensure_transition(current, requested)
            fields["status"] = requested.value

            # 최초 SHIPPED 시에만 예상 배송일 설정
            if requested == OrderStatus.SHIPPED and not order.estimated_delivery:
                fields["estimated_delivery"] = self.clock() + timedelta(days=self.delivery_estimate_days)

        if tracking_number is not None:
            fields["tracking_number"] = tracking_number

        if notes is not None:
            fields["notes"] = notes

        if not fields:
            return order

        updated = self.store.update_by_id(order_id, fields)
        logger.info(
            f"[Orders] Order {updated.order_number} updated: "
            f"status={updated.status} fields={sorted(fields)}"
        )
        self.audit_log.record(
            admin_id, "UPDATE", "order", [order_id],
            {k: (v.isoformat() if isinstance(v, datetime) else v) for k, v in fields.items()},
        )
        return updated

    # ------------------------------------------------------------------
    # Bulk action
    # ------------------------------------------------------------------

    def bulk_action(
        self,
        action: Any,
        order_ids: Sequence[str],
        status: Optional[Any] = None,
        notes: Optional[str] = None,
        reason: Optional[str] = None,
        admin_id: Optional[str] = None,
    ) -> BulkActionResult:
        """관리자 bulk action 실행

        Raises:
            EmptySelectionException: order_ids가 비어있음
            MissingParameterException: action에 필요한 파라미터 누락
            InvalidBulkStateException: cancel/refund 사전 조건 위반 (아무 주문도 변경되지 않음)
        """
        if not order_ids:
            raise EmptySelectionException()

        try:
            bulk_action = BulkAction(action)
        except ValueError:
            raise ValidationException("action", f"Invalid bulk action: {action}")

        ids = list(order_ids)
        if bulk_action == BulkAction.UPDATE_STATUS:
            return self._bulk_update_status(ids, status, admin_id)
        if bulk_action == BulkAction.ADD_NOTES:
            return self._bulk_add_notes(ids, notes, admin_id)
        if bulk_action == BulkAction.CANCEL:
            return self._bulk_cancel(ids, reason, admin_id)
        return self._bulk_refund(ids, reason, admin_id)

    def _bulk_update_status(self, ids: List[str], status: Optional[Any], admin_id: Optional[str]) -> BulkActionResult:
        # 관리자 일괄 변경은 상태 머신 검증을 거치지 않습니다 (단건 수정과 다름)
        if not status:
            raise MissingParameterException("status", BulkAction.UPDATE_STATUS.value)
        new_status = _parse_status(status)

        count = self.store.update_many(ids, {"status": new_status.value})
        logger.info(f"[Orders] Bulk status update to {new_status.value}: {count}/{len(ids)} orders")
        self.audit_log.record(admin_id, "BULK_UPDATE", "orders", ids, {
            "action": BulkAction.UPDATE_STATUS.value,
            "status": new_status.value,
        })
        return BulkActionResult(action=BulkAction.UPDATE_STATUS, count=count)

    def _bulk_add_notes(self, ids: List[str], notes: Optional[str], admin_id: Optional[str]) -> BulkActionResult:
        if not notes:
            raise MissingParameterException("notes", BulkAction.ADD_NOTES.value)

        count = self.store.update_many(ids, {"notes": notes})
        logger.info(f"[Orders] Bulk notes update: {count}/{len(ids)} orders")
        self.audit_log.record(admin_id, "BULK_UPDATE", "orders", ids, {
            "action": BulkAction.ADD_NOTES.value,
            "notes": sanitize_for_log(notes),
        })
        return BulkActionResult(action=BulkAction.ADD_NOTES, count=count)

    def _bulk_cancel(self, ids: List[str], reason: Optional[str], admin_id: Optional[str]) -> BulkActionResult:
        orders = self.store.find_many(ids)
        offending = [
            {"order_number": o.order_number, "status": o.status}
            for o in orders
            if OrderStatus(o.status) in NON_CANCELLABLE_STATES
        ]
        if offending:
            logger.warning(f"[Orders] Bulk cancel rejected: {len(offending)} orders in non-cancellable state")
            raise InvalidBulkStateException("cancel", offending)

        count = self.store.update_many(ids, {
            "status": OrderStatus.CANCELLED.value,
            "notes": reason or DEFAULT_CANCEL_NOTE,
        })
        logger.info(f"[Orders] Bulk cancel: {count}/{len(ids)} orders")
        self.audit_log.record(admin_id, "CANCEL", "orders", ids, {"cancelled_count": count})
        return BulkActionResult(action=BulkAction.CANCEL, count=count)

    def _bulk_refund(self, ids: List[str], reason: Optional[str], admin_id: Optional[str]) -> BulkActionResult:
        orders = self.store.find_many(ids)
        offending = [
            {"order_number": o.order_number, "status": o.status, "payment_status": o.payment_status}
            for o in orders
            if o.payment_status != PaymentStatus.PAID.value
            or OrderStatus(o.status) in NON_REFUNDABLE_STATES
        ]
        if offending:
            logger.warning(f"[Orders] Bulk refund rejected: {len(offending)} orders not refundable")
            raise InvalidBulkStateException("refund", offending)

        by_id = {o.id: o for o in orders}
        outcomes: Dict[str, RefundResult] = {}
        results: List[RefundResult] = []

        # 주문별 결과는 서로 독립적 (한 건의 실패가 나머지를 중단시키지 않음)
        for order_id in ids:
            if order_id not in outcomes:
                outcomes[order_id] = self._refund_one(order_id, by_id.get(order_id), reason)
            results.append(outcomes[order_id])

        refunded = sum(1 for r in outcomes.values() if r.success)
        logger.info(f"[Orders] Bulk refund: {refunded}/{len(outcomes)} orders refunded")
        self.audit_log.record(admin_id, "REFUND", "orders", ids, {
            "refunded_count": refunded,
            "failed": [r.order_id for r in outcomes.values() if not r.success],
        })
        return BulkActionResult(action=BulkAction.REFUND, count=refunded, results=results)

    def _refund_one(self, order_id: str, order: Optional[Any], reason: Optional[str]) -> RefundResult:
        if order is None:
            return RefundResult(order_id=order_id, success=False, error="Order not found")

        try:
            self.refund_gateway.refund(order)
            self.store.update_by_id(order_id, {
                "status": OrderStatus.REFUNDED.value,
                "payment_status": PaymentStatus.REFUNDED.value,
                "notes": reason or DEFAULT_REFUND_NOTE,
            })
        except StorefrontException as e:
            logger.error(f"[Refund] Failed to refund order {order.order_number}: {e}")
            # DB 오류 상세는 응답에 노출하지 않음
            error = "Internal error" if isinstance(e, DatabaseException) else e.message
            return RefundResult(order_id=order_id, success=False, error=error)

        return RefundResult(order_id=order_id, success=True)
