"""주문 상태 머신 - 허용 전이 테이블"""

from __future__ import annotations

from src.core.exceptions import InvalidTransitionException
from src.schemas.order_schema import OrderStatus


VALID_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset({OrderStatus.REFUNDED}),
    OrderStatus.CANCELLED: frozenset(),
    OrderStatus.REFUNDED: frozenset(),
}

TERMINAL_STATES: frozenset[OrderStatus] = frozenset(
    status for status, targets in VALID_TRANSITIONS.items() if not targets
)

# bulk cancel/refund 사전 조건
NON_CANCELLABLE_STATES: frozenset[OrderStatus] = frozenset(
    {OrderStatus.DELIVERED, OrderStatus.REFUNDED, OrderStatus.CANCELLED}
)
NON_REFUNDABLE_STATES: frozenset[OrderStatus] = frozenset(
    {OrderStatus.REFUNDED, OrderStatus.CANCELLED}
)


def allowed_transitions(current: OrderStatus) -> frozenset[OrderStatus]:
    return VALID_TRANSITIONS[current]


def can_transition(current: OrderStatus, requested: OrderStatus) -> bool:
    """같은 상태로의 요청은 전이가 아니므로 항상 허용"""
    return requested == current or requested in VALID_TRANSITIONS[current]


def ensure_transition(current: OrderStatus, requested: OrderStatus) -> None:
    """전이 검증

    Raises:
        InvalidTransitionException: 현재 상태에서 허용되지 않은 전이
    """
    if not can_transition(current, requested):
        raise InvalidTransitionException(current.value, requested.value)
