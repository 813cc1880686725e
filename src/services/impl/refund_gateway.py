"""결제사 환불 게이트웨이 (stub)

실제 Stripe/PayPal 연동은 범위 밖이며, 기본 구현은 로그만 남깁니다.
"""
from typing import Any, Protocol

from src.core.logging import logger


class RefundGateway(Protocol):
    """환불 게이트웨이 인터페이스

    실패 시 RefundProviderException을 발생시킵니다.
    """

    def refund(self, order: Any) -> None:
        ...


class LoggingRefundGateway:
    """결제사별 분기만 수행하는 기본 게이트웨이"""

    def refund(self, order: Any) -> None:
        provider = (order.payment_provider or "").upper()
        if provider == "STRIPE":
            logger.info(f"[Refund] Stripe refund requested: order={order.order_number} amount={order.total}")
        elif provider == "PAYPAL":
            logger.info(f"[Refund] PayPal refund requested: order={order.order_number} amount={order.total}")
        else:
            logger.info(f"[Refund] Refunding order {order.order_number} (no payment provider)")
