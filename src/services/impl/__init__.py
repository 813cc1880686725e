"""Services implementation package."""

from .audit_log import AdminAuditLog, AdminAuditRecord
from .order_lifecycle_service import OrderLifecycleService, OrderStore
from .order_query_service import OrderQueryService, build_order_filter, parse_date
from .refund_gateway import LoggingRefundGateway, RefundGateway

__all__ = [
    "AdminAuditLog",
    "AdminAuditRecord",
    "OrderLifecycleService",
    "OrderStore",
    "OrderQueryService",
    "build_order_filter",
    "parse_date",
    "LoggingRefundGateway",
    "RefundGateway",
]
