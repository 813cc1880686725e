"""비즈니스 로직 서비스 - export only."""

from .impl import AdminAuditLog, LoggingRefundGateway, OrderLifecycleService, OrderQueryService

__all__ = ["AdminAuditLog", "LoggingRefundGateway", "OrderLifecycleService", "OrderQueryService"]
