"""커스텀 예외 정의 (Structured Exception Hierarchy)"""
from typing import Any, Optional


# 기본 예외 클래스
class StorefrontException(Exception):
    """기본 예외 클래스 - 모든 커스텀 예외의 부모"""
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# 유효성 검증 관련 예외 (DB 변경 이전에 감지)
class ValidationException(StorefrontException):
    """유효성 검증 예외"""
    def __init__(self, field: str, reason: str, details: Optional[dict[str, Any]] = None,
                 error_code: str = "VALIDATION_ERROR"):
        message = f"Validation failed for '{field}': {reason}"
        super().__init__(message, error_code,
                        details or {"field": field, "reason": reason})


class InvalidQueryException(ValidationException):
    """유효하지 않은 검색어 (빈 문자열/공백만 포함 등)"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        super().__init__("query", reason, details, error_code="INVALID_QUERY")


class MissingParameterException(ValidationException):
    """bulk action에 필요한 파라미터 누락"""
    def __init__(self, parameter: str, action: str, details: Optional[dict[str, Any]] = None):
        super().__init__(
            parameter,
            f"'{parameter}' is required for {action} action",
            details or {"parameter": parameter, "action": action},
            error_code="MISSING_PARAMETER",
        )


class EmptySelectionException(ValidationException):
    """선택된 주문이 없음"""
    def __init__(self, details: Optional[dict[str, Any]] = None):
        super().__init__("orderIds", "No orders selected", details, error_code="EMPTY_SELECTION")


class InvalidDateRangeException(ValidationException):
    """dateFrom > dateTo"""
    def __init__(self, date_from: Any, date_to: Any):
        super().__init__(
            "dateFrom",
            "dateFrom must be before dateTo",
            {"date_from": str(date_from), "date_to": str(date_to)},
            error_code="INVALID_DATE_RANGE",
        )


# 주문 관련 예외
class OrderException(StorefrontException):
    """주문 관련 예외의 기본 클래스"""
    def __init__(self, message: str, error_code: str = "ORDER_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "ORDER_ERROR", details)


class OrderNotFoundException(OrderException):
    """주문을 찾을 수 없을 때"""
    def __init__(self, order_id: Any, details: Optional[dict[str, Any]] = None):
        message = "Order not found"
        super().__init__(message, "NOT_FOUND", details or {"order_id": order_id})


class InvalidTransitionException(OrderException):
    """허용되지 않은 상태 전이"""
    def __init__(self, current_status: str, requested_status: str, details: Optional[dict[str, Any]] = None):
        message = f"Cannot transition from {current_status} to {requested_status}"
        super().__init__(message, "INVALID_TRANSITION",
                        details or {"from": current_status, "to": requested_status})


class InvalidBulkStateException(OrderException):
    """bulk action 사전 조건 위반 (배치 전체 거부)"""
    def __init__(self, action: str, offending: list[dict[str, Any]], details: Optional[dict[str, Any]] = None):
        summary = ", ".join(f"{o['order_number']} ({o['status']})" for o in offending)
        message = f"Cannot {action} orders with invalid status: {summary}"
        super().__init__(message, "INVALID_BULK_STATE",
                        details or {"action": action, "orders": offending})


class RefundProviderException(OrderException):
    """결제사 환불 실패 (주문 단위, 배치는 중단하지 않음)"""
    def __init__(self, order_number: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Refund failed for order {order_number}: {reason}"
        super().__init__(message, "REFUND_PROVIDER_ERROR",
                        details or {"order_number": order_number, "reason": reason})


# 데이터베이스 관련 예외
class DatabaseException(StorefrontException):
    """데이터베이스 관련 예외"""
    def __init__(self, message: str, error_code: str = "DB_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "DB_ERROR", details)


class DatabaseQueryException(DatabaseException):
    """DB 쿼리 실행 오류"""
    def __init__(self, operation: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Database query failed: {reason}"
        super().__init__(message, "DB_QUERY_ERROR",
                        details or {"operation": operation, "reason": reason})


# 인증/인가 관련 예외
class AuthorizationException(StorefrontException):
    """인증/인가 예외"""
    def __init__(self, message: str, error_code: str = "AUTH_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "AUTH_ERROR", details)


class AuthenticationRequiredException(AuthorizationException):
    """로그인 필요"""
    def __init__(self, details: Optional[dict[str, Any]] = None):
        super().__init__("Authentication required", "UNAUTHORIZED", details)


class AdminAccessRequiredException(AuthorizationException):
    """관리자 권한 필요"""
    def __init__(self, user_id: str, details: Optional[dict[str, Any]] = None):
        super().__init__("Admin access required", "FORBIDDEN", details or {"user_id": user_id})
