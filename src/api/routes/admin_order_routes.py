"""Admin Order Routes

관리자 주문 목록/단건 수정/bulk action. 모든 엔드포인트는 ADMIN 역할이 필요합니다.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from src.api.errors import error_response, internal_error_response
from src.core.config import settings
from src.core.database import get_db
from src.core.exceptions import StorefrontException
from src.core.logging import logger
from src.core.security import CurrentUser, require_admin
from src.repositories.impl import OrderRepository
from src.schemas.order_schema import (
    BulkActionRequest,
    BulkActionResponse,
    OrderData,
    OrderListResponse,
    OrderUpdateRequest,
    OrderUpdateResponse,
)
from src.services.impl.audit_log import AdminAuditLog
from src.services.impl.order_lifecycle_service import OrderLifecycleService
from src.services.impl.order_query_service import OrderQueryService, build_order_filter
from src.services.impl.refund_gateway import LoggingRefundGateway, RefundGateway

router = APIRouter(prefix="/api/admin/orders", tags=["admin-orders"])

# 싱글톤 (프로세스 단위)
_refund_gateway: Optional[RefundGateway] = None
_audit_log: Optional[AdminAuditLog] = None


def get_refund_gateway() -> RefundGateway:
    """RefundGateway 싱글톤"""
    global _refund_gateway
    if _refund_gateway is None:
        _refund_gateway = LoggingRefundGateway()
    return _refund_gateway


def get_audit_log() -> AdminAuditLog:
    """AdminAuditLog 싱글톤"""
    global _audit_log
    if _audit_log is None:
        _audit_log = AdminAuditLog()
    return _audit_log


def get_order_repository(db: Session = Depends(get_db)) -> OrderRepository:
    return OrderRepository(db)


def get_lifecycle_service(
    repository: OrderRepository = Depends(get_order_repository),
    refund_gateway: RefundGateway = Depends(get_refund_gateway),
    audit_log: AdminAuditLog = Depends(get_audit_log),
) -> OrderLifecycleService:
    return OrderLifecycleService(repository, refund_gateway=refund_gateway, audit_log=audit_log)


def get_query_service(repository: OrderRepository = Depends(get_order_repository)) -> OrderQueryService:
    return OrderQueryService(repository)


@router.get("", response_model=OrderListResponse)
def list_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.order_list_default_limit, ge=1, le=settings.order_list_max_limit),
    search: Optional[str] = Query(None, max_length=200),
    order_status: Optional[str] = Query(None, alias="orderStatus"),
    payment_status: Optional[str] = Query(None, alias="paymentStatus"),
    date_from: Optional[str] = Query(None, alias="dateFrom"),
    date_to: Optional[str] = Query(None, alias="dateTo"),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder"),
    ids: Optional[str] = Query(None, description="쉼표로 구분된 주문 ID"),
    user: CurrentUser = Depends(require_admin),
    service: OrderQueryService = Depends(get_query_service),
):
    """주문 목록 + 동일 필터 기준 통계"""
    try:
        order_filter = build_order_filter(
            search=search,
            order_status=order_status,
            payment_status=payment_status,
            date_from=date_from,
            date_to=date_to,
            ids=ids,
        )
        data = service.list_orders(
            order_filter,
            sort_by=sort_by,
            sort_order=sort_order,
            page=page,
            limit=limit,
        )
    except StorefrontException as e:
        return error_response(e)
    except Exception as e:
        logger.error(f"[API] Order list failed unexpectedly: {type(e).__name__}: {e}")
        return internal_error_response()

    return OrderListResponse(data=data)


@router.put("", response_model=OrderUpdateResponse)
def update_order(
    request: OrderUpdateRequest,
    user: CurrentUser = Depends(require_admin),
    service: OrderLifecycleService = Depends(get_lifecycle_service),
):
    """단건 상태/운송장/메모 수정 (상태 머신 검증)"""
    try:
        order = service.update_status(
            request.id,
            requested_status=request.status,
            tracking_number=request.tracking_number,
            notes=request.notes,
            admin_id=user.id,
        )
    except StorefrontException as e:
        return error_response(e)
    except Exception as e:
        logger.error(f"[API] Order update failed unexpectedly: {type(e).__name__}: {e}")
        return internal_error_response()

    return OrderUpdateResponse(data=OrderData.from_model(order))


@router.patch("", response_model=BulkActionResponse)
def bulk_update_orders(
    request: BulkActionRequest,
    user: CurrentUser = Depends(require_admin),
    service: OrderLifecycleService = Depends(get_lifecycle_service),
):
    """bulk action (updateStatus | addNotes | cancel | refund)"""
    try:
        result = service.bulk_action(
            request.action,
            request.order_ids,
            status=request.status,
            notes=request.notes,
            reason=request.reason,
            admin_id=user.id,
        )
    except StorefrontException as e:
        return error_response(e)
    except Exception as e:
        logger.error(f"[API] Bulk action failed unexpectedly: {type(e).__name__}: {e}")
        return internal_error_response()

    return BulkActionResponse(
        message=f"Bulk {result.action.value} completed successfully on {result.count} orders",
        count=result.count,
        updated_count=result.count,
        results=result.results,
    )


__all__ = ["router", "get_refund_gateway", "get_audit_log"]
