"""OrderLifecycleService 단위 테스트 (Fake 저장소)

- 단건 상태 전이 검증 및 SHIPPED 예상 배송일
- bulk action 사전 조건 (all-or-nothing)
- refund 부분 실패
"""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.core.exceptions import (
    EmptySelectionException,
    InvalidBulkStateException,
    InvalidTransitionException,
    MissingParameterException,
    OrderNotFoundException,
    ValidationException,
)
from src.schemas.order_schema import BulkAction
from src.services.impl.audit_log import AdminAuditLog
from src.services.impl.order_lifecycle_service import OrderLifecycleService
from tests.fakes import FakeOrder, FakeOrderStore, FakeRefundGateway


NOW = datetime(2024, 6, 1, 12, 0, 0)


class Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> Clock:
    return Clock(NOW)


@pytest.fixture
def audit_log() -> AdminAuditLog:
    return AdminAuditLog()


@pytest.fixture
def service(fake_order_store, fake_refund_gateway, audit_log, clock) -> OrderLifecycleService:
    return OrderLifecycleService(
        fake_order_store,
        refund_gateway=fake_refund_gateway,
        audit_log=audit_log,
        clock=clock,
    )


def snapshot(store: FakeOrderStore) -> dict:
    return {oid: vars(o).copy() for oid, o in store.orders.items()}


# ============================================================================
# update_status
# ============================================================================

def test_invalid_transition_does_not_mutate(service, fake_order_store):
    fake_order_store.add(FakeOrder("o1", "N1", status="PENDING"))
    before = snapshot(fake_order_store)

    with pytest.raises(InvalidTransitionException) as exc_info:
        service.update_status("o1", "DELIVERED", tracking_number="TRK")

    assert "PENDING" in exc_info.value.message
    assert "DELIVERED" in exc_info.value.message
    assert snapshot(fake_order_store) == before
    assert fake_order_store.update_calls == []


def test_valid_transition_is_persisted(service, fake_order_store):
    fake_order_store.add(FakeOrder("o1", "N1", status="PENDING"))

    updated = service.update_status("o1", "CONFIRMED")

    assert updated.status == "CONFIRMED"
    assert fake_order_store.update_calls == [("o1", {"status": "CONFIRMED"})]


def test_lowercase_status_is_accepted(service, fake_order_store):
    fake_order_store.add(FakeOrder("o1", "N1", status="PENDING"))
    assert service.update_status("o1", "confirmed").status == "CONFIRMED"


def test_unknown_status_is_a_validation_error(service, fake_order_store):
    fake_order_store.add(FakeOrder("o1", "N1"))

    with pytest.raises(ValidationException):
        service.update_status("o1", "LOST")


def test_missing_order_raises_not_found(service):
    with pytest.raises(OrderNotFoundException) as exc_info:
        service.update_status("nope", "CONFIRMED")

    assert exc_info.value.message == "Order not found"


def test_shipping_sets_estimated_delivery_seven_days_out(service, fake_order_store):
    fake_order_store.add(FakeOrder("o1", "N1", status="PROCESSING"))

    updated = service.update_status("o1", "SHIPPED")

    assert updated.estimated_delivery == NOW + timedelta(days=7)


def test_estimated_delivery_is_not_overwritten(service, fake_order_store, clock):
    fake_order_store.add(FakeOrder("o1", "N1", status="PROCESSING"))
    service.update_status("o1", "SHIPPED")

    clock.now = NOW + timedelta(days=3)
    updated = service.update_status("o1", "SHIPPED", tracking_number="TRK-2")

    assert updated.estimated_delivery == NOW + timedelta(days=7)
    assert updated.tracking_number == "TRK-2"


def test_tracking_and_notes_without_status_change(service, fake_order_store):
    fake_order_store.add(FakeOrder("o1", "N1", status="DELIVERED"))

    updated = service.update_status("o1", tracking_number="TRK-1", notes="left at door")

    assert updated.status == "DELIVERED"
    assert updated.tracking_number == "TRK-1"
    assert updated.notes == "left at door"


def test_same_status_is_allowed_on_terminal_order(service, fake_order_store):
    fake_order_store.add(FakeOrder("o1", "N1", status="CANCELLED"))

    updated = service.update_status("o1", "CANCELLED", notes="dup")

    assert updated.status == "CANCELLED"
    assert updated.notes == "dup"


def test_nothing_to_update_returns_order_unchanged(service, fake_order_store, audit_log):
    fake_order_store.add(FakeOrder("o1", "N1"))

    order = service.update_status("o1")

    assert order.status == "PENDING"
    assert fake_order_store.update_calls == []
    assert audit_log.records == []


def test_update_is_audited(service, fake_order_store, audit_log):
    fake_order_store.add(FakeOrder("o1", "N1", status="PROCESSING"))

    service.update_status("o1", "SHIPPED", admin_id="admin-1")

    record = audit_log.records[-1]
    assert record.admin_id == "admin-1"
    assert record.action == "UPDATE"
    assert record.resource_ids == ["o1"]
    assert record.details["status"] == "SHIPPED"
    assert "estimated_delivery" in record.details


# ============================================================================
# bulk_action: 공통
# ============================================================================

@pytest.mark.parametrize("action", ["updateStatus", "addNotes", "cancel", "refund"])
def test_empty_selection_is_rejected(service, action):
    with pytest.raises(EmptySelectionException):
        service.bulk_action(action, [])


def test_unknown_action_is_rejected(service, fake_order_store):
    fake_order_store.add(FakeOrder("o1", "N1"))

    with pytest.raises(ValidationException):
        service.bulk_action("archive", ["o1"])


# ============================================================================
# bulk_action: updateStatus / addNotes
# ============================================================================

def test_bulk_update_status_requires_status(service, fake_order_store):
    fake_order_store.add(FakeOrder("o1", "N1"))

    with pytest.raises(MissingParameterException) as exc_info:
        service.bulk_action("updateStatus", ["o1"])

    assert exc_info.value.error_code == "MISSING_PARAMETER"
    assert fake_order_store.update_many_calls == []


def test_bulk_update_status_skips_transition_validation(service, fake_order_store):
    fake_order_store.add(FakeOrder("o1", "N1", status="PENDING"))
    fake_order_store.add(FakeOrder("o2", "N2", status="PENDING"))

    result = service.bulk_action("updateStatus", ["o1", "o2"], status="SHIPPED")

    assert result.action == BulkAction.UPDATE_STATUS
    assert result.count == 2
    assert fake_order_store.orders["o1"].status == "SHIPPED"
    assert fake_order_store.orders["o2"].status == "SHIPPED"
    # bulk 경로는 예상 배송일을 계산하지 않음
    assert fake_order_store.orders["o1"].estimated_delivery is None


def test_bulk_update_status_counts_only_existing_orders(service, fake_order_store):
    fake_order_store.add(FakeOrder("o1", "N1"))

    result = service.bulk_action("updateStatus", ["o1", "ghost"], status="confirmed")

    assert result.count == 1
    assert fake_order_store.orders["o1"].status == "CONFIRMED"


def test_bulk_update_status_rejects_unknown_status(service, fake_order_store):
    fake_order_store.add(FakeOrder("o1", "N1"))

    with pytest.raises(ValidationException):
        service.bulk_action("updateStatus", ["o1"], status="TELEPORTED")


def test_bulk_add_notes(service, fake_order_store, audit_log):
    fake_order_store.add(FakeOrder("o1", "N1", notes="old"))
    fake_order_store.add(FakeOrder("o2", "N2"))

    result = service.bulk_action("addNotes", ["o1", "o2"], notes="gift wrap", admin_id="admin-1")

    assert result.count == 2
    assert fake_order_store.orders["o1"].notes == "gift wrap"
    assert audit_log.records[-1].action == "BULK_UPDATE"


def test_bulk_add_notes_requires_notes(service, fake_order_store):
    fake_order_store.add(FakeOrder("o1", "N1"))

    with pytest.raises(MissingParameterException):
        service.bulk_action("addNotes", ["o1"], notes="")


# ============================================================================
# bulk_action: cancel
# ============================================================================

def test_cancel_rejects_whole_batch_when_one_is_delivered(service, fake_order_store):
    fake_order_store.add(FakeOrder("o1", "N1", status="PENDING"))
    fake_order_store.add(FakeOrder("o2", "N2", status="DELIVERED"))
    fake_order_store.add(FakeOrder("o3", "N3", status="PROCESSING"))
    before = snapshot(fake_order_store)

    with pytest.raises(InvalidBulkStateException) as exc_info:
        service.bulk_action("cancel", ["o1", "o2", "o3"])

    assert exc_info.value.message == "Cannot cancel orders with invalid status: N2 (DELIVERED)"
    assert exc_info.value.details["orders"] == [{"order_number": "N2", "status": "DELIVERED"}]
    assert snapshot(fake_order_store) == before
    assert fake_order_store.update_many_calls == []


@pytest.mark.parametrize("status", ["DELIVERED", "REFUNDED", "CANCELLED"])
def test_cancel_rejects_non_cancellable_states(service, fake_order_store, status):
    fake_order_store.add(FakeOrder("o1", "N1", status=status))

    with pytest.raises(InvalidBulkStateException):
        service.bulk_action("cancel", ["o1"])


def test_cancel_applies_default_note(service, fake_order_store, audit_log):
    fake_order_store.add(FakeOrder("o1", "N1", status="PENDING"))
    fake_order_store.add(FakeOrder("o2", "N2", status="SHIPPED"))

    result = service.bulk_action("cancel", ["o1", "o2"])

    assert result.count == 2
    for order in fake_order_store.orders.values():
        assert order.status == "CANCELLED"
        assert order.notes == "Cancelled by admin"
    assert audit_log.records[-1].action == "CANCEL"


def test_cancel_uses_reason(service, fake_order_store):
    fake_order_store.add(FakeOrder("o1", "N1"))

    service.bulk_action("cancel", ["o1"], reason="customer request")

    assert fake_order_store.orders["o1"].notes == "customer request"


# ============================================================================
# bulk_action: refund
# ============================================================================

def _paid(order_id: str, number: str, status: str = "DELIVERED") -> FakeOrder:
    return FakeOrder(order_id, number, status=status, payment_status="PAID", payment_provider="STRIPE")


def test_refund_rejects_unpaid_orders(service, fake_order_store, fake_refund_gateway):
    fake_order_store.add(_paid("o1", "N1"))
    fake_order_store.add(FakeOrder("o2", "N2", status="CONFIRMED", payment_status="PENDING"))
    before = snapshot(fake_order_store)

    with pytest.raises(InvalidBulkStateException) as exc_info:
        service.bulk_action("refund", ["o1", "o2"])

    assert "N2 (CONFIRMED)" in exc_info.value.message
    assert snapshot(fake_order_store) == before
    assert fake_refund_gateway.calls == []


@pytest.mark.parametrize("status", ["REFUNDED", "CANCELLED"])
def test_refund_rejects_terminal_orders(service, fake_order_store, status):
    fake_order_store.add(_paid("o1", "N1", status=status))

    with pytest.raises(InvalidBulkStateException):
        service.bulk_action("refund", ["o1"])


def test_refund_success(service, fake_order_store, fake_refund_gateway, audit_log):
    fake_order_store.add(_paid("o1", "N1"))
    fake_order_store.add(_paid("o2", "N2", status="CONFIRMED"))

    result = service.bulk_action("refund", ["o1", "o2"], admin_id="admin-1")

    assert result.count == 2
    assert [(r.order_id, r.success) for r in result.results] == [("o1", True), ("o2", True)]
    for order in fake_order_store.orders.values():
        assert order.status == "REFUNDED"
        assert order.payment_status == "REFUNDED"
        assert order.notes == "Refunded by admin"
    assert fake_refund_gateway.calls == ["N1", "N2"]
    assert audit_log.records[-1].action == "REFUND"


def test_refund_partial_failure_continues(fake_order_store, audit_log, clock):
    gateway = FakeRefundGateway(failing_order_numbers=["N2"])
    service = OrderLifecycleService(fake_order_store, refund_gateway=gateway, audit_log=audit_log, clock=clock)
    for i in (1, 2, 3):
        fake_order_store.add(_paid(f"o{i}", f"N{i}"))

    result = service.bulk_action("refund", ["o1", "o2", "o3"], reason="damaged")

    assert result.count == 2
    assert [r.order_id for r in result.results] == ["o1", "o2", "o3"]
    assert [r.success for r in result.results] == [True, False, True]
    assert "card_declined" in result.results[1].error

    assert fake_order_store.orders["o1"].status == "REFUNDED"
    assert fake_order_store.orders["o3"].payment_status == "REFUNDED"
    assert fake_order_store.orders["o3"].notes == "damaged"
    assert fake_order_store.orders["o2"].status == "DELIVERED"
    assert fake_order_store.orders["o2"].payment_status == "PAID"


def test_refund_reports_unknown_ids(service, fake_order_store):
    fake_order_store.add(_paid("o1", "N1"))

    result = service.bulk_action("refund", ["ghost", "o1"])

    assert result.count == 1
    assert result.results[0].order_id == "ghost"
    assert result.results[0].success is False
    assert result.results[0].error == "Order not found"
    assert result.results[1].success is True


def test_refund_database_error_is_not_leaked(service, fake_order_store):
    fake_order_store.add(_paid("o1", "N1"))
    fake_order_store.add(_paid("o2", "N2"))
    fake_order_store.fail_update_for.add("o1")

    result = service.bulk_action("refund", ["o1", "o2"])

    assert result.results[0].success is False
    assert result.results[0].error == "Internal error"
    assert result.results[1].success is True


def test_refund_results_have_one_entry_per_input_id(service, fake_order_store, fake_refund_gateway):
    fake_order_store.add(_paid("o1", "N1"))

    result = service.bulk_action("refund", ["o1", "o1"])

    assert len(result.results) == 2
    assert all(r.success for r in result.results)
    assert fake_refund_gateway.calls == ["N1"]
