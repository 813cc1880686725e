"""주문 상태 머신 테스트."""

from __future__ import annotations

import pytest

from src.core.exceptions import InvalidTransitionException
from src.schemas.order_schema import OrderStatus as S
from src.services.impl.order_state_machine import (
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    allowed_transitions,
    can_transition,
    ensure_transition,
)


@pytest.mark.parametrize(
    "current,allowed",
    [
        (S.PENDING, {S.CONFIRMED, S.CANCELLED}),
        (S.CONFIRMED, {S.PROCESSING, S.CANCELLED}),
        (S.PROCESSING, {S.SHIPPED, S.CANCELLED}),
        (S.SHIPPED, {S.DELIVERED}),
        (S.DELIVERED, {S.REFUNDED}),
        (S.CANCELLED, set()),
        (S.REFUNDED, set()),
    ],
)
def test_transition_table(current, allowed):
    assert set(allowed_transitions(current)) == allowed


def test_every_status_has_an_entry():
    assert set(VALID_TRANSITIONS) == set(S)


def test_terminal_states():
    assert TERMINAL_STATES == {S.CANCELLED, S.REFUNDED}


@pytest.mark.parametrize("status", list(S))
def test_same_status_is_not_a_transition(status):
    assert can_transition(status, status) is True


def test_skipping_states_is_rejected():
    assert can_transition(S.PENDING, S.DELIVERED) is False
    assert can_transition(S.SHIPPED, S.CANCELLED) is False


def test_ensure_transition_message_names_both_states():
    with pytest.raises(InvalidTransitionException) as exc_info:
        ensure_transition(S.PENDING, S.DELIVERED)

    exc = exc_info.value
    assert exc.message == "Cannot transition from PENDING to DELIVERED"
    assert exc.error_code == "INVALID_TRANSITION"
    assert exc.details == {"from": "PENDING", "to": "DELIVERED"}


def test_ensure_transition_allows_valid_edge():
    ensure_transition(S.PROCESSING, S.SHIPPED)
