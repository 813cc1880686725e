"""로그용 입력 정제 테스트."""

from __future__ import annotations

from src.core.logging import sanitize_for_log


def test_empty_value():
    assert sanitize_for_log("") == "[empty]"


def test_plain_search_query_is_kept():
    assert sanitize_for_log("cotton sheet set") == "cotton sheet set"


def test_order_number_is_kept():
    assert sanitize_for_log("ORD-1001") == "ORD-1001"


def test_customer_email_is_masked():
    assert sanitize_for_log("alice.kim@example.com 환불 요청") == "[email] 환불 요청"


def test_card_number_is_masked():
    assert sanitize_for_log("card 4111 1111 1111 1111") == "card [number]"


def test_phone_number_is_masked():
    assert sanitize_for_log("연락처 010-1234-5678") == "연락처 [number]"


def test_control_characters_are_removed():
    assert sanitize_for_log("sheet\nINFO fake entry\r") == "sheetINFO fake entry"


def test_truncates_long_values():
    result = sanitize_for_log("a" * 120, max_length=100)
    assert result == "a" * 100 + "..."
