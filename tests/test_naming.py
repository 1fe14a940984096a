"""Tests for clientgen.naming."""

from __future__ import annotations

import pytest

from clientgen.naming import (
    sanitize_to_pascal,
    split_words,
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
    unique_name,
)


class TestSplitWords:
    def test_splits_on_separators_and_case(self) -> None:
        assert split_words("MainAPI/order-items") == ["Main", "API", "order", "items"]

    def test_acronym_followed_by_word(self) -> None:
        assert split_words("XMLHttpRequest") == ["XML", "Http", "Request"]

    def test_digits_are_words(self) -> None:
        assert split_words("v2Orders") == ["v", "2", "Orders"]

    def test_empty(self) -> None:
        assert split_words("") == []


class TestCaseConversion:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("GetOrderList", "getOrderList"),
            ("order_items", "orderItems"),
            ("XMLHttpRequest", "xmlHttpRequest"),
            ("", ""),
        ],
    )
    def test_camel(self, value: str, expected: str) -> None:
        assert to_camel_case(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("order_items", "OrderItems"),
            ("getList", "GetList"),
            ("MainAPI", "MainApi"),
        ],
    )
    def test_pascal(self, value: str, expected: str) -> None:
        assert to_pascal_case(value) == expected

    def test_kebab(self) -> None:
        assert to_kebab_case("OrderItems") == "order-items"
        assert to_kebab_case("Main API") == "main-api"


class TestSanitizeToPascal:
    def test_words_are_capitalised(self) -> None:
        assert sanitize_to_pascal("Admin user") == "AdminUser"

    def test_case_inside_word_is_lowered(self) -> None:
        assert sanitize_to_pascal("ADMIN user") == "AdminUser"

    def test_leading_digit_gets_prefix(self) -> None:
        assert sanitize_to_pascal("3 days") == "Value3Days"

    def test_no_alphanumerics(self) -> None:
        assert sanitize_to_pascal("!! --") == ""


class TestUniqueName:
    def test_free_name_is_kept(self) -> None:
        used: set[str] = set()
        assert unique_name("Admin", used) == "Admin"
        assert used == {"Admin"}

    def test_suffix_starts_at_two(self) -> None:
        used = {"Admin"}
        assert unique_name("Admin", used) == "Admin2"
        assert unique_name("Admin", used) == "Admin3"
        assert used == {"Admin", "Admin2", "Admin3"}
