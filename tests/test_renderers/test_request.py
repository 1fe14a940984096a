"""Tests for clientgen.renderers.request."""

from __future__ import annotations

from clientgen.models import EndpointItem
from clientgen.parser.endpoints import apply_endpoint_names
from clientgen.renderers.request import (
    body_expression,
    doc_comment_text,
    file_stems,
    has_input,
    input_accessor,
    query_object,
    url_expression,
)


def _endpoint(**kwargs) -> EndpointItem:
    defaults = {"namespace": ["order"], "operation_name": "get", "method": "GET", "path": "/orders"}
    defaults.update(kwargs)
    return EndpointItem(**defaults)


class TestSingleSlot:
    def test_path_field_is_the_input(self) -> None:
        endpoint = _endpoint(path="/orders/{id}", path_fields=["id"], input_type_name="string")
        assert url_expression(endpoint) == "`/orders/${input}`"
        assert query_object(endpoint) is None

    def test_query_field_is_the_input(self) -> None:
        endpoint = _endpoint(query_fields=["id"], input_type_name="string")
        assert url_expression(endpoint) == '"/orders"'
        assert query_object(endpoint) == "{ id: input }"

    def test_body_is_the_input(self) -> None:
        endpoint = _endpoint(method="POST", request_body_field="body", input_type_name="Order")
        assert body_expression(endpoint) == "input"


class TestSeveralSlots:
    def _endpoint(self) -> EndpointItem:
        return _endpoint(
            method="PUT",
            path="/orders/{id}/items/{item-id}",
            path_fields=["id", "item-id"],
            query_fields=["force"],
            request_body_field="body",
            input_type_name="UpdateItemInput",
        )

    def test_url_reads_fields(self) -> None:
        assert url_expression(self._endpoint()) == '`/orders/${input.id}/items/${input["item-id"]}`'

    def test_optional_access(self) -> None:
        endpoint = self._endpoint()
        assert url_expression(endpoint, optional=True) == '`/orders/${input?.id}/items/${input?.["item-id"]}`'
        assert query_object(endpoint, optional=True) == "{ force: input?.force }"
        assert body_expression(endpoint, optional=True) == "input?.body"

    def test_non_identifier_query_key_is_quoted(self) -> None:
        endpoint = _endpoint(query_fields=["page-size", "page"], input_type_name="ListInput")
        assert query_object(endpoint) == '{ "page-size": input["page-size"], page: input.page }'

    def test_input_accessor(self) -> None:
        endpoint = self._endpoint()
        assert input_accessor(endpoint, "force") == "input.force"


class TestWithoutInput:
    def test_void_input(self) -> None:
        endpoint = _endpoint(path="/orders/{id}", path_fields=["id"])
        assert not has_input(endpoint)
        assert url_expression(endpoint) == '"/orders/{id}"'

    def test_body_without_input_is_undefined(self) -> None:
        endpoint = _endpoint(method="POST", request_body_field="body")
        assert body_expression(endpoint) == "undefined"

    def test_no_body(self) -> None:
        assert body_expression(_endpoint()) is None


class TestDocCommentText:
    def test_collapses_whitespace(self) -> None:
        assert doc_comment_text("Adds\n  an   order") == "Adds an order"

    def test_escapes_comment_end(self) -> None:
        assert doc_comment_text("a */ b") == "a *\\/ b"

    def test_empty(self) -> None:
        assert doc_comment_text(None) == ""


class TestFileStems:
    def test_unique_names_use_operation_name(self) -> None:
        endpoints = [_endpoint(operation_name="add"), _endpoint(operation_name="remove", method="DELETE")]
        apply_endpoint_names(endpoints)
        assert file_stems(endpoints) == {("GET", "/orders"): "add", ("DELETE", "/orders"): "remove"}

    def test_shared_operation_name_uses_export_name(self) -> None:
        endpoints = [
            _endpoint(operation_name="add", method="GET", path="/order/add"),
            _endpoint(operation_name="add", method="POST", path="/order/add"),
        ]
        apply_endpoint_names(endpoints)
        assert file_stems(endpoints) == {
            ("GET", "/order/add"): "orderAdd",
            ("POST", "/order/add"): "orderAddPost",
        }

    def test_same_name_in_other_namespace_is_fine(self) -> None:
        endpoints = [
            _endpoint(operation_name="add", namespace=["order"], path="/a"),
            _endpoint(operation_name="add", namespace=["user"], path="/b"),
        ]
        apply_endpoint_names(endpoints)
        assert set(file_stems(endpoints).values()) == {"add"}
