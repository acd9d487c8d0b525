"""Tests for wordpress_graph.response_normalizer."""

import pytest

from wordpress_graph.errors import MalformedResponseError
from wordpress_graph.response_normalizer import normalize, response_body

from conftest import make_response

SOURCE = "https://blog.example.com/wp-json/wp/v2/posts?per_page=100&page=2"


def test_list_returned_unchanged():
    records = [{"id": 1}, {"id": 2}]
    assert normalize(SOURCE, records) is records


def test_json_text_is_parsed():
    assert normalize(SOURCE, '[{"id": 1}, {"id": 2}]') == [{"id": 1}, {"id": 2}]


def test_json_bytes_are_parsed():
    assert normalize(SOURCE, b'[{"id": 3}]') == [{"id": 3}]


def test_empty_list_text():
    assert normalize(SOURCE, "[]") == []


def test_html_error_page_raises_with_preview():
    with pytest.raises(MalformedResponseError) as excinfo:
        normalize(SOURCE, "<html>Error</html>")

    error = excinfo.value
    assert error.source == SOURCE
    assert error.preview == "<html>Error</html>"
    assert "<html>Error</html>" in str(error)
    assert SOURCE in str(error)


def test_preview_is_truncated_to_150_characters():
    body = "  <html>" + "x" * 500 + "</html>"
    with pytest.raises(MalformedResponseError) as excinfo:
        normalize(SOURCE, body)

    preview = excinfo.value.preview
    assert len(preview) == 150
    assert preview.startswith("<html>xxx")
    assert f"{preview}..." in str(excinfo.value)


def test_json_object_is_not_a_record_list():
    with pytest.raises(MalformedResponseError):
        normalize(SOURCE, '{"code": "rest_no_route", "message": "No route"}')


def test_decoded_dict_is_not_a_record_list():
    with pytest.raises(MalformedResponseError) as excinfo:
        normalize(SOURCE, {"code": "rest_no_route"})
    assert "rest_no_route" in excinfo.value.preview


def test_response_body_decodes_json():
    response = make_response(SOURCE, [{"id": 1}])
    assert response_body(response) == [{"id": 1}]


def test_response_body_falls_back_to_text():
    response = make_response(SOURCE, "<html>Error</html>")
    assert response_body(response) == "<html>Error</html>"
