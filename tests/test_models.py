"""
Domain Model Tests

Content-Type parsing and ResponseView helpers.
"""

import pytest

from core.domain.errors import InvalidHeaderValue
from core.domain.models import ContentType, ResponseView


class TestContentType:
    """Tests for Content-Type header parsing."""

    def test_plain_essence(self):
        ct = ContentType.parse("application/json")
        assert ct.essence == "application/json"
        assert ct.parameters == {}
        assert ct.raw == "application/json"

    def test_parameters_are_ignored_for_essence(self):
        ct = ContentType.parse("application/json; charset=utf-8")
        assert ct.essence == "application/json"
        assert ct.parameters == {"charset": "utf-8"}

    def test_essence_is_lowercased_and_trimmed(self):
        ct = ContentType.parse("  Application/JSON ;Charset=\"UTF-8\"")
        assert ct.essence == "application/json"
        assert ct.parameters == {"charset": "UTF-8"}

    def test_structured_suffix_keeps_full_subtype(self):
        assert ContentType.parse("application/ld+json").essence == "application/ld+json"

    @pytest.mark.parametrize("value", ["", "json", "text/", "/plain", "text/plain/extra", "a b/c"])
    def test_invalid_values_fail(self, value):
        with pytest.raises(InvalidHeaderValue):
            ContentType.parse(value)


class TestResponseView:
    """Tests for ResponseView."""

    def test_status_line_with_reason(self):
        view = ResponseView(http_version="HTTP/1.1", status_code=200, reason_phrase="OK")
        assert view.status_line == "HTTP/1.1 200 OK"

    def test_status_line_without_reason(self):
        view = ResponseView(http_version="HTTP/2", status_code=204)
        assert view.status_line == "HTTP/2 204"

    def test_headers_keep_duplicates(self):
        view = ResponseView(
            status_code=200,
            headers=[("set-cookie", "a=1"), ("set-cookie", "b=2")],
        )
        assert view.headers == [("set-cookie", "a=1"), ("set-cookie", "b=2")]


class TestContentTypeParameters:
    """Tests for parameter parsing."""

    def test_quoted_value_may_contain_semicolons(self):
        ct = ContentType.parse('multipart/mixed; boundary="a;b=c"; charset=utf-8')
        assert ct.essence == "multipart/mixed"
        assert ct.parameters == {"boundary": "a;b=c", "charset": "utf-8"}

    def test_quoted_pairs_are_unescaped(self):
        ct = ContentType.parse(r'text/plain; title="say \"hi\""')
        assert ct.parameters == {"title": 'say "hi"'}

    def test_parameters_without_value_are_skipped(self):
        ct = ContentType.parse("text/plain; flag; charset=ascii")
        assert ct.parameters == {"charset": "ascii"}
