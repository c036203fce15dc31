"""
Tests for CORS preflight and actual-response headers.
"""

from starlette.datastructures import Headers, MutableHeaders

from oncall.interfaces.cors import add_actual_response_headers, preflight_response


class TestPreflight:
    """Tests for the OPTIONS preflight response."""

    def test_without_origin(self) -> None:
        response = preflight_response(Headers({}))
        assert response.status_code == 204
        assert response.body == b""
        assert response.headers.getlist("vary") == ["Origin", "Access-Control-Request-Headers"]
        assert response.headers["access-control-allow-methods"] == "POST"
        assert "access-control-allow-origin" not in response.headers
        assert "access-control-allow-headers" not in response.headers

    def test_origin_is_echoed(self) -> None:
        response = preflight_response(Headers({"origin": "http://localhost"}))
        assert response.headers.getlist("access-control-allow-origin") == ["http://localhost"]

    def test_requested_headers_are_allowed(self) -> None:
        response = preflight_response(
            Headers({"access-control-request-headers": "authorization, content-type"})
        )
        assert response.headers["access-control-allow-headers"] == "*"


class TestActualResponseHeaders:
    """Tests for the headers added to POST responses."""

    def test_without_origin(self) -> None:
        headers = MutableHeaders()
        add_actual_response_headers(Headers({}), headers)
        assert headers.items() == [("vary", "Origin")]

    def test_with_origin(self) -> None:
        headers = MutableHeaders()
        add_actual_response_headers(Headers({"origin": "https://app.example"}), headers)
        assert headers.getlist("vary") == ["Origin"]
        assert headers["access-control-allow-origin"] == "https://app.example"
