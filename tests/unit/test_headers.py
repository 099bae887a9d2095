"""Tests for HeaderSet."""

import pytest

from hyperclient_core.headers import DEFAULT_ACCEPT, HeaderSet, default_headers


@pytest.mark.unit
class TestHeaderSet:
    def test_lookup_is_case_insensitive(self):
        headers = HeaderSet({"Content-Type": "application/json"})

        assert headers["content-type"] == "application/json"
        assert headers["CONTENT-TYPE"] == "application/json"
        assert "content-TYPE" in headers

    def test_merge_is_last_write_wins(self):
        base = HeaderSet({"Accept": "text/html", "X-Keep": "1"})

        merged = base.merge({"accept": "application/json"})

        assert merged["Accept"] == "application/json"
        assert merged["X-Keep"] == "1"
        assert len(merged) == 2
        assert list(merged) == ["accept", "X-Keep"]

    def test_merge_returns_new_set(self):
        base = HeaderSet({"Accept": "text/html"})

        base.merge({"Accept": "application/json"})

        assert base["Accept"] == "text/html"

    def test_is_immutable(self):
        headers = HeaderSet({"Accept": "text/html"})

        with pytest.raises(TypeError):
            headers["Accept"] = "application/json"  # type: ignore[index]

    def test_skips_none_values(self):
        headers = HeaderSet({"Accept": "text/html", "X-Empty": None})

        assert "X-Empty" not in headers

    def test_without(self):
        headers = HeaderSet({"Authorization": "Basic abc", "Accept": "text/html"})

        assert "Authorization" not in headers.without("authorization")
        assert headers.without("authorization")["Accept"] == "text/html"

    def test_equality_ignores_case(self):
        assert HeaderSet({"Accept": "a"}) == HeaderSet({"accept": "a"})
        assert HeaderSet({"Accept": "a"}) == {"ACCEPT": "a"}
        assert HeaderSet({"Accept": "a"}) != HeaderSet({"Accept": "b"})

    def test_lower_items(self):
        headers = HeaderSet({"Content-Type": "application/json"})

        assert headers.lower_items() == {"content-type": "application/json"}


@pytest.mark.unit
def test_default_headers_are_never_empty():
    headers = default_headers()

    assert len(headers) > 0
    assert headers["Accept"] == DEFAULT_ACCEPT
    assert "User-Agent" in headers
