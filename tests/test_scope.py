# File: tests/test_scope.py
import pytest

from link_scout.crawler.scope import ScopeMode, in_scope


@pytest.mark.parametrize("mode", list(ScopeMode))
def test_no_scope_admits_everything(mode):
    assert in_scope("http://anything.test/x", None, mode)


@pytest.mark.parametrize(
    "url,expected",
    [
        ("http://example.com/", True),
        ("https://www.example.com/a", True),
        ("http://a.b.example.com/", True),
        ("http://EXAMPLE.COM/", True),
        ("http://example.com./", True),
        ("http://notexample.com/", False),
        ("http://example.com.evil.org/", False),
        ("http://other.com/x", False),
    ],
)
def test_subdomain_mode(url, expected):
    assert in_scope(url, "example.com") is expected
    assert in_scope(url, "example.com", ScopeMode.SUBDOMAIN) is expected


def test_exact_mode():
    assert in_scope("http://example.com/x", "Example.com", ScopeMode.EXACT)
    assert not in_scope("http://www.example.com/x", "example.com", ScopeMode.EXACT)


def test_fuzzy_mode():
    assert in_scope("http://docs.example-cdn.net/", "example", ScopeMode.FUZZY)
    assert in_scope("http://notexample.com/", "example.com", ScopeMode.FUZZY)
    assert not in_scope("http://other.org/", "example", ScopeMode.FUZZY)


def test_mode_accepts_plain_string():
    assert not in_scope("http://www.example.com/", "example.com", "exact")


def test_empty_scope_string_admits_nothing():
    assert not in_scope("http://example.com/", "", ScopeMode.SUBDOMAIN)
