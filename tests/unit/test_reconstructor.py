"""Unit tests for URL reconstruction."""

import pytest

from url_fields.exceptions import InvalidInput
from url_fields.parsing import (
    CANONICAL_ORDER,
    DOMAIN,
    EXACT,
    REGEXP,
    SIMPLE,
    Field,
    FieldRecord,
    URLDecomposer,
    get_template,
    join,
)
from url_fields.suffix import RuleSet


@pytest.fixture
def record():
    """Record for the okinawa reference URL."""
    return FieldRecord(
        scheme="http",
        host="www.pref.okinawa.jp",
        subdomain="www",
        domain="pref.okinawa.jp",
        port="8080",
        user="user",
        password="pass",
        path="/path/to/page.html",
        query="query=string",
        fragment="fragment",
    )


class TestJoinTemplates:
    """Test join() with each template."""

    def test_simple_drops_www(self, record):
        """Test the default SIMPLE template."""
        assert join(record, SIMPLE, remove_www_subdomain=True) == "pref.okinawa.jp/path/to/page.html"
        assert join(record) == "pref.okinawa.jp/path/to/page.html"

    def test_simple_keeps_www_when_asked(self, record):
        """Test remove_www_subdomain=False keeps 'www'."""
        assert join(record, SIMPLE, remove_www_subdomain=False) == (
            "www.pref.okinawa.jp/path/to/page.html"
        )

    def test_exact(self, record):
        """Test EXACT keeps the query."""
        assert join(record, EXACT) == "pref.okinawa.jp/path/to/page.html?query=string"

    def test_regexp(self, record):
        """Test REGEXP leaves only the path."""
        assert join(record, REGEXP) == "/path/to/page.html"

    def test_domain(self, record):
        """Test DOMAIN drops www."""
        assert join(record, DOMAIN) == "pref.okinawa.jp"

    def test_domain_keeps_other_subdomains(self, record):
        """Test DOMAIN only strips a literal 'www' subdomain."""
        other = record.replace(subdomain="jp2", host="jp2.pref.okinawa.jp")
        assert join(other, DOMAIN, remove_www_subdomain=True) == "jp2.pref.okinawa.jp"

    def test_no_exclusions(self, record):
        """Test the full layout with every field present."""
        assert join(record, set(), remove_www_subdomain=False) == (
            "http://www.pref.okinawa.jp:8080/path/to/page.html?query=string#fragment"
        )

    def test_template_lookup(self):
        """Test templates by name."""
        assert get_template("simple") is SIMPLE
        assert get_template("DOMAIN") is DOMAIN
        with pytest.raises(InvalidInput):
            get_template("verbose")


class TestJoinRules:
    """Test separator and skipping rules."""

    def test_credentials_never_rendered(self, record):
        """Test host, user and pass contribute no text even when not excluded."""
        url = join(record, [Field.SCHEME], remove_www_subdomain=False)
        assert "user" not in url
        assert "pass" not in url
        assert url == "www.pref.okinawa.jp:8080/path/to/page.html?query=string#fragment"

    def test_absent_fields_skipped(self):
        """Test absent and empty values drop with their separators."""
        record = FieldRecord(scheme="https", subdomain="", domain="example.com", path="/")
        assert join(record, set()) == "https://example.com/"

    def test_www_removed_only_when_exact(self, record):
        """Test the www rule does not touch 'www2' or 'www.shop'."""
        assert join(record.replace(subdomain="www2"), DOMAIN) == "www2.pref.okinawa.jp"
        assert join(record.replace(subdomain="www.shop"), DOMAIN) == "www.shop.pref.okinawa.jp"

    def test_string_identifiers(self, record):
        """Test exclusions given as strings."""
        assert join(record, ["scheme", "port", "query", "fragment", "path"]) == "pref.okinawa.jp"

    def test_unknown_identifier(self, record):
        """Test an unknown exclusion is invalid input."""
        with pytest.raises(InvalidInput):
            join(record, ["password"])

    def test_mapping_input(self, record):
        """Test join accepts a mapping keyed by field identifier."""
        assert join(record.to_dict(), EXACT) == "pref.okinawa.jp/path/to/page.html?query=string"

    def test_mapping_without_path(self):
        """Test a mapping missing 'path' adds no path to the output."""
        assert join({"scheme": "https", "domain": "example.com"}, set()) == "https://example.com"
        assert FieldRecord.from_mapping({"domain": "example.com"}).path == ""

    def test_mapping_input_order_irrelevant(self, record):
        """Test output order comes from the canonical order, not the mapping."""
        reversed_fields = dict(reversed(list(record.to_dict().items())))
        assert join(reversed_fields, set(), remove_www_subdomain=False) == join(
            record, set(), remove_www_subdomain=False
        )

    @pytest.mark.parametrize("value", [None, "http://example.com", 42, ["scheme"]])
    def test_non_record_rejected(self, value):
        """Test non-record input is invalid."""
        with pytest.raises(InvalidInput):
            join(value)

    def test_flattened_query_reencoded(self, record):
        """Test a mapping query renders as an encoded query string."""
        flat = record.replace(query={"q": "red shoes", "page": "2"})
        assert join(flat, EXACT) == "pref.okinawa.jp/path/to/page.html?q=red+shoes&page=2"

    def test_flattened_query_round_trip(self):
        """Test parse -> flatten -> join keeps encoded keys and values intact."""
        decomposer = URLDecomposer(RuleSet.from_lines(["com"]), flatten_query=True)
        record = decomposer.parse("https://example.com/p?k%20ey=1&a=x%2Fy")

        assert join(record, EXACT) == "example.com/p?k%20ey=1&a=x%2Fy"

    def test_empty_flattened_query_skipped(self, record):
        """Test an empty mapping query adds no '?'."""
        assert join(record.replace(query={}), EXACT) == "pref.okinawa.jp/path/to/page.html"

    def test_integer_port(self, record):
        """Test ports given as integers."""
        assert join(record.replace(port=8443), [Field.SCHEME], False).endswith(
            ":8443/path/to/page.html?query=string#fragment"
        )

    def test_canonical_order(self):
        """Test the fixed reconstruction order."""
        assert [f.value for f in CANONICAL_ORDER] == [
            "host",
            "scheme",
            "user",
            "pass",
            "subdomain",
            "domain",
            "port",
            "path",
            "query",
            "fragment",
        ]

    def test_every_field_has_attribute(self):
        """Test each field identifier maps onto a FieldRecord attribute."""
        record = FieldRecord.from_mapping({f.value: "x" for f in Field})
        assert all(record.get(f) == "x" for f in Field)
