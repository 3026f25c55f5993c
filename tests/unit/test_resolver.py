"""Unit tests for registrable domain resolution."""

import pytest

from url_fields.suffix import RuleSet, public_suffix_length, resolve


@pytest.fixture
def rules():
    """Small rule set covering plain, wildcard and exception rules."""
    return RuleSet.from_lines(
        [
            "com",
            "uk",
            "co.uk",
            "jp",
            "okinawa.jp",
            "*.kawasaki.jp",
            "!city.kawasaki.jp",
            "*.ck",
            "!www.ck",
        ]
    )


class TestResolve:
    """Test suite for resolve()."""

    def test_multi_label_suffix(self, rules):
        """Test the okinawa.jp suffix yields pref.okinawa.jp."""
        assert resolve("www.pref.okinawa.jp", rules) == ("www", "pref.okinawa.jp")

    def test_no_subdomain(self, rules):
        """Test a bare registrable domain has an empty subdomain."""
        assert resolve("example.co.uk", rules) == ("", "example.co.uk")

    def test_deep_subdomain(self, rules):
        """Test every label before the registrable domain is the subdomain."""
        assert resolve("a.b.c.example.com", rules) == ("a.b.c", "example.com")

    def test_wildcard_rule(self, rules):
        """Test *.kawasaki.jp makes any label under kawasaki.jp a suffix."""
        assert resolve("a.b.kawasaki.jp", rules) == ("", "a.b.kawasaki.jp")
        assert resolve("x.a.b.kawasaki.jp", rules) == ("x", "a.b.kawasaki.jp")

    def test_exception_rule(self, rules):
        """Test !city.kawasaki.jp overrides the wildcard."""
        assert resolve("www.city.kawasaki.jp", rules) == ("www", "city.kawasaki.jp")
        assert resolve("city.kawasaki.jp", rules) == ("", "city.kawasaki.jp")

    def test_exception_under_single_label_wildcard(self, rules):
        """Test !www.ck under *.ck."""
        assert resolve("www.ck", rules) == ("", "www.ck")
        assert resolve("a.www.ck", rules) == ("a", "www.ck")
        assert resolve("a.b.ck", rules) == ("", "a.b.ck")

    def test_no_matching_rule(self, rules):
        """Test unknown TLDs fall back to the last two labels."""
        assert resolve("www.example.test", rules) == ("www", "example.test")
        assert resolve("example.test", rules) == ("", "example.test")

    def test_single_label(self, rules):
        """Test single-label hosts are their own domain."""
        assert resolve("localhost", rules) == ("", "localhost")

    def test_empty_host(self, rules):
        """Test empty host yields empty parts."""
        assert resolve("", rules) == ("", "")

    def test_host_is_public_suffix(self, rules):
        """Test a host that is itself a suffix is returned as the domain."""
        assert resolve("co.uk", rules) == ("", "co.uk")
        assert resolve("b.kawasaki.jp", rules) == ("", "b.kawasaki.jp")

    def test_case_insensitive_match(self, rules):
        """Test rules match regardless of case but host text is kept."""
        assert resolve("WWW.Example.CO.UK", rules) == ("WWW", "Example.CO.UK")

    def test_ip_literals(self, rules):
        """Test IP addresses are not split."""
        assert resolve("192.168.0.1", rules) == ("", "192.168.0.1")
        assert resolve("[::1]", rules) == ("", "[::1]")

    def test_trailing_dot_host(self, rules):
        """Test fully-qualified hosts keep the root dot on the domain."""
        assert resolve("www.example.com.", rules) == ("www", "example.com.")
        assert resolve("www.pref.okinawa.jp.", rules) == ("www", "pref.okinawa.jp.")
        assert resolve("localhost.", rules) == ("", "localhost.")

    def test_empty_rule_set(self):
        """Test resolution without any rules uses the last-label default."""
        assert resolve("www.example.org", RuleSet()) == ("www", "example.org")

    @pytest.mark.parametrize(
        "host",
        [
            "www.pref.okinawa.jp",
            "a.b.c.example.com",
            "x.a.b.kawasaki.jp",
            "www.city.kawasaki.jp",
            "example.co.uk",
            "localhost",
            "www.example.com.",
        ],
    )
    def test_host_recomposes(self, rules, host):
        """Test subdomain + '.' + domain reproduces the host."""
        subdomain, domain = resolve(host, rules)
        if subdomain:
            assert f"{subdomain}.{domain}" == host
        else:
            assert domain == host


class TestPublicSuffixLength:
    """Test suite for public_suffix_length()."""

    def test_lengths(self, rules):
        """Test suffix label counts for each rule kind."""
        assert public_suffix_length(["www", "example", "co", "uk"], rules) == 2
        assert public_suffix_length(["a", "b", "kawasaki", "jp"], rules) == 3
        assert public_suffix_length(["www", "city", "kawasaki", "jp"], rules) == 2
        assert public_suffix_length(["example", "test"], rules) == 1

    def test_empty_labels_never_match(self, rules):
        """Test candidates with empty labels are not matched."""
        assert public_suffix_length(["a", "", "com"], rules) == 1

