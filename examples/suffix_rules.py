"""
Suffix rule example.

Shows how wildcard and exception rules move the registrable domain
boundary, using a small in-memory rule set next to the bundled list.
"""

from url_fields import RuleSet, SuffixRuleSource, resolve
from url_fields.logging_setup import configure_logging


def main():
    """Run suffix rule example."""
    configure_logging()

    print("=" * 60)
    print("url-fields: Suffix Rule Example")
    print("=" * 60)

    rules = RuleSet.from_lines(
        [
            "// custom rules",
            "jp",
            "okinawa.jp",
            "*.kawasaki.jp",
            "!city.kawasaki.jp",
        ]
    )
    print(f"\nIn-memory rules: {rules.to_lines()}")

    for host in [
        "www.pref.okinawa.jp",
        "a.b.kawasaki.jp",
        "www.city.kawasaki.jp",
        "localhost",
    ]:
        subdomain, domain = resolve(host, rules)
        print(f"  {host:<24} subdomain={subdomain!r:<10} domain={domain!r}")

    print("\nBundled public suffix list")
    print("-" * 60)

    bundled = SuffixRuleSource().load()
    print(f"Rules: {len(bundled)} (fingerprint {bundled.fingerprint})")

    for host in ["www.example.co.uk", "foo.blogspot.com", "a.b.c.example.com.au"]:
        subdomain, domain = resolve(host, bundled)
        print(f"  {host:<24} subdomain={subdomain!r:<10} domain={domain!r}")


if __name__ == "__main__":
    main()
