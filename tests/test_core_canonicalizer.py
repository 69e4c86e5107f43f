import unittest

from masked_fastmail.core.identity.canonicalizer import (
    domains_equal,
    host_from_origin,
    is_subdomain,
    normalize_origin,
)
from masked_fastmail.errors import EmptyInputError, InputError, MissingHostError, ParseFailureError


class TestNormalizeOrigin(unittest.TestCase):
    def test_known_forms(self) -> None:
        cases = [
            ("example.com", "https://example.com"),
            ("HTTPS://Example.COM", "https://example.com"),
            ("http://sub.example.com/path", "http://sub.example.com"),
            (" example.com/login ", "https://example.com"),
            ("https://example.com:443", "https://example.com"),
            ("ftp://example.com", "ftp://example.com"),
            ("https://example.com./", "https://example.com"),
            ("https://user:pw@example.com/a?b=c#d", "https://example.com"),
        ]
        for value, expected in cases:
            with self.subTest(value=value):
                self.assertEqual(normalize_origin(value), expected)

    def test_idempotent(self) -> None:
        values = (
            "Example.com",
            "http://A.B.example.com:8080/x",
            "example.com..",
            "ftp://x.org",
            "[::1]",
            "http://[2001:db8::1]:8080/x",
        )
        for value in values:
            with self.subTest(value=value):
                once = normalize_origin(value)
                self.assertEqual(normalize_origin(once), once)

    def test_ipv6_hosts_keep_brackets(self) -> None:
        self.assertEqual(normalize_origin("[::1]"), "https://[::1]")
        self.assertEqual(normalize_origin("http://[2001:DB8::1]:8080/x"), "http://[2001:db8::1]")

    def test_empty_input(self) -> None:
        with self.assertRaises(EmptyInputError):
            normalize_origin("   ")

    def test_missing_host(self) -> None:
        with self.assertRaises(InputError):
            normalize_origin("https://")
        with self.assertRaises(MissingHostError):
            normalize_origin("https://./path")

    def test_invalid_port_is_parse_failure(self) -> None:
        with self.assertRaises(ParseFailureError):
            normalize_origin("example.com:notaport")

    def test_out_of_range_port_is_discarded(self) -> None:
        self.assertEqual(normalize_origin("https://example.com:99999"), "https://example.com")


class TestDomainsEqual(unittest.TestCase):
    def test_casing_and_trailing_slash(self) -> None:
        self.assertTrue(domains_equal("HTTPS://Example.COM", "https://example.com/"))

    def test_assumes_https(self) -> None:
        self.assertTrue(domains_equal("https://example.com", "Example.com"))

    def test_port_and_path_ignored(self) -> None:
        self.assertTrue(domains_equal("https://example.com:443", "https://example.com/signup"))
        self.assertTrue(domains_equal("https://example.com:99999", "https://example.com"))

    def test_ipv6_origin(self) -> None:
        self.assertTrue(domains_equal("https://[::1]", "[::1]"))
        self.assertTrue(domains_equal("http://[::1]:8080/a", "HTTP://[::1]"))

    def test_subdomains_distinct(self) -> None:
        self.assertFalse(domains_equal("https://one.example.com", "https://two.example.com"))

    def test_schemes_distinct(self) -> None:
        self.assertFalse(domains_equal("ftp://example.com", "https://example.com"))
        self.assertFalse(domains_equal("ftp://example.com", "example.com"))

    def test_fallback_when_normalization_fails(self) -> None:
        self.assertTrue(domains_equal("", "  "))
        self.assertTrue(domains_equal("Not A Host:xx/", "not a host:xx"))
        self.assertFalse(domains_equal("", "example.com"))


class TestHostHelpers(unittest.TestCase):
    def test_host_from_origin(self) -> None:
        self.assertEqual(host_from_origin("https://Sub.Example.com/x"), "sub.example.com")
        self.assertEqual(host_from_origin(""), "")

    def test_is_subdomain_is_symmetric(self) -> None:
        self.assertTrue(is_subdomain("a.b.com", "b.com"))
        self.assertTrue(is_subdomain("b.com", "a.b.com"))

    def test_is_subdomain_rejects_equal_and_suffix_lookalikes(self) -> None:
        self.assertFalse(is_subdomain("b.com", "b.com"))
        self.assertFalse(is_subdomain("ab.com", "b.com"))
        self.assertFalse(is_subdomain("", "b.com"))


if __name__ == "__main__":
    unittest.main()
