"""
Origin canonicalization for alias domains.

A user may type ``example.com``, ``HTTPS://Example.COM/signup?x=1`` or
``https://example.com:443``; all of them identify the same origin and must
compare equal. Everything here is pure string handling.
"""

from __future__ import annotations

from urllib.parse import urlsplit

from ...errors import EmptyInputError, MissingHostError, ParseFailureError

DEFAULT_SCHEME = "https"
SCHEME_SEPARATOR = "://"


def normalize_origin(value: str) -> str:
    """
    Convert a URL or bare domain into ``<scheme>://<host>``.

    Paths, queries, fragments, user info, ports and casing are dropped.
    Subdomains are kept so ``one.example.com`` and ``two.example.com`` stay
    distinct. Inputs without a scheme are assumed to be https.

    Examples:
        "example.com" → "https://example.com"
        "http://Sub.Example.com/path" → "http://sub.example.com"
        "https://example.com:443" → "https://example.com"

    Raises:
        EmptyInputError: blank input
        ParseFailureError: the value cannot be parsed as a URL
        MissingHostError: the URL has no host part
    """
    trimmed = (value or "").strip()
    if not trimmed:
        raise EmptyInputError("domain cannot be empty")

    if SCHEME_SEPARATOR not in trimmed:
        trimmed = f"{DEFAULT_SCHEME}{SCHEME_SEPARATOR}{trimmed}"

    try:
        parsed = urlsplit(trimmed)
        host = parsed.hostname or ""
    except ValueError as exc:
        raise ParseFailureError(f"failed to parse domain {value!r}: {exc}") from exc

    port = _port_text(parsed.netloc)
    if port and not (port.isascii() and port.isdigit()):
        raise ParseFailureError(f"failed to parse domain {value!r}: invalid port {port!r}")

    # Trailing dots are stripped fully so normalization stays idempotent.
    host = host.lower().rstrip(".")
    if not host:
        raise MissingHostError(f"invalid domain {value!r}: missing host")
    if ":" in host:
        host = f"[{host}]"

    scheme = (parsed.scheme or DEFAULT_SCHEME).lower()
    return f"{scheme}{SCHEME_SEPARATOR}{host}"


def _port_text(netloc: str) -> str:
    """Raw port text of ``netloc``; only its digits are checked, the value is discarded."""
    hostport = netloc.rpartition("@")[2]
    if hostport.startswith("["):
        hostport = hostport.partition("]")[2]
    return hostport.rpartition(":")[2] if ":" in hostport else ""


def _loose(value: str) -> str:
    return (value or "").strip().lower().rstrip("/")


def domains_equal(a: str, b: str) -> bool:
    """
    Compare two domain strings by their normalized origin.

    If either side cannot be normalized the comparison falls back to a
    case-insensitive match with trailing slashes removed. Never raises.
    """
    try:
        return normalize_origin(a) == normalize_origin(b)
    except (EmptyInputError, ParseFailureError, MissingHostError):
        return _loose(a) == _loose(b)


def host_from_origin(value: str) -> str:
    """Bare lower-cased host of ``value``, or an empty string when it has none."""
    try:
        origin = normalize_origin(value)
    except (EmptyInputError, ParseFailureError, MissingHostError):
        return ""
    return origin.split(SCHEME_SEPARATOR, 1)[1]


def is_subdomain(candidate: str, target: str) -> bool:
    """
    True when one host is a strict subdomain of the other.

    The relation is symmetric: ``a.b.com`` relates to ``b.com`` and
    ``b.com`` relates to ``a.b.com``. Equal hosts do not count.
    """
    if not candidate or not target or candidate == target:
        return False
    return candidate.endswith("." + target) or target.endswith("." + candidate)
