"""
Tell alias addresses apart from domains on the command line.

The check is a heuristic, not RFC 5322 validation: one ``@`` and no
whitespace is an email address, anything else is treated as a domain.
"""

from __future__ import annotations

from typing import Tuple

from ...errors import AmbiguousInputError, NotAnEmailError
from .canonicalizer import normalize_origin


def looks_like_email_address(value: str) -> bool:
    trimmed = (value or "").strip()
    if trimmed.count("@") != 1:
        return False
    return not any(ch.isspace() for ch in trimmed)


def prepare_domain_input(value: str) -> Tuple[str, str]:
    """
    Return ``(display, normalized)`` for a domain argument.

    ``display`` is the trimmed text as typed, used for messages and free-text
    search; ``normalized`` is the canonical origin used for comparisons and
    for storing on new aliases.
    """
    trimmed = (value or "").strip()
    if looks_like_email_address(trimmed):
        raise AmbiguousInputError(
            f"{trimmed!r} looks like an email address; pass a domain or URL instead"
        )
    return trimmed, normalize_origin(trimmed)


def normalize_email_input(value: str) -> str:
    trimmed = (value or "").strip()
    if not looks_like_email_address(trimmed):
        raise NotAnEmailError(f"{trimmed!r} is not an alias email address")
    return trimmed
