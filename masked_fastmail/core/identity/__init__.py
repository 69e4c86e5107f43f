"""
Domain identity resolution for aliases.

This module handles:
- Origin canonicalization (scheme://host)
- Email-versus-domain classification of user input
- Alias matching strategies (domain, subdomain, free-text search)

All logic is pure business logic with no I/O dependencies.
"""

from __future__ import annotations

from .canonicalizer import domains_equal, host_from_origin, is_subdomain, normalize_origin
from .classifier import looks_like_email_address, normalize_email_input, prepare_domain_input
from .matching import (
    alias_matches_domain,
    alias_matches_search,
    alias_matches_subdomain,
    classify_alias,
    filter_aliases_for_list,
)
from .models import AliasListing, MatchResult

__all__ = [
    "AliasListing",
    "MatchResult",
    "alias_matches_domain",
    "alias_matches_search",
    "alias_matches_subdomain",
    "classify_alias",
    "domains_equal",
    "filter_aliases_for_list",
    "host_from_origin",
    "is_subdomain",
    "looks_like_email_address",
    "normalize_email_input",
    "normalize_origin",
    "prepare_domain_input",
]
