"""
Alias matching rules for a target origin.

Three independent predicates, tried in this order by the listing:
- Exact domain (forDomain, or description for legacy records)
- Subdomain (either host is a strict subdomain of the other)
- Free-text search over email, description, forDomain and id

All functions are pure and have no I/O dependencies.
"""

from __future__ import annotations

from typing import Iterable

from ...models import AliasRecord, AliasState
from .canonicalizer import domains_equal, host_from_origin, is_subdomain
from .models import (
    STRATEGY_DOMAIN,
    STRATEGY_SEARCH,
    STRATEGY_SUBDOMAIN,
    AliasListing,
    MatchResult,
)


def alias_matches_domain(alias: AliasRecord, target: str) -> bool:
    """
    True when the alias was stored for ``target``.

    Older aliases kept the domain only in the description, so the description
    is consulted, but only when forDomain is blank. A non-blank forDomain that
    differs is a mismatch even if the description would match.
    """
    if alias.for_domain.strip():
        return domains_equal(alias.for_domain, target)
    if not alias.description.strip():
        return False
    return domains_equal(alias.description, target)


def alias_matches_subdomain(alias: AliasRecord, target: str) -> bool:
    target_host = host_from_origin(target)
    if not target_host:
        return False
    alias_host = host_from_origin(alias.domain_source)
    if not alias_host:
        return False
    return is_subdomain(alias_host, target_host)


def alias_matches_search(alias: AliasRecord, *needles: str) -> bool:
    fields = [
        alias.email.lower(),
        alias.description.lower(),
        alias.for_domain.lower(),
        alias.id.lower(),
    ]
    for needle in needles:
        needle = (needle or "").strip().lower()
        if not needle:
            continue
        for value in fields:
            if value and needle in value:
                return True
    return False


def classify_alias(alias: AliasRecord, target: str, search_text: str = "") -> MatchResult:
    """
    Decide how ``alias`` relates to ``target``; the first matching rule wins.

    Args:
        alias: The alias snapshot
        target: Normalized origin, e.g. "https://example.com"
        search_text: Raw text the user typed, used for free-text search

    Returns:
        MatchResult with the winning strategy, or ``matches=False``
    """
    if alias_matches_domain(alias, target):
        return MatchResult(matches=True, strategy=STRATEGY_DOMAIN)
    if alias_matches_subdomain(alias, target):
        return MatchResult(matches=True, strategy=STRATEGY_SUBDOMAIN)
    if alias_matches_search(alias, target, search_text):
        return MatchResult(matches=True, strategy=STRATEGY_SEARCH)
    return MatchResult(matches=False)


def filter_aliases_for_list(
    aliases: Iterable[AliasRecord], target: str, search_text: str
) -> AliasListing:
    """
    Split aliases into primary (same origin) and related (subdomain or search hits).

    Deleted aliases are skipped. Aliases with an id are reported at most once;
    aliases without one cannot be recognised as duplicates and are kept.
    """
    listing = AliasListing()
    seen: set[str] = set()

    for alias in aliases:
        if AliasState.parse(alias.state) is AliasState.DELETED:
            continue
        result = classify_alias(alias, target, search_text)
        if not result.matches:
            continue
        if result.is_primary:
            listing.primary.append(alias)
            if alias.id:
                seen.add(alias.id)
            continue
        if alias.id:
            if alias.id in seen:
                continue
            seen.add(alias.id)
        listing.related.append(alias)

    return listing
