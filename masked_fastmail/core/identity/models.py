"""
Result models for alias matching.

These are pure data models with no dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ...models import AliasRecord

STRATEGY_DOMAIN = "domain"
STRATEGY_SUBDOMAIN = "subdomain"
STRATEGY_SEARCH = "search"


@dataclass(frozen=True)
class MatchResult:
    """
    Result of matching one alias against a target origin.

    Contains whether it matches and which rule decided it.
    """
    matches: bool
    """Whether the alias relates to the target at all"""

    strategy: Optional[str] = None
    """The rule that matched (domain, subdomain, search)"""

    @property
    def is_primary(self) -> bool:
        return self.matches and self.strategy == STRATEGY_DOMAIN


@dataclass
class AliasListing:
    """
    Aliases grouped for ``--list`` output.

    Example:
        Target https://example.com, search text "example":
        - primary: aliases whose forDomain is https://example.com
        - related: sub.example.com aliases and aliases mentioning "example"
    """
    primary: list[AliasRecord] = field(default_factory=list)
    """Aliases stored for exactly the target origin, in input order"""

    related: list[AliasRecord] = field(default_factory=list)
    """Subdomain and free-text hits, in input order, never repeating primary ones"""

    @property
    def is_empty(self) -> bool:
        return not self.primary and not self.related
