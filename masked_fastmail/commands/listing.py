from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.identity import filter_aliases_for_list, prepare_domain_input
from ..errors import MaskedFastmailError
from .errors import format_api_error
from .output import AliasRow, email_width, render_rows

if TYPE_CHECKING:  # pragma: no cover
    from ..providers import FastmailClient


def run(client: "FastmailClient", identifier: str) -> None:
    display, normalized = prepare_domain_input(identifier)
    try:
        aliases = client.fetch_all_aliases()
    except MaskedFastmailError as exc:
        raise format_api_error("failed to list aliases", exc) from exc

    listing = filter_aliases_for_list(aliases, normalized, display)
    if listing.is_empty:
        print(f"No aliases found matching {display}")
        return

    primary_rows = [AliasRow.from_alias(alias) for alias in listing.primary]
    related_rows = [AliasRow.from_alias(alias) for alias in listing.related]
    width = email_width(primary_rows + related_rows)

    if primary_rows:
        print(f"Aliases for {normalized}:")
        for line in render_rows(primary_rows, width, include_url=False):
            print(line)
    else:
        print(f"No aliases found for domain {normalized}")

    if related_rows:
        print()
        print(f'Additional matches containing "{display}":')
        for line in render_rows(related_rows, width, include_url=True):
            print(line)
