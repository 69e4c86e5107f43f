from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.identity import normalize_email_input
from ..errors import MaskedFastmailError
from ..models import AliasState
from .errors import format_api_error

if TYPE_CHECKING:  # pragma: no cover
    from ..providers import FastmailClient


def run(client: "FastmailClient", identifier: str, state: AliasState) -> None:
    email = normalize_email_input(identifier)
    try:
        alias = client.get_alias_by_email(email)
    except MaskedFastmailError as exc:
        raise format_api_error("failed to get alias", exc) from exc

    print(f"Setting '{alias.email}' for '{alias.for_domain}' to '{state}'")
    try:
        client.update_alias_status(alias, state)
    except MaskedFastmailError as exc:
        raise format_api_error("failed to update alias status", exc) from exc
    print("Success")
