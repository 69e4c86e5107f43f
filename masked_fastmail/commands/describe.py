from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.identity import normalize_email_input
from ..errors import MaskedFastmailError, NotAnEmailError
from .errors import format_api_error

if TYPE_CHECKING:  # pragma: no cover
    from ..providers import FastmailClient


def run(client: "FastmailClient", identifier: str, description: str) -> None:
    try:
        email = normalize_email_input(identifier)
    except NotAnEmailError as exc:
        raise NotAnEmailError(f"--set-description requires an alias email address: {exc}") from exc

    try:
        alias = client.get_alias_by_email(email)
    except MaskedFastmailError as exc:
        raise format_api_error("failed to get alias", exc) from exc

    if alias.description == description:
        print("Description already set to the requested value.")
        return

    try:
        client.update_alias_description(alias, description)
    except MaskedFastmailError as exc:
        raise format_api_error("failed to update alias description", exc) from exc
    print("Description updated.")
