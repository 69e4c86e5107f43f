from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Callable, Optional

from ..clipboard import copy_to_clipboard
from ..core.identity import prepare_domain_input
from ..errors import ClipboardError, MaskedFastmailError
from ..models import AliasRecord
from ..selection import select_preferred_alias
from .errors import format_api_error
from .output import summary

if TYPE_CHECKING:  # pragma: no cover
    from ..providers import FastmailClient

logger = logging.getLogger(__name__)


def run(
    client: "FastmailClient",
    identifier: str,
    description: Optional[str] = None,
    *,
    copy: Callable[[str], object] = copy_to_clipboard,
) -> AliasRecord:
    """Print the preferred alias for a domain, creating one when none exists."""
    _, normalized = prepare_domain_input(identifier)
    try:
        aliases = client.get_aliases(normalized)
    except MaskedFastmailError as exc:
        raise format_api_error("failed to get aliases", exc) from exc

    selected = select_preferred_alias(aliases)
    created = False
    if selected is None:
        print(f"No alias found for {normalized}, creating new one...")
        try:
            selected = client.create_alias(normalized, description)
        except MaskedFastmailError as exc:
            raise format_api_error("failed to create alias", exc) from exc
        created = True
    elif len(aliases) > 1:
        print(f"Found {len(aliases)} aliases for {normalized}:")
        for alias in aliases:
            print(f"- {summary(alias)}")
        print("\nSelected alias:")

    if description is not None and not created and description.strip():
        print(
            "Note: description not updated for existing alias. Use --set-description to change it.",
            file=sys.stderr,
        )

    try:
        tool = copy(selected.email)
    except ClipboardError as exc:
        print(summary(selected))
        logger.warning("Could not copy to clipboard: %s", exc)
    else:
        logger.debug("Copied %s to the clipboard with %s", selected.email, tool)
        print(f"{summary(selected)} (copied to clipboard)")
    return selected
