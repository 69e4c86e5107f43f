from __future__ import annotations

import logging
from typing import Optional, Sequence

from .models import AliasRecord, is_known_state, state_priority

logger = logging.getLogger(__name__)


def select_preferred_alias(aliases: Sequence[AliasRecord]) -> Optional[AliasRecord]:
    """
    Pick the alias to hand out when a domain has several.

    Priority: enabled > pending > disabled > deleted > anything unknown.
    Ties keep the earliest alias. Returns None for an empty sequence.
    """
    if not aliases:
        return None

    for alias in aliases:
        if not is_known_state(alias.state):
            logger.warning("Unknown alias state %r for %s", alias.state_label, alias.email)

    selected = aliases[0]
    selected_priority = state_priority(selected.state)
    for alias in aliases[1:]:
        priority = state_priority(alias.state)
        if priority < selected_priority:
            selected = alias
            selected_priority = priority
    return selected
