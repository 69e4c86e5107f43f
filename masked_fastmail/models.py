from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union


class AliasState(str, Enum):
    PENDING = "pending"
    ENABLED = "enabled"
    DISABLED = "disabled"
    DELETED = "deleted"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Any) -> Union["AliasState", str]:
        """Return the known state for ``value`` or the raw string for states we don't know yet."""
        if isinstance(value, AliasState):
            return value
        text = "" if value is None else str(value)
        try:
            return cls(text)
        except ValueError:
            return text


# Lower wins when several aliases exist for one domain.
STATE_PRIORITY: Dict[AliasState, int] = {
    AliasState.ENABLED: 0,
    AliasState.PENDING: 1,
    AliasState.DISABLED: 2,
    AliasState.DELETED: 3,
}

UNKNOWN_STATE_PRIORITY = sys.maxsize


def is_known_state(state: Union[AliasState, str]) -> bool:
    return isinstance(AliasState.parse(state), AliasState)


def state_priority(state: Union[AliasState, str]) -> int:
    parsed = AliasState.parse(state)
    if isinstance(parsed, AliasState):
        return STATE_PRIORITY[parsed]
    return UNKNOWN_STATE_PRIORITY


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True, slots=True)
class AliasRecord:
    """Snapshot of one MaskedEmail object as returned by the server."""

    email: str
    for_domain: str = ""
    description: str = ""
    state: Union[AliasState, str] = AliasState.PENDING
    id: str = ""
    created_at: Optional[str] = None
    last_message_at: Optional[str] = None
    url: Optional[str] = None

    @property
    def state_label(self) -> str:
        return str(self.state)

    @property
    def domain_source(self) -> str:
        """forDomain, or the description for legacy records that only stored it there."""
        if self.for_domain.strip():
            return self.for_domain
        return self.description

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "AliasRecord":
        return cls(
            email=_text(payload.get("email")),
            for_domain=_text(payload.get("forDomain")),
            description=_text(payload.get("description")),
            state=AliasState.parse(payload.get("state")),
            id=_text(payload.get("id")),
            created_at=payload.get("createdAt"),
            last_message_at=payload.get("lastMessageAt"),
            url=payload.get("url"),
        )

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "email": self.email,
            "forDomain": self.for_domain,
            "description": self.description,
            "state": self.state_label,
            "id": self.id,
        }
        if self.created_at is not None:
            payload["createdAt"] = self.created_at
        if self.last_message_at is not None:
            payload["lastMessageAt"] = self.last_message_at
        if self.url is not None:
            payload["url"] = self.url
        return payload
