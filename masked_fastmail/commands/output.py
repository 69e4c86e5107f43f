from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..models import AliasRecord

NO_DESCRIPTION = "(no description)"
UNKNOWN_DOMAIN = "(unknown domain)"


@dataclass(frozen=True, slots=True)
class AliasRow:
    email: str
    state: str
    url: str
    description: str

    @classmethod
    def from_alias(cls, alias: AliasRecord) -> "AliasRow":
        return cls(
            email=alias.email,
            state=alias.state_label,
            url=alias.for_domain.strip() or UNKNOWN_DOMAIN,
            description=alias.description if alias.description.strip() else NO_DESCRIPTION,
        )

    def render(self, email_width: int, include_url: bool) -> list[str]:
        lines = [f"- {self.email:<{email_width}} (state: {self.state})"]
        if include_url:
            lines.append(f"  Domain:      {self.url}")
        lines.append(f"  Description: {self.description}")
        return lines


def summary(alias: AliasRecord) -> str:
    return f"{alias.email} (state: {alias.state_label})"


def render_rows(rows: list[AliasRow], email_width: int, include_url: bool) -> list[str]:
    lines: list[str] = []
    for idx, row in enumerate(rows):
        lines.extend(row.render(email_width, include_url))
        if idx < len(rows) - 1:
            lines.append("")
    return lines


def email_width(rows: Iterable[AliasRow]) -> int:
    width = 0
    for row in rows:
        width = max(width, len(row.email))
    return width
