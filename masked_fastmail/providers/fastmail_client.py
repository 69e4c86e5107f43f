from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from ..config import ProviderSettings
from ..core.identity.matching import alias_matches_domain
from ..errors import (
    AliasNotFoundError,
    APIError,
    MalformedEntryError,
    MethodError,
    StateUnchangedError,
    TransportError,
    UpdateNotConfirmedError,
)
from ..models import AliasRecord, AliasState
from .jmap import (
    METHOD_GET,
    METHOD_SET,
    JMAPResponse,
    MethodCall,
    build_request,
    method_result,
    validate_response,
)

logger = logging.getLogger(__name__)

# (url, body, headers, timeout) -> (status, response headers, response body)
Transport = Callable[[str, bytes, Mapping[str, str], float], Tuple[int, Mapping[str, str], bytes]]

CREATE_KEY = "MaskedEmail"
LIST_PROPERTIES = [
    "email",
    "forDomain",
    "description",
    "state",
    "id",
    "createdAt",
    "lastMessageAt",
    "url",
]


def urllib_transport(
    url: str, body: bytes, headers: Mapping[str, str], timeout: float
) -> Tuple[int, Mapping[str, str], bytes]:
    req = urllib.request.Request(url, data=body, headers=dict(headers), method="POST")
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            return resp.status, dict(resp.headers.items()), resp.read()
    except urllib.error.HTTPError as exc:
        return exc.code, dict(exc.headers.items()) if exc.headers else {}, exc.read()
    except (urllib.error.URLError, OSError) as exc:
        raise TransportError(f"unable to reach Fastmail API: {exc}") from exc


def redact_token(token: str) -> str:
    """Show only the last four characters of ``token``."""
    if len(token) <= 4:
        return token
    return "[redacted token]..." + token[-4:]


class FastmailClient:
    def __init__(self, settings: ProviderSettings, transport: Optional[Transport] = None) -> None:
        self.account_id = settings.account_id
        self.token = settings.api_key
        self.api_url = settings.api_url
        self.timeout = settings.timeout_seconds
        self.transport = transport or urllib_transport

    # -- wire ---------------------------------------------------------------

    def send(self, *calls: MethodCall) -> JMAPResponse:
        payload = build_request(*calls)
        body = json.dumps(payload).encode("utf-8")
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.token}",
        }
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Request URL: %s", self.api_url)
            logger.debug(
                "Request headers: Content-Type: application/json, Authorization: Bearer %s",
                redact_token(self.token),
            )
            logger.debug("Request body: %s", body.decode("utf-8"))

        status, response_headers, raw = self.transport(self.api_url, body, headers, self.timeout)
        text = raw.decode("utf-8", errors="replace") if raw else ""

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Response status: %s", status)
            for key, value in response_headers.items():
                logger.debug("Response header %s: %s", key, value)
            logger.debug("Response body: %s", text)

        if status < 200 or status >= 300:
            raise APIError(
                f"HTTP error {status}",
                status_code=status,
                response_body=text,
            )
        if not text.strip():
            raise APIError("received empty response body", status_code=0)
        try:
            decoded = json.loads(text)
        except ValueError as exc:
            raise APIError(
                f"failed to decode JSON response: {exc}",
                response_body=text,
            ) from exc
        return validate_response(decoded)

    def _get(self, properties: List[str]) -> List[AliasRecord]:
        response = self.send(
            MethodCall(METHOD_GET, {"accountId": self.account_id, "properties": properties})
        )
        result = method_result(response, 0)
        items = result.get("list") or []
        if not isinstance(items, list):
            raise MalformedEntryError(
                "MaskedEmail/get returned a non-list 'list' field", index=0, raw=items
            )
        aliases: List[AliasRecord] = []
        for position, item in enumerate(items):
            if not isinstance(item, dict):
                raise MalformedEntryError(
                    f"MaskedEmail/get list item {position} is {type(item).__name__}, expected an object",
                    index=0,
                    raw=item,
                )
            aliases.append(AliasRecord.from_payload(item))
        return aliases

    def _set(
        self,
        create: Optional[Dict[str, Any]] = None,
        update: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        arguments: Dict[str, Any] = {"accountId": self.account_id}
        if create:
            arguments["create"] = create
        if update:
            arguments["update"] = update
        response = self.send(MethodCall(METHOD_SET, arguments))
        return method_result(response, 0)

    # -- operations ---------------------------------------------------------

    def fetch_all_aliases(self) -> List[AliasRecord]:
        return self._get(LIST_PROPERTIES)

    def get_aliases(self, domain: str) -> List[AliasRecord]:
        """Non-deleted aliases stored for ``domain`` (a normalized origin)."""
        return [
            alias
            for alias in self.fetch_all_aliases()
            if AliasState.parse(alias.state) is not AliasState.DELETED
            and alias_matches_domain(alias, domain)
        ]

    def get_alias_by_email(self, email: str) -> AliasRecord:
        wanted = email.strip().lower()
        for alias in self.fetch_all_aliases():
            if alias.email.lower() == wanted:
                return alias
        raise AliasNotFoundError(f"alias not found: {email}")

    def create_alias(self, domain: str, description: Optional[str] = None) -> AliasRecord:
        text = (description or "").strip() or domain
        fields = {
            "forDomain": domain,
            "description": text,
            "state": AliasState.ENABLED.value,
        }
        result = self._set(create={CREATE_KEY: fields})
        not_created = result.get("notCreated") or {}
        if isinstance(not_created, dict) and CREATE_KEY in not_created:
            raise _set_error(METHOD_SET, not_created[CREATE_KEY])
        created_map = result.get("created") or {}
        created = created_map.get(CREATE_KEY) if isinstance(created_map, dict) else None
        if not isinstance(created, dict) or not created.get("email"):
            raise APIError("server did not return the created alias")
        logger.debug("Created alias %s for %s", created.get("email"), domain)
        return AliasRecord.from_payload({**fields, **created})

    def update_alias_status(self, alias: AliasRecord, state: AliasState) -> None:
        logger.debug("Setting '%s' for '%s' to '%s'", alias.email, alias.for_domain, state)
        if AliasState.parse(alias.state) is state:
            raise StateUnchangedError(f"'{alias.email}' is already '{state}'")
        self._update(alias, {"state": state.value})

    def update_alias_description(self, alias: AliasRecord, description: str) -> None:
        self._update(alias, {"description": description})

    def _update(self, alias: AliasRecord, patch: Dict[str, Any]) -> None:
        if not alias.id:
            raise APIError(f"alias {alias.email} has no id and cannot be updated")
        result = self._set(update={alias.id: patch})
        not_updated = result.get("notUpdated") or {}
        if isinstance(not_updated, dict) and alias.id in not_updated:
            raise _set_error(METHOD_SET, not_updated[alias.id])
        updated = result.get("updated") or {}
        if not isinstance(updated, dict) or alias.id not in updated:
            raise UpdateNotConfirmedError("server did not confirm the update")


def _set_error(method: str, payload: Any) -> MethodError:
    if isinstance(payload, dict):
        message = payload.get("description") or payload.get("message")
        return MethodError(
            method,
            error_type=payload.get("type") if isinstance(payload.get("type"), str) else None,
            message=message if isinstance(message, str) else None,
            raw=payload,
        )
    return MethodError(method, raw=payload)
