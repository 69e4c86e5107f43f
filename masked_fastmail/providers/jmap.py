"""
JMAP request envelopes and response validation.

Fastmail answers every batch with the same envelope shape whether the
individual calls succeeded or not. A failed call shows up as a method
response named ``<Method>/error`` and request-level failures as a top-level
``methodErrors`` list, so every response goes through ``validate_response``
before any field is read, and positional access goes through
``expect_method_response``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..errors import (
    EmptyResponseError,
    IndexOutOfRangeError,
    MalformedEntryError,
    MethodError,
    TooFewElementsError,
    TopLevelProtocolError,
)

CORE_CAPABILITY = "urn:ietf:params:jmap:core"
MASKED_EMAIL_CAPABILITY = "https://www.fastmail.com/dev/maskedemail"
USING = (CORE_CAPABILITY, MASKED_EMAIL_CAPABILITY)

METHOD_GET = "MaskedEmail/get"
METHOD_SET = "MaskedEmail/set"
ERROR_SUFFIX = "/error"


@dataclass(frozen=True, slots=True)
class MethodCall:
    name: str
    arguments: Dict[str, Any]
    call_id: Optional[str] = None


@dataclass(slots=True)
class JMAPResponse:
    method_responses: List[List[Any]]
    method_errors: List[Any] = field(default_factory=list)
    session_state: Optional[str] = None


def build_request(*calls: MethodCall) -> Dict[str, Any]:
    """
    Assemble the request body for a batch of method calls.

    Each call becomes ``[name, arguments, call_id]``; calls without an id get
    ``c<position>``. Arguments that cannot be encoded as JSON raise TypeError.
    """
    method_calls: List[List[Any]] = []
    for index, call in enumerate(calls):
        try:
            arguments = json.loads(json.dumps(call.arguments))
        except (TypeError, ValueError) as exc:
            raise TypeError(f"failed to marshal arguments for {call.name}: {exc}") from exc
        call_id = call.call_id if call.call_id is not None else f"c{index}"
        method_calls.append([call.name, arguments, call_id])
    return {"using": list(USING), "methodCalls": method_calls}


def _method_error(name: str, payload: Any) -> MethodError:
    if isinstance(payload, dict) and isinstance(payload.get("type"), str):
        message = payload.get("message") or payload.get("description")
        return MethodError(
            name,
            error_type=payload["type"],
            message=message if isinstance(message, str) else None,
            raw=payload,
        )
    try:
        raw = json.dumps(payload)
    except (TypeError, ValueError):
        raw = repr(payload)
    return MethodError(name, raw=raw)


def validate_response(payload: Any) -> JMAPResponse:
    """
    Check a decoded response body and wrap it.

    Raises:
        MalformedEntryError: the body or one of its entries has the wrong shape
        TopLevelProtocolError: the server reported request-level errors
        EmptyResponseError: no method responses at all
        MethodError: a method response is an ``/error`` response
    """
    if not isinstance(payload, dict):
        raise MalformedEntryError(
            f"invalid JMAP response: expected an object, got {type(payload).__name__}",
            index=-1,
            raw=payload,
        )
    responses = payload.get("methodResponses") or []
    if not isinstance(responses, list):
        raise MalformedEntryError("invalid JMAP response: methodResponses is not a list", index=-1, raw=responses)
    errors = payload.get("methodErrors") or []
    if not isinstance(errors, list):
        errors = [errors]

    if errors:
        raise TopLevelProtocolError(errors)
    if not responses:
        raise EmptyResponseError("empty MethodResponses array in JMAP response")

    for index, entry in enumerate(responses):
        if not isinstance(entry, list) or len(entry) < 2:
            found = len(entry) if isinstance(entry, list) else 0
            raise MalformedEntryError(
                f"invalid method response structure at index {index}: "
                f"expected at least 2 elements, got {found}",
                index=index,
                raw=entry,
            )
        name = entry[0]
        if not isinstance(name, str):
            raise MalformedEntryError(
                f"invalid method name at index {index}: {name!r}", index=index, raw=entry
            )
        if name.endswith(ERROR_SUFFIX):
            raise _method_error(name, entry[1])

    session_state = payload.get("sessionState")
    return JMAPResponse(
        method_responses=responses,
        method_errors=errors,
        session_state=session_state if isinstance(session_state, str) else None,
    )


def expect_method_response(response: JMAPResponse, index: int, min_elements: int) -> List[Any]:
    """Return entry ``index`` after checking it exists and is long enough."""
    available = len(response.method_responses)
    if available == 0:
        raise EmptyResponseError("invalid response structure: MethodResponses is empty")
    if index < 0 or index >= available:
        raise IndexOutOfRangeError(index, available)
    entry = response.method_responses[index]
    found = len(entry) if isinstance(entry, list) else 0
    if found < min_elements:
        raise TooFewElementsError(index, found, min_elements)
    return entry


def method_result(response: JMAPResponse, index: int = 0) -> Dict[str, Any]:
    """Arguments object of method response ``index``."""
    entry = expect_method_response(response, index, 2)
    result = entry[1]
    if not isinstance(result, dict):
        raise MalformedEntryError(
            f"method response at index {index} carries {type(result).__name__}, expected an object",
            index=index,
            raw=result,
        )
    return result
