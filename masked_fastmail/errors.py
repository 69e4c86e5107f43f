from __future__ import annotations

from typing import Any, Optional


class MaskedFastmailError(Exception):
    """Base class for every error raised by masked_fastmail."""


class ConfigError(MaskedFastmailError):
    pass


# Input errors: caller-correctable, never retried.


class InputError(MaskedFastmailError, ValueError):
    pass


class EmptyInputError(InputError):
    pass


class ParseFailureError(InputError):
    pass


class MissingHostError(InputError):
    pass


class AmbiguousInputError(InputError):
    pass


class NotAnEmailError(InputError):
    pass


# Protocol errors: the remote service broke the JMAP contract.


class ProtocolError(MaskedFastmailError):
    pass


class EmptyResponseError(ProtocolError):
    pass


class MalformedEntryError(ProtocolError):
    def __init__(self, message: str, index: int, raw: Any = None) -> None:
        super().__init__(message)
        self.index = index
        self.raw = raw


class IndexOutOfRangeError(ProtocolError):
    def __init__(self, index: int, available: int) -> None:
        super().__init__(
            f"invalid response structure: method response index {index} out of range "
            f"(have {available} responses)"
        )
        self.index = index
        self.available = available


class TooFewElementsError(ProtocolError):
    def __init__(self, index: int, found: int, expected: int) -> None:
        super().__init__(
            f"invalid response structure: method response at index {index} has {found} "
            f"elements, expected at least {expected}"
        )
        self.index = index
        self.found = found
        self.expected = expected


class MethodError(ProtocolError):
    """A method response whose name ends in ``/error`` (or a not-created/not-updated entry)."""

    def __init__(
        self,
        method_name: str,
        error_type: Optional[str] = None,
        message: Optional[str] = None,
        raw: Any = None,
    ) -> None:
        self.method_name = method_name
        self.error_type = error_type
        self.message = message or ""
        self.raw = raw
        if error_type:
            text = f"JMAP error: {error_type}"
            if self.message:
                text = f"{text} - {self.message}"
        elif raw is not None:
            text = f"JMAP error in method '{method_name}': {raw}"
        else:
            text = f"JMAP error in method '{method_name}'"
        super().__init__(text)


class TopLevelProtocolError(ProtocolError):
    def __init__(self, errors: list[Any]) -> None:
        super().__init__(f"JMAP method errors in response: {errors}")
        self.errors = errors


class UpdateNotConfirmedError(ProtocolError):
    pass


# Remote service / transport failures.


class APIError(MaskedFastmailError):
    def __init__(
        self,
        message: str,
        *,
        status_code: int = 0,
        response_body: str = "",
        type: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_body = response_body
        self.type = type


class TransportError(MaskedFastmailError):
    pass


class AliasNotFoundError(MaskedFastmailError, LookupError):
    pass


class StateUnchangedError(MaskedFastmailError):
    pass


class ClipboardError(MaskedFastmailError):
    pass
