from __future__ import annotations

from ..errors import APIError, MaskedFastmailError, MethodError


def format_api_error(action: str, exc: Exception) -> MaskedFastmailError:
    """Wrap ``exc`` with enough context to be understood without --debug."""
    if isinstance(exc, APIError):
        if exc.status_code > 0:
            body = exc.response_body.strip() or exc.message
            text = f"{action}: Fastmail API returned HTTP {exc.status_code}: {body}"
        elif exc.type:
            text = f"{action}: Fastmail API error ({exc.type}): {exc.message}"
        else:
            text = f"{action}: Fastmail API error: {exc.message}"
    elif isinstance(exc, MethodError) and exc.error_type:
        text = f"{action}: Fastmail API error ({exc.error_type}): {exc.message or exc.method_name}"
    else:
        text = f"{action}: {exc}"
    wrapped = MaskedFastmailError(text)
    wrapped.__cause__ = exc
    return wrapped
