"""Remote service access: JMAP envelopes and the Fastmail client."""

from __future__ import annotations

from .fastmail_client import FastmailClient, redact_token, urllib_transport
from .jmap import (
    MethodCall,
    JMAPResponse,
    build_request,
    expect_method_response,
    validate_response,
)

__all__ = [
    "FastmailClient",
    "JMAPResponse",
    "MethodCall",
    "build_request",
    "expect_method_response",
    "redact_token",
    "urllib_transport",
    "validate_response",
]
