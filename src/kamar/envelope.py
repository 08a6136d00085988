"""Envelope unwrapping: root key lookup and remote error detection."""

from typing import Any

from src.kamar.errors import DecodeError, RemoteError
from src.kamar.models import Envelope, RemoteFault
from src.kamar.schema import text


def unwrap(raw: Any) -> Envelope:
    """Split a deserialized response into its sole root key and body.

    Raises:
        DecodeError: If the response does not have exactly one root element.
    """
    if not isinstance(raw, dict) or len(raw) != 1:
        raise DecodeError("response must have exactly one root element")

    (result_key,) = raw
    body = raw[result_key]
    error = None
    if isinstance(body, dict) and body.get("Error"):
        message = text(body["Error"][0], f"{result_key}.Error")
        code = None
        if body.get("ErrorCode"):
            code = text(body["ErrorCode"][0], f"{result_key}.ErrorCode")
        error = RemoteFault(message=message, code=code)

    return Envelope(result_key=result_key, body=body, error=error)


def check(raw: Any) -> Envelope:
    """Unwrap a response and raise RemoteError if the portal reported one."""
    envelope = unwrap(raw)
    if envelope.error is not None:
        raise RemoteError(envelope.error.message, code=envelope.error.code)
    return envelope
