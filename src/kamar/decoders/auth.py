"""Logon response decoding."""

from src.kamar.errors import AuthenticationError, DecodeError
from src.kamar.models import Credentials
from src.kamar.schema import expect_root, field, has, optional_field


def decode_logon(raw: dict, username: str) -> Credentials:
    """Turn a LogonResults response into credentials for later commands.

    Raises:
        AuthenticationError: If the portal did not answer Success=YES.
    """
    body = expect_root(raw, "LogonResults")
    path = "LogonResults"

    if optional_field(body, "Success", path) != "YES":
        message = field(body, "Error", path) if has(body, "Error") else "logon refused"
        raise AuthenticationError(message)

    level = field(body, "LogonLevel", path)
    try:
        auth_level = int(level)
    except ValueError as e:
        raise DecodeError(f"logon level {level!r} is not a number", path=f"{path}.LogonLevel") from e

    return Credentials(
        username=username,
        key=field(body, "Key", path),
        auth_level=auth_level,
    )
