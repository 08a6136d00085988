"""Error hierarchy for KAMAR command dispatch and response decoding.

Mirrors the transient/permanent split so a transport can wrap its calls in
tenacity retry decorators that only retry transient failures.

Example usage with tenacity:
    @retry(retry=retry_if_exception_type(TransientError), stop=stop_after_attempt(3))
    async def send(url: str, form: dict[str, str]) -> bytes:
        ...
"""


class KamarError(Exception):
    """Base exception for all KAMAR client errors."""

    pass


class TransientError(KamarError):
    """Temporary failure that may succeed on retry."""

    pass


class TransportError(TransientError):
    """The HTTP request failed (connection error, timeout, bad status).

    The dispatcher surfaces this as-is and never retries it itself.
    """

    pass


class PermanentError(KamarError):
    """Failure that won't succeed on retry."""

    pass


class DecodeError(PermanentError):
    """The response did not have the expected shape.

    Attributes:
        path: Dotted path of the offending field, when known.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        if path:
            message = f"{message} (at {path})"
        super().__init__(message)


class RemoteError(PermanentError):
    """The portal reported an error in the response envelope.

    Attributes:
        message: Error text returned by the portal.
        code: Error code returned by the portal, if any.
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code
        super().__init__(f"{message} [code={code}]" if code is not None else message)


class AuthenticationError(RemoteError):
    """Logon was refused by the portal."""

    pass


class StateError(PermanentError):
    """A call was made before the state it depends on was established.

    Attributes:
        week_index: Week index the caller should assume, when the error
            carries a recoverable default.
    """

    def __init__(self, message: str, week_index: int | None = None) -> None:
        self.week_index = week_index
        super().__init__(message)


class UnsupportedOperation(PermanentError):
    """The command has been withdrawn by the portal and is never sent."""

    pass
