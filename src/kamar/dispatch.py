"""Command building and dispatch.

The dispatcher is the only asynchronous boundary: it sends one command,
deserializes the reply, checks the envelope for a portal-reported error and
hands the untouched root object back for a decoder to interpret.
"""

from collections.abc import Mapping
from typing import Any

from src.kamar.envelope import check
from src.kamar.errors import DecodeError, RemoteError, TransportError
from src.kamar.logging import get_logger, redact
from src.kamar.models import Command
from src.kamar.session import Session
from src.kamar.transport import Deserialize, SendRequest, deserialize

logger = get_logger(__name__)

# Key accepted for the unauthenticated Logon and GetCalendar commands
BOOTSTRAP_KEY = "vtku"


def build_form(command: Command, key: str) -> dict[str, str]:
    """Serialize a command into the form fields the portal expects."""
    form = {"Command": command.name, "Key": key}
    form.update({name: str(value) for name, value in command.fields.items()})
    return form


def make_command(name: str, fields: Mapping[str, Any] | None = None) -> Command:
    return Command(name=name, fields={k: str(v) for k, v in (fields or {}).items()})


class CommandDispatcher:
    """Sends commands for one session through an injected transport."""

    def __init__(
        self,
        session: Session,
        send_request: SendRequest,
        deserializer: Deserialize = deserialize,
    ) -> None:
        self.session = session
        self.send_request = send_request
        self.deserializer = deserializer

    async def dispatch(self, command: Command, key: str = BOOTSTRAP_KEY) -> dict:
        """Send a command and return the deserialized response root.

        Raises:
            TransportError: If the request fails. Not retried here.
            DecodeError: If the body cannot be deserialized.
            RemoteError: If the portal reported Error/ErrorCode.
        """
        form = build_form(command, key)
        log = logger.bind(
            command=command.name,
            portal=self.session.portal,
            form=redact(form),
        )
        log.debug("kamar_command_sent")

        try:
            body = await self.send_request(self.session.api_url, form)
        except TransportError as e:
            log.warning("kamar_command_failed", stage="transport", error=str(e))
            raise

        try:
            raw = self.deserializer(body)
        except DecodeError as e:
            log.warning("kamar_command_failed", stage="deserialize", error=str(e))
            raise

        try:
            envelope = check(raw)
        except RemoteError as e:
            log.info(
                "kamar_command_failed",
                stage="remote",
                error=e.message,
                code=e.code,
            )
            raise

        log.debug("kamar_command_completed", result_key=envelope.result_key)
        return raw
