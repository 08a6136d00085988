"""Default transport and deserializer for the KAMAR command API.

HttpxTransport POSTs form data and returns the raw body. deserialize turns
that body into the array-wrapped shape the decoders expect:

    <LogonResults><Success>YES</Success></LogonResults>
    -> {"LogonResults": {"Success": ["YES"]}}

Elements carrying attributes become {"$": {...attrs}, "_": "text"}, empty
elements become "" and repeated children accumulate in their list.
Both are injectable; the dispatcher only relies on their signatures.
"""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any

import httpx
from lxml import etree
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from src.kamar.errors import DecodeError, TransportError
from src.kamar.logging import get_logger

logger = get_logger(__name__)

SendRequest = Callable[[str, Mapping[str, str]], Awaitable[bytes | str]]
Deserialize = Callable[[bytes | str], Any]

_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)


class HttpxTransport:
    """POSTs commands with httpx, optionally retrying transient failures.

    Retries are owned here, not by the dispatcher; with retries=0 every
    failure surfaces after a single attempt.
    """

    def __init__(
        self,
        user_agent: str,
        *,
        timeout: float = 30.0,
        retries: int = 0,
        retry_wait_seconds: float = 2.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.user_agent = user_agent
        self.retries = retries
        self.retry_wait_seconds = retry_wait_seconds
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def __call__(self, url: str, form: Mapping[str, str]) -> bytes:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.retries + 1),
            wait=wait_fixed(self.retry_wait_seconds),
            retry=retry_if_exception_type(TransportError),
            reraise=True,
        ):
            with attempt:
                return await self._post(url, form)

    async def _post(self, url: str, form: Mapping[str, str]) -> bytes:
        headers = {
            "content-type": "application/x-www-form-urlencoded",
            "user-agent": self.user_agent,
        }
        try:
            response = await self._client.post(url, data=dict(form), headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "transport_bad_status", url=url, status=e.response.status_code
            )
            raise TransportError(f"HTTP {e.response.status_code} from {url}") from e
        except httpx.RequestError as e:
            logger.warning("transport_request_failed", url=url, error=str(e))
            raise TransportError(f"Request to {url} failed: {e}") from e
        return response.content

    async def aclose(self) -> None:
        await self._client.aclose()


def deserialize(body: bytes | str) -> dict[str, Any]:
    """Parse an XML response body into the array-wrapped object shape.

    Raises:
        DecodeError: If the body is not well-formed XML.
    """
    if isinstance(body, str):
        body = body.encode("utf-8")
    if not body.strip():
        raise DecodeError("empty response body")
    try:
        root = etree.fromstring(body, parser=_PARSER)
    except etree.XMLSyntaxError as e:
        raise DecodeError(f"malformed XML: {e}") from e
    return {root.tag: _element_value(root)}


def _element_value(element: etree._Element) -> Any:
    text = element.text or ""
    elements = [node for node in element if isinstance(node.tag, str)]
    attrs = dict(element.attrib)

    if not elements and not attrs:
        return text

    value: dict[str, Any] = {}
    if attrs:
        value["$"] = attrs
    for node in elements:
        value.setdefault(node.tag, []).append(_element_value(node))
    if text.strip():
        value["_"] = text
    return value
