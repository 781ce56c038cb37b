"""Signed HTTP transport for the Lex runtime endpoints."""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import quote, urlencode

import httpx
from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import ReadOnlyCredentials

from lexruntime.errors import ServiceError, TransportError
from lexruntime.settings import Settings

logger = logging.getLogger(__name__)


def create_lex_client(settings: Settings) -> httpx.AsyncClient:
    """Build an AsyncClient configured for the runtime endpoints."""
    return httpx.AsyncClient(timeout=settings.api_timeout)


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Raw response as received from the wire."""

    raw_data: str
    status_code: int
    headers: Mapping[str, str]


def _error_details(response: httpx.Response) -> tuple[str | None, str | None]:
    code = response.headers.get("x-amzn-ErrorType") or None
    message = None
    try:
        body = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        body = None
    if isinstance(body, dict):
        code = code or body.get("__type") or body.get("code")
        message = body.get("message") or body.get("Message")
        if not isinstance(message, str):
            message = None
    if not isinstance(code, str):
        code = None
    if code:
        # "ResourceNotFoundException:http://internal.amazon.com/..." style values.
        code = code.split(":", 1)[0].split("#")[-1]
    return code, message


@dataclass(slots=True)
class SignedTransport:
    """SigV4-signs requests with botocore and sends them through httpx."""

    _client: httpx.AsyncClient

    @classmethod
    def from_settings(cls, settings: Settings) -> "SignedTransport":
        return cls(create_lex_client(settings))

    async def aclose(self) -> None:
        await self._client.aclose()

    async def send(
        self,
        *,
        service_name: str,
        host: str,
        region: str,
        method: str,
        path: str,
        query: Mapping[str, str],
        headers: Mapping[str, str],
        body: str,
        credentials: ReadOnlyCredentials,
    ) -> TransportResponse:
        """Sign and send one request, returning the raw response."""
        url = f"https://{host}{path}"
        if query:
            # Signed and sent as the same string; SigV4 wants %20, not "+".
            query_string = urlencode(sorted(query.items()), quote_via=quote, safe="-_.~")
            url = f"{url}?{query_string}"
        aws_request = AWSRequest(
            method=method,
            url=url,
            headers=dict(headers),
            data=body,
        )
        SigV4Auth(credentials, service_name, region).add_auth(aws_request)

        def _transport_error(message: str, *, exc: Exception) -> TransportError:
            logger.error(
                message,
                extra={"method": method, "path": path, "host": host},
                exc_info=exc,
            )
            return TransportError(message)

        try:
            response = await self._client.request(
                method,
                url,
                headers=dict(aws_request.headers.items()),
                content=body.encode("utf-8"),
            )
        except httpx.TimeoutException as exc:
            raise _transport_error(
                f"Lex runtime request timed out ({method} {path}).",
                exc=exc,
            ) from exc
        except httpx.RequestError as exc:
            raise _transport_error(
                f"Lex runtime request failed ({method} {path}): {exc!s}",
                exc=exc,
            ) from exc

        if response.is_error:
            snippet = response.text.strip()
            if len(snippet) > 512:
                snippet = f"{snippet[:512]}..."
            code, message = _error_details(response)
            logger.warning(
                "Lex runtime responded with error",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": response.status_code,
                    "error_code": code,
                    "content": snippet,
                },
            )
            raise ServiceError(
                response.status_code,
                code=code,
                message=message,
                raw_body=response.text,
            )

        return TransportResponse(
            raw_data=response.text,
            status_code=response.status_code,
            headers=dict(response.headers.items()),
        )
