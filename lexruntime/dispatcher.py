"""
Shared request dispatcher for every Lex runtime operation.

``dispatch`` is the single path from an operation method to the wire: it checks
the resolved settings, resolves the endpoint host, encodes the optional JSON
payload, hands everything the signer needs to the transport, and normalizes the
response into an :class:`ApiResponse`. It never retries and never interprets
status codes; transport and service failures propagate unchanged.
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from botocore.credentials import ReadOnlyCredentials

from lexruntime.errors import MissingCredentialsError, MissingRegionError, ResponseDecodeError
from lexruntime.hosts import resolve_host
from lexruntime.http_client import TransportResponse
from lexruntime.settings import RequestSettings

logger = logging.getLogger(__name__)

SERVICE_NAME = "lex"
JSON_CONTENT_TYPE = "application/json"


class Transport(Protocol):
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
    ) -> TransportResponse: ...


@dataclass(frozen=True, slots=True)
class ApiResponse:
    """Raw response body plus its decoded JSON view."""

    raw_data: str
    data: Any
    status_code: int
    headers: Mapping[str, str]


def encode_payload(
    payload: Mapping[str, Any] | None,
    headers: Mapping[str, str] | None = None,
) -> tuple[str, dict[str, str]]:
    """Return the wire body and the headers to send with it."""
    request_headers = dict(headers or {})
    if not payload:
        return "", request_headers
    request_headers["Content-Type"] = JSON_CONTENT_TYPE
    return json.dumps(payload), request_headers


def decode_response(response: TransportResponse) -> ApiResponse:
    """Parse the raw body; an empty body decodes to an empty object."""
    raw_data = response.raw_data
    if not raw_data:
        data: Any = {}
    else:
        try:
            data = json.loads(raw_data)
        except json.JSONDecodeError as exc:
            logger.error(
                "Lex runtime returned invalid JSON",
                extra={"status_code": response.status_code},
            )
            raise ResponseDecodeError(raw_data, response.status_code) from exc
    return ApiResponse(
        raw_data=raw_data,
        data=data,
        status_code=response.status_code,
        headers=response.headers,
    )


async def dispatch(
    transport: Transport,
    settings: RequestSettings,
    method: str,
    path: str,
    *,
    query: Mapping[str, str] | None = None,
    headers: Mapping[str, str] | None = None,
    payload: Mapping[str, Any] | None = None,
) -> ApiResponse:
    """Build, sign, send and normalize a single runtime request."""
    if not settings.region:
        raise MissingRegionError("Request settings have no region.")
    if settings.credentials is None:
        raise MissingCredentialsError("Request settings have no credentials.")

    host = resolve_host(settings.region)
    body, request_headers = encode_payload(payload, headers)

    logger.debug(
        "Dispatching Lex runtime request",
        extra={"method": method, "path": path, "host": host, "has_body": bool(body)},
    )
    response = await transport.send(
        service_name=SERVICE_NAME,
        host=host,
        region=settings.region,
        method=method,
        path=path,
        query=dict(query or {}),
        headers=request_headers,
        body=body,
        credentials=settings.credentials,
    )
    return decode_response(response)
