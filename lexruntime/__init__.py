"""
Typed async client for the Lex V2 runtime session and text APIs.

Operation methods live on :class:`LexRuntimeClient`; the shared signing and
dispatch path lives in :mod:`lexruntime.dispatcher`.
"""

from lexruntime.client import LexRuntimeClient
from lexruntime.dispatcher import ApiResponse, dispatch
from lexruntime.errors import (
    InvalidRegionError,
    LexRuntimeError,
    MissingCredentialsError,
    MissingParameterError,
    MissingRegionError,
    ResponseDecodeError,
    ServiceError,
    TransportError,
)
from lexruntime.hosts import resolve_host
from lexruntime.settings import RequestSettings, Settings, resolve_request_settings

__all__ = [
    "ApiResponse",
    "InvalidRegionError",
    "LexRuntimeClient",
    "LexRuntimeError",
    "MissingCredentialsError",
    "MissingParameterError",
    "MissingRegionError",
    "RequestSettings",
    "ResponseDecodeError",
    "ServiceError",
    "Settings",
    "TransportError",
    "dispatch",
    "resolve_host",
    "resolve_request_settings",
]
