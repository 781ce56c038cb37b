"""
Lex runtime client for the session and text-recognition operations.

Each public method validates its identifiers, resolves per-call settings, and
hands the request to the shared dispatcher. Responses are returned unchanged.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from functools import partial
from typing import Any

import boto3
from anyio import to_thread
from botocore.credentials import Credentials, ReadOnlyCredentials

from lexruntime.dispatcher import ApiResponse, Transport, dispatch
from lexruntime.http_client import SignedTransport
from lexruntime.operations import (
    DELETE_SESSION,
    GET_SESSION,
    PUT_SESSION,
    RECOGNIZE_TEXT,
    Operation,
)
from lexruntime.settings import RequestSettings, Settings, resolve_request_settings

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LexRuntimeClient:
    """Typed wrapper around the signed runtime transport."""

    _transport: Transport
    _settings: Settings
    _session: boto3.Session | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "LexRuntimeClient":
        """Factory that builds the client from Settings."""
        session = boto3.Session(profile_name=settings.aws_profile)
        return cls(SignedTransport.from_settings(settings), settings, session)

    async def aclose(self) -> None:
        """Close the underlying HTTP resources."""
        aclose = getattr(self._transport, "aclose", None)
        if aclose is not None:
            await aclose()

    async def delete_session(
        self,
        *,
        bot_id: str,
        bot_alias_id: str,
        locale_id: str,
        session_id: str,
        region: str | None = None,
        credentials: Credentials | ReadOnlyCredentials | None = None,
    ) -> ApiResponse:
        """Remove session state for the given bot, alias, locale and session."""
        return await self._invoke(
            DELETE_SESSION,
            {
                "bot_id": bot_id,
                "bot_alias_id": bot_alias_id,
                "locale_id": locale_id,
                "session_id": session_id,
            },
            region=region,
            credentials=credentials,
        )

    async def get_session(
        self,
        *,
        bot_id: str,
        bot_alias_id: str,
        locale_id: str,
        session_id: str,
        region: str | None = None,
        credentials: Credentials | ReadOnlyCredentials | None = None,
    ) -> ApiResponse:
        """Fetch the current session state."""
        return await self._invoke(
            GET_SESSION,
            {
                "bot_id": bot_id,
                "bot_alias_id": bot_alias_id,
                "locale_id": locale_id,
                "session_id": session_id,
            },
            region=region,
            credentials=credentials,
        )

    async def put_session(
        self,
        *,
        bot_id: str,
        bot_alias_id: str,
        locale_id: str,
        session_id: str,
        messages: Sequence[Mapping[str, Any]] | None = None,
        request_attributes: Mapping[str, str] | None = None,
        session_state: Mapping[str, Any] | None = None,
        region: str | None = None,
        credentials: Credentials | ReadOnlyCredentials | None = None,
    ) -> ApiResponse:
        """Create or replace a session; omitted fields are left out of the body."""
        return await self._invoke(
            PUT_SESSION,
            {
                "bot_id": bot_id,
                "bot_alias_id": bot_alias_id,
                "locale_id": locale_id,
                "session_id": session_id,
                "messages": list(messages) if messages else None,
                "request_attributes": request_attributes,
                "session_state": session_state,
            },
            region=region,
            credentials=credentials,
        )

    async def recognize_text(
        self,
        *,
        bot_id: str,
        bot_alias_id: str,
        locale_id: str,
        session_id: str,
        text: str,
        session_state: Mapping[str, Any] | None = None,
        request_attributes: Mapping[str, str] | None = None,
        region: str | None = None,
        credentials: Credentials | ReadOnlyCredentials | None = None,
    ) -> ApiResponse:
        """Submit user text for interpretation."""
        return await self._invoke(
            RECOGNIZE_TEXT,
            {
                "bot_id": bot_id,
                "bot_alias_id": bot_alias_id,
                "locale_id": locale_id,
                "session_id": session_id,
                "text": text,
                "session_state": session_state,
                "request_attributes": request_attributes,
            },
            region=region,
            credentials=credentials,
        )

    def _resolve_settings(
        self,
        *,
        region: str | None,
        credentials: Credentials | ReadOnlyCredentials | None,
    ) -> RequestSettings:
        # Runs in a worker thread; the credential chain may read files or call IMDS.
        if self._session is None:
            self._session = boto3.Session(profile_name=self._settings.aws_profile)
        return resolve_request_settings(
            self._settings,
            region=region,
            credentials=credentials,
            session=self._session,
        )

    async def _invoke(
        self,
        operation: Operation,
        params: Mapping[str, Any],
        *,
        region: str | None,
        credentials: Credentials | ReadOnlyCredentials | None,
    ) -> ApiResponse:
        path, payload = operation.prepare(params)
        request_settings = await to_thread.run_sync(
            partial(self._resolve_settings, region=region, credentials=credentials)
        )
        logger.debug(
            "Invoking Lex runtime operation",
            extra={"operation": operation.name, "session_id": params.get("session_id")},
        )
        return await dispatch(
            self._transport,
            request_settings,
            operation.method,
            path,
            payload=payload,
        )
