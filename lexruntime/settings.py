"""Environment-driven configuration and per-call request settings."""

import logging
import os
from dataclasses import dataclass

import boto3
from botocore.credentials import Credentials, ReadOnlyCredentials
from dotenv import load_dotenv

from lexruntime.errors import MissingCredentialsError, MissingRegionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Settings:
    """Container for runtime configuration."""

    aws_region: str | None = None
    aws_profile: str | None = None
    api_timeout: float = 30.0
    mcp_sse_port: int = 8000

    @classmethod
    def load(cls) -> "Settings":
        """
        Load configuration from environment variables.

        Python-dotenv is used so developers can rely on a local .env file without
        exporting variables globally. Credentials are left to the boto3 chain.
        """
        load_dotenv()

        aws_region = (
            os.getenv("AWS_REGION", "").strip()
            or os.getenv("AWS_DEFAULT_REGION", "").strip()
            or None
        )
        aws_profile = os.getenv("AWS_PROFILE", "").strip() or None

        api_timeout_raw = os.getenv("LEX_API_TIMEOUT", "").strip() or "30"
        try:
            api_timeout = float(api_timeout_raw)
        except ValueError as exc:
            raise ValueError("LEX_API_TIMEOUT must be a numeric value.") from exc
        if api_timeout <= 0:
            raise ValueError("LEX_API_TIMEOUT must be greater than zero.")

        mcp_sse_port_raw = os.getenv("MCP_SSE_PORT", "").strip() or "8000"
        try:
            mcp_sse_port = int(mcp_sse_port_raw)
        except ValueError as exc:
            raise ValueError("MCP_SSE_PORT must be an integer.") from exc
        if mcp_sse_port <= 0:
            raise ValueError("MCP_SSE_PORT must be greater than zero.")

        return cls(
            aws_region=aws_region,
            aws_profile=aws_profile,
            api_timeout=api_timeout,
            mcp_sse_port=mcp_sse_port,
        )


@dataclass(frozen=True, slots=True)
class RequestSettings:
    """Region and credentials for a single call."""

    region: str | None
    credentials: ReadOnlyCredentials | None


def _freeze(credentials: Credentials | ReadOnlyCredentials) -> ReadOnlyCredentials:
    if isinstance(credentials, ReadOnlyCredentials):
        return credentials
    # Refreshable credentials may rotate mid-call unless frozen here.
    return credentials.get_frozen_credentials()


def resolve_request_settings(
    settings: Settings,
    *,
    region: str | None = None,
    credentials: Credentials | ReadOnlyCredentials | None = None,
    session: boto3.Session | None = None,
) -> RequestSettings:
    """
    Resolve the effective region and credentials for one call.

    Explicit overrides win, then ``settings``, then the boto3 session (built from
    ``settings.aws_profile`` when not supplied). The session is only consulted
    for whatever the overrides leave unset.
    """
    resolved_region = (region or "").strip() or settings.aws_region
    resolved_credentials = credentials

    if resolved_region is None or resolved_credentials is None:
        if session is None:
            session = boto3.Session(profile_name=settings.aws_profile)
        if resolved_region is None:
            resolved_region = session.region_name
        if resolved_credentials is None:
            resolved_credentials = session.get_credentials()

    if not resolved_region:
        raise MissingRegionError(
            "No region configured; pass region= or set AWS_REGION."
        )
    if resolved_credentials is None:
        raise MissingCredentialsError(
            "No AWS credentials found in overrides or the default credential chain."
        )

    frozen = _freeze(resolved_credentials)
    if not frozen.access_key or not frozen.secret_key:
        raise MissingCredentialsError("Resolved AWS credentials are incomplete.")

    logger.debug("Resolved request settings", extra={"region": resolved_region})
    return RequestSettings(region=resolved_region, credentials=frozen)
