"""Exception hierarchy shared by the Lex runtime client layers."""

from typing import Any


class LexRuntimeError(RuntimeError):
    """Base class for failures raised by this package."""


class MissingParameterError(LexRuntimeError, ValueError):
    """A required identifier was empty or absent."""

    def __init__(self, parameter: str) -> None:
        super().__init__(f"{parameter} must be a non-empty string.")
        self.parameter = parameter


class InvalidRegionError(LexRuntimeError, ValueError):
    """The region cannot be turned into a valid endpoint host."""

    def __init__(self, region: Any) -> None:
        super().__init__(f"Invalid region for endpoint host: {region!r}")
        self.region = region


class MissingCredentialsError(LexRuntimeError):
    """No credentials could be resolved for the request."""


class MissingRegionError(LexRuntimeError):
    """No region could be resolved for the request."""


class TransportError(LexRuntimeError):
    """Connection-level failure; no HTTP status is available."""


class ServiceError(LexRuntimeError):
    """The runtime answered with a non-success HTTP status."""

    def __init__(
        self,
        status_code: int,
        *,
        code: str | None = None,
        message: str | None = None,
        raw_body: str = "",
    ) -> None:
        detail = message or raw_body.strip() or "no body provided."
        label = f"{code} " if code else ""
        super().__init__(f"Lex runtime error {label}({status_code}): {detail}")
        self.status_code = status_code
        self.code = code
        self.message = message
        self.raw_body = raw_body


class ResponseDecodeError(LexRuntimeError):
    """A non-empty response body was not valid JSON."""

    def __init__(self, raw_data: str, status_code: int) -> None:
        super().__init__(
            f"Lex runtime returned invalid JSON (status {status_code}): {raw_data[:512]}"
        )
        self.raw_data = raw_data
        self.status_code = status_code
