"""Path and payload templates for each runtime operation."""

import string
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from lexruntime.errors import MissingParameterError

BodyBuilder = Callable[[Mapping[str, Any]], dict[str, Any]]

SESSION_PATH = (
    "/bots/{bot_id}/botAliases/{bot_alias_id}/botLocales/{locale_id}/sessions/{session_id}"
)


def require_non_empty(value: Any, field_name: str) -> str:
    """Normalize and validate non-empty request arguments."""
    if not isinstance(value, str):
        raise MissingParameterError(field_name)
    cleaned = value.strip()
    if not cleaned:
        raise MissingParameterError(field_name)
    return cleaned


def _path_fields(template: str) -> tuple[str, ...]:
    return tuple(name for _, name, _, _ in string.Formatter().parse(template) if name)


@dataclass(frozen=True, slots=True)
class Operation:
    """One remote operation: HTTP method, path template and optional body."""

    name: str
    method: str
    path_template: str
    body_builder: BodyBuilder | None = None
    required_fields: tuple[str, ...] = field(default=())

    def build_path(self, params: Mapping[str, Any]) -> str:
        segments = {
            name: quote(require_non_empty(params.get(name), name), safe="")
            for name in _path_fields(self.path_template)
        }
        return self.path_template.format(**segments)

    def build_payload(self, params: Mapping[str, Any]) -> dict[str, Any]:
        for name in self.required_fields:
            require_non_empty(params.get(name), name)
        if self.body_builder is None:
            return {}
        return self.body_builder(params)

    def prepare(self, params: Mapping[str, Any]) -> tuple[str, dict[str, Any]]:
        """Validate ``params`` and return ``(path, payload)``."""
        return self.build_path(params), self.build_payload(params)


def _compact(fields: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in fields.items() if value}


def _put_session_body(params: Mapping[str, Any]) -> dict[str, Any]:
    return _compact(
        {
            "messages": params.get("messages"),
            "requestAttributes": params.get("request_attributes"),
            "sessionState": params.get("session_state"),
        }
    )


def _recognize_text_body(params: Mapping[str, Any]) -> dict[str, Any]:
    body: dict[str, Any] = {"text": params["text"]}
    body.update(
        _compact(
            {
                "sessionState": params.get("session_state"),
                "requestAttributes": params.get("request_attributes"),
            }
        )
    )
    return body


DELETE_SESSION = Operation("DeleteSession", "DELETE", SESSION_PATH)
GET_SESSION = Operation("GetSession", "GET", SESSION_PATH)
PUT_SESSION = Operation("PutSession", "PUT", SESSION_PATH, _put_session_body)
RECOGNIZE_TEXT = Operation(
    "RecognizeText",
    "POST",
    f"{SESSION_PATH}/text",
    _recognize_text_body,
    required_fields=("text",),
)
