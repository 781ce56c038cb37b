"""MCP tool registrations for the Lex runtime session server."""

import logging
from dataclasses import dataclass
from typing import Annotated, Any, Awaitable, Callable

from fastmcp import Context, FastMCP
from pydantic import Field

from lexruntime.client import LexRuntimeClient
from lexruntime.dispatcher import ApiResponse
from lexruntime.errors import LexRuntimeError

logger = logging.getLogger(__name__)

BotId = Annotated[str, Field(description="Identifier of the Lex V2 bot.")]
BotAliasId = Annotated[str, Field(description="Alias of the bot deployment to target (e.g., 'TSTALIASID').")]
LocaleId = Annotated[str, Field(description="Locale of the bot, such as 'en_US'.")]
SessionId = Annotated[str, Field(description="Caller-chosen identifier of the conversation session.")]


@dataclass
class LexToolDependencies:
    """Runtime dependencies required by the MCP tools."""

    lex_client: LexRuntimeClient | None = None

    def attach_client(self, client: LexRuntimeClient) -> None:
        self.lex_client = client

    def detach_client(self) -> None:
        self.lex_client = None

    def require_client(self) -> LexRuntimeClient:
        if self.lex_client is None:
            raise RuntimeError("Lex runtime client is not initialized.")
        return self.lex_client


def register_lex_tools(
    mcp: FastMCP,
    dependencies: LexToolDependencies,
) -> None:
    """Register MCP tools that proxy to the Lex runtime API."""

    def _log_tool_event(tool_name: str, event: str, **fields: object) -> None:
        logger.info(
            "lex_tool_event",
            extra={"tool": tool_name, "event": event, **fields},
        )

    async def _with_error_handling(
        tool_name: str,
        action: Callable[[], Awaitable[ApiResponse]],
    ) -> dict[str, Any]:
        try:
            response = await action()
        except LexRuntimeError as exc:
            logger.warning("%s failed due to API error", tool_name, exc_info=True)
            _log_tool_event(tool_name, "api_error", error=str(exc))
            return {"error": str(exc)}
        except Exception as exc:  # noqa: BLE001
            logger.exception("%s failed unexpectedly", tool_name)
            _log_tool_event(tool_name, "unexpected_error", error=str(exc))
            return {"error": f"Unexpected error: {exc}"}
        _log_tool_event(tool_name, "success", status_code=response.status_code)
        data = response.data
        return data if isinstance(data, dict) else {"result": data}

    @mcp.tool(
        name="get_lex_session",
        description="Returns the current state of a Lex conversation session, including active intent, slots and recent messages.",
    )
    async def get_lex_session(
        bot_id: BotId,
        bot_alias_id: BotAliasId,
        locale_id: LocaleId,
        session_id: SessionId,
    ) -> dict[str, Any]:
        """Fetch session state from the runtime."""
        client = dependencies.require_client()
        return await _with_error_handling(
            "get_lex_session",
            lambda: client.get_session(
                bot_id=bot_id,
                bot_alias_id=bot_alias_id,
                locale_id=locale_id,
                session_id=session_id,
            ),
        )

    @mcp.tool(
        name="put_lex_session",
        description="Creates or replaces a Lex conversation session. Optional messages, request attributes and session state are passed through unchanged.",
    )
    async def put_lex_session(
        bot_id: BotId,
        bot_alias_id: BotAliasId,
        locale_id: LocaleId,
        session_id: SessionId,
        session_state: Annotated[dict[str, Any] | None, Field(description="Session state object, e.g. {'dialogAction': {'type': 'ElicitIntent'}}.")] = None,
        request_attributes: Annotated[dict[str, str] | None, Field(description="Request-specific attributes for the bot.")] = None,
        messages: Annotated[list[dict[str, Any]] | None, Field(description="Messages the bot should return to the user.")] = None,
    ) -> dict[str, Any]:
        """Write session state to the runtime."""
        client = dependencies.require_client()
        return await _with_error_handling(
            "put_lex_session",
            lambda: client.put_session(
                bot_id=bot_id,
                bot_alias_id=bot_alias_id,
                locale_id=locale_id,
                session_id=session_id,
                messages=messages,
                request_attributes=request_attributes,
                session_state=session_state,
            ),
        )

    @mcp.tool(
        name="delete_lex_session",
        description="Deletes the state of a Lex conversation session so the next utterance starts fresh.",
    )
    async def delete_lex_session(
        bot_id: BotId,
        bot_alias_id: BotAliasId,
        locale_id: LocaleId,
        session_id: SessionId,
    ) -> dict[str, Any]:
        """Remove session state from the runtime."""
        client = dependencies.require_client()
        return await _with_error_handling(
            "delete_lex_session",
            lambda: client.delete_session(
                bot_id=bot_id,
                bot_alias_id=bot_alias_id,
                locale_id=locale_id,
                session_id=session_id,
            ),
        )

    @mcp.tool(
        name="recognize_lex_text",
        description="Sends a user utterance to a Lex bot and returns its interpretations, messages and updated session state.",
    )
    async def recognize_lex_text(
        bot_id: BotId,
        bot_alias_id: BotAliasId,
        locale_id: LocaleId,
        session_id: SessionId,
        text: Annotated[str, Field(description="The user utterance to interpret.")],
        ctx: Context,
    ) -> dict[str, Any]:
        """Submit text and return the bot's interpretation."""
        client = dependencies.require_client()
        result = await _with_error_handling(
            "recognize_lex_text",
            lambda: client.recognize_text(
                bot_id=bot_id,
                bot_alias_id=bot_alias_id,
                locale_id=locale_id,
                session_id=session_id,
                text=text,
            ),
        )
        if "error" not in result:
            await ctx.info(f"Lex session {session_id} processed utterance.")
        return result

    logger.info("Lex runtime MCP tools registered.")
