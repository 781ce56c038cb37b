import httpx
import pytest

from lexruntime.tools import LexToolDependencies, register_lex_tools

IDS = {"bot_id": "B1", "bot_alias_id": "A1", "locale_id": "en_US", "session_id": "S1"}


class FakeMCP:
    """Captures tool functions the way FastMCP's decorator receives them."""

    def __init__(self) -> None:
        self.tools: dict[str, object] = {}

    def tool(self, *, name: str, description: str):
        def _register(fn):
            self.tools[name] = fn
            return fn

        return _register


class FakeContext:
    def __init__(self) -> None:
        self.messages: list[str] = []

    async def info(self, message: str) -> None:
        self.messages.append(message)


def _register(client=None) -> FakeMCP:
    mcp = FakeMCP()
    dependencies = LexToolDependencies()
    if client is not None:
        dependencies.attach_client(client)
    register_lex_tools(mcp, dependencies)
    return mcp


def test_all_tools_registered() -> None:
    assert set(_register().tools) == {
        "get_lex_session",
        "put_lex_session",
        "delete_lex_session",
        "recognize_lex_text",
    }


@pytest.mark.anyio
async def test_recognize_tool_returns_data_and_reports_progress(build_client) -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"sessionId": "S1", "messages": [{"content": "Hi!"}]})

    client = build_client(handler)
    ctx = FakeContext()
    result = await _register(client).tools["recognize_lex_text"](text="hello", ctx=ctx, **IDS)
    assert result == {"sessionId": "S1", "messages": [{"content": "Hi!"}]}
    assert ctx.messages == ["Lex session S1 processed utterance."]
    await client.aclose()


@pytest.mark.anyio
async def test_service_errors_become_error_results(build_client) -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"__type": "ResourceNotFoundException", "message": "gone"})

    client = build_client(handler)
    result = await _register(client).tools["get_lex_session"](**IDS)
    assert "ResourceNotFoundException" in result["error"]
    assert "gone" in result["error"]
    await client.aclose()


@pytest.mark.anyio
async def test_validation_errors_become_error_results(build_client) -> None:
    client = build_client(lambda request: httpx.Response(200))
    result = await _register(client).tools["delete_lex_session"](**{**IDS, "session_id": " "})
    assert result == {"error": "session_id must be a non-empty string."}
    await client.aclose()


@pytest.mark.anyio
async def test_put_tool_passes_fields_through(build_client) -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=request.content)

    client = build_client(handler)
    result = await _register(client).tools["put_lex_session"](
        session_state={"dialogAction": {"type": "ElicitIntent"}},
        **IDS,
    )
    assert result == {"sessionState": {"dialogAction": {"type": "ElicitIntent"}}}
    await client.aclose()


@pytest.mark.anyio
async def test_tools_require_attached_client() -> None:
    with pytest.raises(RuntimeError):
        await _register().tools["get_lex_session"](**IDS)
