import pytest
from botocore.credentials import Credentials, ReadOnlyCredentials

from lexruntime import settings as settings_module
from lexruntime.errors import MissingCredentialsError, MissingRegionError
from lexruntime.settings import RequestSettings, Settings, resolve_request_settings

from _helpers import StaticSession


def _no_session(*args, **kwargs):
    raise AssertionError("boto3.Session should not be created")


def test_overrides_skip_the_credential_chain(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings_module.boto3, "Session", _no_session)
    resolved = resolve_request_settings(
        Settings(aws_region="us-east-1"),
        region="eu-west-1",
        credentials=Credentials("AKID", "SECRET", "TOKEN"),
    )
    assert resolved == RequestSettings(
        region="eu-west-1",
        credentials=ReadOnlyCredentials("AKID", "SECRET", "TOKEN"),
    )


def test_settings_region_wins_over_session() -> None:
    resolved = resolve_request_settings(
        Settings(aws_region="ap-south-1"),
        session=StaticSession(region_name="us-west-2"),
    )
    assert resolved.region == "ap-south-1"
    assert resolved.credentials.access_key == "AKIDEXAMPLE"


def test_session_supplies_missing_fields() -> None:
    resolved = resolve_request_settings(Settings(), session=StaticSession(region_name="us-west-2"))
    assert resolved.region == "us-west-2"
    assert isinstance(resolved.credentials, ReadOnlyCredentials)


def test_session_built_from_profile(monkeypatch: pytest.MonkeyPatch) -> None:
    created: list[str | None] = []

    def _session(profile_name=None):
        created.append(profile_name)
        return StaticSession()

    monkeypatch.setattr(settings_module.boto3, "Session", _session)
    resolve_request_settings(Settings(aws_profile="dev"))
    assert created == ["dev"]


def test_missing_region_raises() -> None:
    with pytest.raises(MissingRegionError):
        resolve_request_settings(Settings(), session=StaticSession(region_name=None))


def test_missing_credentials_raise() -> None:
    with pytest.raises(MissingCredentialsError):
        resolve_request_settings(Settings(aws_region="us-east-1"), session=StaticSession(credentials=None))


def test_incomplete_credentials_raise() -> None:
    with pytest.raises(MissingCredentialsError):
        resolve_request_settings(
            Settings(aws_region="us-east-1"),
            credentials=Credentials("AKID", ""),
        )


def test_request_settings_are_immutable() -> None:
    resolved = resolve_request_settings(Settings(), session=StaticSession())
    with pytest.raises(AttributeError):
        resolved.region = "eu-west-1"  # type: ignore[misc]


def test_load_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings_module, "load_dotenv", lambda: None)
    monkeypatch.delenv("AWS_REGION", raising=False)
    monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-central-1")
    monkeypatch.setenv("AWS_PROFILE", "dev")
    monkeypatch.setenv("LEX_API_TIMEOUT", "12.5")
    monkeypatch.setenv("MCP_SSE_PORT", "9001")

    loaded = Settings.load()
    assert loaded == Settings(
        aws_region="eu-central-1",
        aws_profile="dev",
        api_timeout=12.5,
        mcp_sse_port=9001,
    )


def test_load_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings_module, "load_dotenv", lambda: None)
    for name in ("AWS_REGION", "AWS_DEFAULT_REGION", "AWS_PROFILE", "LEX_API_TIMEOUT", "MCP_SSE_PORT"):
        monkeypatch.delenv(name, raising=False)
    assert Settings.load() == Settings()


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("LEX_API_TIMEOUT", "soon"),
        ("LEX_API_TIMEOUT", "0"),
        ("MCP_SSE_PORT", "http"),
        ("MCP_SSE_PORT", "-1"),
    ],
)
def test_load_rejects_bad_values(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setattr(settings_module, "load_dotenv", lambda: None)
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        Settings.load()
