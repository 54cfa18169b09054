"""Tests for the language-model schema generator."""

import json
from types import SimpleNamespace

import pytest

from schema_studio.api import handle_generate
from schema_studio.config import Settings
from schema_studio.llm.aoai_client import build_aoai_client
from schema_studio.llm.schema_generator import SchemaGenerationError, extract_sql, generate_schema

SQL = "CREATE TABLE User (id INT);"


class FakeCompletions:
    def __init__(self, content=None, exc: Exception | None = None, choices: bool = True) -> None:
        self.content = content
        self.exc = exc
        self.choices = choices
        self.calls: list[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.exc is not None:
            raise self.exc
        if not self.choices:
            return SimpleNamespace(choices=[])
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))])


def _client(completions: FakeCompletions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


@pytest.fixture
def no_azure_env(monkeypatch: pytest.MonkeyPatch) -> Settings:
    for key in ("AZURE_OPENAI_ENDPOINT", "AZURE_OPENAI_API_KEY", "AZURE_OPENAI_DEPLOYMENT"):
        monkeypatch.delenv(key, raising=False)
    return Settings(_env_file=None)


class TestExtractSql:
    def test_json_object(self) -> None:
        assert extract_sql(json.dumps({"sql": SQL})) == SQL

    def test_fenced_sql(self) -> None:
        assert extract_sql(f"```sql\n{SQL}\n```") == SQL

    def test_statement_list(self) -> None:
        content = json.dumps({"sql": [SQL, "CREATE TABLE Post (id INT);"]})
        assert extract_sql(content) == SQL + "\n\nCREATE TABLE Post (id INT);"

    def test_json_without_sql_is_empty(self) -> None:
        assert extract_sql(json.dumps({"prisma": "model User {}"})) == ""


class TestGenerateSchema:
    def test_returns_sql_and_sends_prompt(self, no_azure_env: Settings) -> None:
        completions = FakeCompletions(json.dumps({"sql": SQL}))

        assert generate_schema("a blog", client=_client(completions), cfg=no_azure_env) == SQL

        call = completions.calls[0]
        assert call["response_format"] == {"type": "json_object"}
        assert call["max_tokens"] == no_azure_env.generation_max_tokens
        assert "a blog" in call["messages"][-1]["content"]

    def test_bare_sql_response_is_accepted(self, no_azure_env: Settings) -> None:
        completions = FakeCompletions(f"```sql\n{SQL}\n```")
        assert generate_schema("x", client=_client(completions), cfg=no_azure_env) == SQL

    @pytest.mark.parametrize(
        ("completions", "code"),
        [
            (FakeCompletions(None), "NO_CONTENT"),
            (FakeCompletions("ignored", choices=False), "NO_CONTENT"),
            (FakeCompletions("```sql\n```"), "EMPTY_CONTENT"),
            (FakeCompletions(json.dumps({"sql": ""})), "EMPTY_CONTENT"),
            (FakeCompletions(exc=RuntimeError("rate limited")), "UNKNOWN"),
        ],
    )
    def test_failures_raise_generation_error(self, completions, code: str, no_azure_env: Settings) -> None:
        with pytest.raises(SchemaGenerationError) as ctx:
            generate_schema("x", client=_client(completions), cfg=no_azure_env)
        assert ctx.value.code == code

    def test_missing_configuration(self, no_azure_env: Settings) -> None:
        assert build_aoai_client(no_azure_env) is None
        with pytest.raises(SchemaGenerationError) as ctx:
            generate_schema("x", cfg=no_azure_env)
        assert ctx.value.code == "MISSING_CREDENTIAL"

    def test_malformed_payload_raises_generation_error(self, no_azure_env: Settings) -> None:
        completions = FakeCompletions(json.dumps({"sql": SQL, "note": ["x"]}))

        with pytest.raises(SchemaGenerationError) as ctx:
            generate_schema("x", client=_client(completions), cfg=no_azure_env)
        assert ctx.value.code == "UNKNOWN"

    def test_malformed_payload_maps_to_500(self, no_azure_env: Settings) -> None:
        completions = FakeCompletions(json.dumps({"sql": SQL, "note": ["x"]}))

        status, payload = handle_generate(
            {"prompt": "a blog"},
            generator=lambda prompt: generate_schema(prompt, client=_client(completions), cfg=no_azure_env),
        )
        assert status == 500
        assert payload == {"error": "Failed to generate schema"}


class TestBuildClient:
    @pytest.fixture
    def creds(self, no_azure_env: Settings) -> dict:
        return {"AZURE_OPENAI_API_KEY": "key", "AZURE_OPENAI_DEPLOYMENT": "gpt-4o"}

    def test_v1_endpoint_uses_openai_client(self, creds: dict) -> None:
        from openai import AzureOpenAI, OpenAI

        cfg = Settings(_env_file=None, AZURE_OPENAI_ENDPOINT="https://res.openai.azure.com/openai/v1/", **creds)
        client = build_aoai_client(cfg)

        assert isinstance(client, OpenAI)
        assert not isinstance(client, AzureOpenAI)

    def test_resource_endpoint_uses_azure_client(self, creds: dict) -> None:
        from openai import AzureOpenAI

        cfg = Settings(_env_file=None, AZURE_OPENAI_ENDPOINT="https://res.openai.azure.com/", **creds)
        assert isinstance(build_aoai_client(cfg), AzureOpenAI)
