from __future__ import annotations
import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from schema_studio.config import Settings, settings as default_settings
from schema_studio.llm.aoai_client import build_aoai_client
from schema_studio.llm.schema_models import GeneratedSchema

log = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a helpful assistant that generates SQL schema based on user requirements.
Your task is to create clear and efficient SQL schema.
Use standard SQL syntax and include appropriate data types and constraints.
Return ONLY valid JSON (no markdown, no explanation).
"""

USER_PROMPT_TEMPLATE = """Generate a database schema based on this description.

Rules:
- One CREATE TABLE statement per table, each terminated with ");".
- Declare relationships as FOREIGN KEY (column) REFERENCES table(column) clauses.
- Do not use vendor-specific attributes such as @id or @default(...).

Output JSON schema:
{{
  "sql": "CREATE TABLE ...;\\n\\nCREATE TABLE ...;"
}}

User Request: {prompt}
"""

FENCE_RE = re.compile(r"```(?:sql)?", re.IGNORECASE)


class SchemaGenerationError(Exception):
    def __init__(self, message: str, code: str = "UNKNOWN"):
        super().__init__(message)
        self.code = code


def clean_sql(text: str) -> str:
    return FENCE_RE.sub("", text or "").strip()


def extract_sql(content: str) -> str:
    """JSON 객체({"sql": ...})든 SQL 원문이든 SQL 텍스트만 꺼낸다."""
    text = clean_sql(content)
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError:
        return text
    if isinstance(data, dict):
        try:
            return clean_sql(GeneratedSchema.model_validate(data).sql)
        except ValidationError as e:
            log.error("Unexpected schema payload: %s", e)
            raise SchemaGenerationError("Failed to generate schema", "UNKNOWN") from e
    return text


def generate_schema(prompt: str, client=None, cfg: Settings | None = None) -> str:
    cfg = cfg or default_settings
    if client is None:
        client = build_aoai_client(cfg)
    if client is None:
        raise SchemaGenerationError(
            "Azure OpenAI 설정이 없습니다. (.env의 AZURE_OPENAI_* 값을 설정하세요)", "MISSING_CREDENTIAL"
        )

    try:
        resp = client.chat.completions.create(
            model=cfg.azure_openai_deployment,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": USER_PROMPT_TEMPLATE.format(prompt=prompt)},
            ],
            response_format={"type": "json_object"},
            max_tokens=cfg.generation_max_tokens,
            temperature=cfg.generation_temperature,
        )
    except Exception as e:
        log.error("Schema generation request failed: %s", e)
        raise SchemaGenerationError(str(e) or "Failed to generate schema", "UNKNOWN") from e

    choices = getattr(resp, "choices", None) or []
    content = choices[0].message.content if choices else None
    if not content:
        raise SchemaGenerationError("No content received from model", "NO_CONTENT")

    sql = extract_sql(content)
    if not sql:
        raise SchemaGenerationError("Generated content is empty", "EMPTY_CONTENT")
    return sql
