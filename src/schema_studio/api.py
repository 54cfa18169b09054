"""생성 엔드포인트 로직: {prompt} → {sql} / {error}."""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Tuple

from pydantic import ValidationError

from schema_studio.llm.schema_generator import SchemaGenerationError, generate_schema
from schema_studio.llm.schema_models import GenerateRequest

log = logging.getLogger(__name__)


def handle_generate(
    body: Any,
    generator: Callable[[str], str] = generate_schema,
) -> Tuple[int, Dict[str, str]]:
    if not isinstance(body, dict):
        return 400, {"error": "Request body must be a JSON object"}
    try:
        req = GenerateRequest.model_validate(body)
    except ValidationError:
        return 400, {"error": "prompt must be a string"}

    prompt = req.prompt.strip()
    if not prompt:
        return 400, {"error": "prompt is required"}

    try:
        sql = generator(prompt)
    except SchemaGenerationError as e:
        log.error("GENERATION_FAILED (%s): %s", e.code, e)
        return 500, {"error": "Failed to generate schema"}

    return 200, {"sql": sql}
