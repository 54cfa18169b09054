from __future__ import annotations
from pydantic import BaseModel, Field, field_validator
from typing import Any, Optional

class GeneratedSchema(BaseModel):
    sql: str = ""
    note: Optional[str] = None

    @field_validator("sql", mode="before")
    @classmethod
    def coerce_sql(cls, v: Any) -> str:
        # LLM이 문장 배열로 돌려주는 경우도 있음
        if v is None:
            return ""
        if isinstance(v, list):
            return "\n\n".join(str(s).strip() for s in v if str(s).strip())
        return str(v)

class GenerateRequest(BaseModel):
    prompt: str = Field(default="")
