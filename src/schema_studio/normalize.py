from __future__ import annotations
import re
from typing import List

# 비표준 생성 경로(Prisma 스타일)에서 섞여 들어오는 @id, @default(now()) 같은 속성 표기
ATTRIBUTE_RE = re.compile(r"\s*@\w+(?:\((?:[^()]|\([^()]*\))*\))?")

IDENT_RE = re.compile(r'^\s*[`"\[]?(\w+)[`"\]]?')

def strip_field_attributes(label: str) -> str:
    return ATTRIBUTE_RE.sub("", label).strip()

def normalize_fields(fields: List[str]) -> List[str]:
    # 1) 속성 표기 제거, 2) 빈 항목 제거
    out = []
    for f in fields:
        s = strip_field_attributes(f)
        if s:
            out.append(s)
    return out

def leading_identifier(definition: str) -> str:
    """컬럼 정의의 첫 식별자(컬럼명). 따옴표/백틱은 벗긴다."""
    m = IDENT_RE.match(definition)
    return m.group(1) if m else ""
