from __future__ import annotations
import logging
import re
from typing import List

from schema_studio.model import Table, Tables
from schema_studio.normalize import leading_identifier
from schema_studio.parsers.base import SchemaParser

log = logging.getLogger(__name__)

# CREATE TABLE name ( body ); 블록 하나.
# body가 다음 CREATE TABLE을 넘어가지 못하게 막아서, `);`가 빠진 블록은 통째로 버려진다.
CREATE_TABLE_RE = re.compile(
    r"CREATE\s+TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?[`\"]?(\w+)[`\"]?\s*"
    r"\(((?:(?!CREATE\s+TABLE)[\s\S])*?)\)\s*;",
    re.IGNORECASE,
)

LINE_COMMENT_RE = re.compile(r"--[^\n]*")
BLOCK_COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/")

# FK 제약조건 절은 필드가 아님 (합성 시 엣지에서 다시 만들어진다). UNIQUE/CHECK 등 나머지 CONSTRAINT는 필드로 남긴다.
FK_CLAUSE_RE = re.compile(r"^(?:CONSTRAINT\s+[`\"]?\w+[`\"]?\s+)?FOREIGN\s+KEY\b", re.IGNORECASE)

INLINE_REF_RE = re.compile(
    r"\bREFERENCES\s+[`\"]?(\w+)[`\"]?(?:\s*\(\s*[`\"]?(\w+)[`\"]?\s*\))?",
    re.IGNORECASE,
)

FOREIGN_KEY_RE = re.compile(
    r"FOREIGN\s+KEY\s*\(\s*[`\"]?(\w+)[`\"]?\s*\)\s*"
    r"REFERENCES\s+[`\"]?(\w+)[`\"]?\s*\(\s*[`\"]?(\w+)[`\"]?\s*\)",
    re.IGNORECASE,
)

def strip_comments(text: str) -> str:
    return LINE_COMMENT_RE.sub("", BLOCK_COMMENT_RE.sub("", text))

def split_definitions(body: str) -> List[str]:
    # 괄호 깊이를 보지 않는 단순 분리: DECIMAL(10,2) 같은 정의는 두 조각으로 나뉜다 (알려진 제약)
    return [part.strip() for part in body.split(",") if part.strip()]

def parse_table(name: str, body: str) -> Table:
    table = Table(name=name)

    for definition in split_definitions(body):
        if FK_CLAUSE_RE.match(definition):
            continue
        table.fields.append(definition)

        m = INLINE_REF_RE.search(definition)
        if m:
            source = leading_identifier(definition)
            if source:
                table.add_foreign_key(source, m.group(1), m.group(2) or "id")

    # 인라인 REFERENCES와 같은 관계가 두 번 잡힐 수 있음 → 중복 제거는 다이어그램 빌드 단계에서
    for m in FOREIGN_KEY_RE.finditer(body):
        table.add_foreign_key(m.group(1), m.group(2), m.group(3))

    return table

def parse_sql(text: str) -> Tables:
    """SQL 텍스트에서 CREATE TABLE 블록을 찾아 {테이블명: Table} 으로 반환한다."""
    tables: Tables = {}
    for m in CREATE_TABLE_RE.finditer(strip_comments(text or "")):
        name = m.group(1)
        if name in tables:
            log.debug("Duplicate CREATE TABLE %s, keeping the last definition", name)
        tables[name] = parse_table(name, m.group(2))
    return tables

class SqlDdlParser(SchemaParser):
    def can_parse(self, text: str) -> bool:
        return bool(CREATE_TABLE_RE.search(strip_comments(text or "")))

    def parse(self, text: str) -> Tables:
        return parse_sql(text)
