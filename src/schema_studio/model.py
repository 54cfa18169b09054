from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List

@dataclass
class ForeignKey:
    source_field: str
    target_table: str
    target_field: str = "id"

@dataclass
class Table:
    name: str
    # 컬럼 정의 원문 그대로 (타입/제약조건을 분해하지 않음)
    fields: List[str] = field(default_factory=list)
    foreign_keys: List[ForeignKey] = field(default_factory=list)

    def add_foreign_key(self, source_field: str, target_table: str, target_field: str = "id") -> ForeignKey:
        fk = ForeignKey(source_field=source_field, target_table=target_table, target_field=target_field)
        self.foreign_keys.append(fk)
        return fk

# CREATE TABLE 등장 순서를 유지하는 테이블 매핑
Tables = Dict[str, Table]

def foreign_key_set(tables: Tables) -> set[tuple[str, str, str, str]]:
    """(source_table, source_field, target_table, target_field) 집합. 중복 선언은 하나로 합쳐진다."""
    return {
        (t.name, fk.source_field, fk.target_table, fk.target_field)
        for t in tables.values()
        for fk in t.foreign_keys
    }
