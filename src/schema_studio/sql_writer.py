from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Sequence

from schema_studio.diagram import Diagram, DiagramEdge, DiagramNode
from schema_studio.normalize import normalize_fields

def fk_clause(e: DiagramEdge) -> str:
    return f"FOREIGN KEY ({e.source_field}) REFERENCES {e.target}({e.target_field})"

def to_sql(nodes: Sequence[DiagramNode], edges: Sequence[DiagramEdge]) -> str:
    outgoing: Dict[str, List[DiagramEdge]] = {}
    for e in edges:
        outgoing.setdefault(e.source, []).append(e)

    blocks: list[str] = []
    for node in nodes:
        # ✅ @id 같은 속성 표기는 SQL로 새어 나가면 안 됨
        lines = normalize_fields(node.fields)
        lines += [fk_clause(e) for e in outgoing.get(node.id, [])]
        if lines:
            body = ",\n".join(f"  {line}" for line in lines)
            blocks.append(f"CREATE TABLE {node.id} (\n{body}\n);")
        else:
            blocks.append(f"CREATE TABLE {node.id} (\n);")

    return "\n\n".join(blocks)

def synthesize_sql(diagram: Diagram) -> str:
    return to_sql(diagram.nodes, diagram.edges)

def write_sql(sql: str, out_path: Path) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(sql if sql.endswith("\n") else sql + "\n", encoding="utf-8")
    return out_path
