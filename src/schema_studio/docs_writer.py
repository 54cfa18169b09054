from __future__ import annotations
from pathlib import Path
from schema_studio.diagram import Diagram

def to_summary_md(diagram: Diagram) -> str:
    lines = []
    lines.append("# Schema Summary\n")
    lines.append(f"- Tables: {len(diagram.nodes)}")
    lines.append(f"- Relationships: {len(diagram.edges)}\n")

    lines.append("## Tables\n")
    for node in diagram.nodes:
        lines.append(f"### {node.id}")
        for f in node.fields:
            lines.append(f"- `{f}`")
        lines.append("")

    lines.append("## Relationships\n")
    for e in diagram.edges:
        lines.append(f"- {e.source}.{e.source_field} → {e.target}.{e.target_field}")
    lines.append("")
    return "\n".join(lines)

def write_summary_md(diagram: Diagram, out_path: Path) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(to_summary_md(diagram), encoding="utf-8")
    return out_path
