"""다이어그램 JSON 내보내기/불러오기 (pydantic 모델 ↔ dataclass)."""
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field

from schema_studio.diagram import Diagram, DiagramEdge, DiagramNode, Position, Theme


class PositionModel(BaseModel):
    x: float = 0
    y: float = 0


class NodeModel(BaseModel):
    id: str
    position: PositionModel = Field(default_factory=PositionModel)
    fields: List[str] = Field(default_factory=list)
    color: str = ""


class EdgeModel(BaseModel):
    id: str
    source: str
    target: str
    source_handle: str
    target_handle: str
    label: str = ""
    type: str = "smoothstep"
    marker: str = "arrowclosed"
    style: Dict[str, Any] = Field(default_factory=dict)


class DiagramFile(BaseModel):
    theme: Literal["light", "dark"] = "light"
    nodes: List[NodeModel] = Field(default_factory=list)
    edges: List[EdgeModel] = Field(default_factory=list)


def _split_handle(handle: str, node_id: str) -> str:
    prefix = f"{node_id}."
    return handle[len(prefix):] if handle.startswith(prefix) else handle


def diagram_to_file(diagram: Diagram, theme: Theme = Theme.LIGHT) -> DiagramFile:
    return DiagramFile(
        theme=Theme(theme).value,
        nodes=[
            NodeModel(
                id=n.id,
                position=PositionModel(x=n.position.x, y=n.position.y),
                fields=list(n.fields),
                color=n.color,
            )
            for n in diagram.nodes
        ],
        edges=[
            EdgeModel(
                id=e.id,
                source=e.source,
                target=e.target,
                source_handle=e.source_handle,
                target_handle=e.target_handle,
                label=e.label,
                type=e.type,
                marker=e.marker,
                style=dict(e.style),
            )
            for e in diagram.edges
        ],
    )


def file_to_diagram(doc: DiagramFile) -> Diagram:
    return Diagram(
        nodes=[
            DiagramNode(id=n.id, position=Position(n.position.x, n.position.y), fields=list(n.fields), color=n.color)
            for n in doc.nodes
        ],
        edges=[
            DiagramEdge(
                id=e.id,
                source=e.source,
                target=e.target,
                source_field=_split_handle(e.source_handle, e.source),
                target_field=_split_handle(e.target_handle, e.target),
                label=e.label,
                type=e.type,
                marker=e.marker,
                style=dict(e.style),
            )
            for e in doc.edges
        ],
    )


def write_diagram(diagram: Diagram, out_path: Path, theme: Theme = Theme.LIGHT) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(diagram_to_file(diagram, theme).model_dump_json(indent=2), encoding="utf-8")
    return out_path


def load_diagram(path: Path) -> Diagram:
    return file_to_diagram(DiagramFile.model_validate_json(path.read_text(encoding="utf-8")))
