from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


# 생성 순서 인덱스로 순환하는 5개 역할 색상 (light, dark)
PALETTE: List[Tuple[str, Dict[Theme, str]]] = [
    ("primary", {Theme.LIGHT: "#3b82f6", Theme.DARK: "#60a5fa"}),
    ("secondary", {Theme.LIGHT: "#8b5cf6", Theme.DARK: "#a78bfa"}),
    ("success", {Theme.LIGHT: "#22c55e", Theme.DARK: "#4ade80"}),
    ("warning", {Theme.LIGHT: "#f59e0b", Theme.DARK: "#fbbf24"}),
    ("error", {Theme.LIGHT: "#ef4444", Theme.DARK: "#f87171"}),
]

EDGE_STROKE = {Theme.LIGHT: "#64748b", Theme.DARK: "#94a3b8"}
EDGE_TYPE = "smoothstep"
EDGE_MARKER = "arrowclosed"


def palette_color(index: int, theme: Theme) -> str:
    _, variants = PALETTE[index % len(PALETTE)]
    return variants[Theme(theme)]


@dataclass
class Position:
    x: float = 0
    y: float = 0


@dataclass
class DiagramNode:
    id: str
    position: Position = field(default_factory=Position)
    fields: List[str] = field(default_factory=list)
    color: str = PALETTE[0][1][Theme.LIGHT]


@dataclass
class DiagramEdge:
    id: str
    source: str
    target: str
    source_field: str
    target_field: str
    label: str = ""
    type: str = EDGE_TYPE
    marker: str = EDGE_MARKER
    style: Dict[str, object] = field(default_factory=dict)

    # 필드 단위 연결점 (렌더러가 정확한 위치에 선을 붙일 때 사용)
    @property
    def source_handle(self) -> str:
        return f"{self.source}.{self.source_field}"

    @property
    def target_handle(self) -> str:
        return f"{self.target}.{self.target_field}"


@dataclass
class Diagram:
    nodes: List[DiagramNode] = field(default_factory=list)
    edges: List[DiagramEdge] = field(default_factory=list)

    def node(self, node_id: str) -> Optional[DiagramNode]:
        for n in self.nodes:
            if n.id == node_id:
                return n
        return None

    def has_edge(self, eid: str) -> bool:
        return any(e.id == eid for e in self.edges)


def edge_id(source_table: str, source_field: str, target_table: str, target_field: str) -> str:
    """네 요소를 정렬해서 만드는 관계 ID. 어느 쪽에서 선언해도 같은 값이 나온다."""
    parts = sorted([source_table, source_field, target_table, target_field])
    return "fk:" + "|".join(parts)


def make_edge(
    source_table: str,
    source_field: str,
    target_table: str,
    target_field: str,
    theme: Theme = Theme.LIGHT,
) -> DiagramEdge:
    return DiagramEdge(
        id=edge_id(source_table, source_field, target_table, target_field),
        source=source_table,
        target=target_table,
        source_field=source_field,
        target_field=target_field,
        label=f"{source_field} → {target_field}",
        style={"stroke": EDGE_STROKE[Theme(theme)], "strokeWidth": 2},
    )
