from __future__ import annotations
import logging
from typing import Iterable, Optional

from schema_studio.diagram import Diagram, DiagramNode, Position, Theme, make_edge, palette_color
from schema_studio.model import Tables
from schema_studio.normalize import normalize_fields

log = logging.getLogger(__name__)

GRID_COLUMNS = 3
GRID_DX = 300
GRID_DY = 250


def grid_position(index: int) -> Position:
    return Position(x=GRID_DX * (index % GRID_COLUMNS), y=GRID_DY * (index // GRID_COLUMNS))


def build_diagram(
    tables: Tables,
    previous_nodes: Optional[Iterable[DiagramNode]] = None,
    theme: Theme = Theme.LIGHT,
) -> Diagram:
    """
    파싱된 테이블 → 노드/엣지 전체 재생성.
    - 이전 다이어그램에 같은 ID의 노드가 있으면 위치를 그대로 재사용
    - 새 테이블만 격자 위치를 받는다
    - 같은 관계가 여러 번 선언되면 처음 것만 엣지로 만든다
    """
    previous = {n.id: n.position for n in (previous_nodes or [])}
    diagram = Diagram()

    for index, table in enumerate(tables.values()):
        prev_pos = previous.get(table.name)
        position = Position(prev_pos.x, prev_pos.y) if prev_pos is not None else grid_position(index)
        diagram.nodes.append(DiagramNode(
            id=table.name,
            position=position,
            fields=normalize_fields(table.fields),
            color=palette_color(index, theme),
        ))

    node_ids = {n.id for n in diagram.nodes}
    seen: set[str] = set()
    for table in tables.values():
        for fk in table.foreign_keys:
            if fk.target_table not in node_ids:
                log.debug("Skipping %s.%s: unknown target table %s", table.name, fk.source_field, fk.target_table)
                continue
            edge = make_edge(table.name, fk.source_field, fk.target_table, fk.target_field, theme)
            if edge.id in seen:
                continue
            seen.add(edge.id)
            diagram.edges.append(edge)

    return diagram
