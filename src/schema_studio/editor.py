from __future__ import annotations

import logging
from typing import Optional

from schema_studio.diagram import DiagramEdge, make_edge
from schema_studio.sync import SyncController

log = logging.getLogger(__name__)

PLACEHOLDER_FIELD = "new_field VARCHAR(255)"


def _is_named(value: Optional[str]) -> bool:
    return isinstance(value, str) and value.strip() != ""


class DiagramEditor:
    """
    다이어그램 위의 사용자 편집을 받아 컨트롤러에 구조 변경을 알린다.
    잘못된 요청(빈 필드명, 없는 노드, 이미 있는 연결)은 상태를 바꾸지 않는다.
    """

    def __init__(self, controller: SyncController):
        self.controller = controller

    @property
    def diagram(self):
        return self.controller.diagram

    def connect(
        self,
        source_node_id: str,
        source_field: Optional[str],
        target_node_id: str,
        target_field: Optional[str],
    ) -> Optional[DiagramEdge]:
        if not (_is_named(source_field) and _is_named(target_field)):
            log.debug("Rejecting connection with unnamed endpoint")
            return None
        if self.diagram.node(source_node_id) is None or self.diagram.node(target_node_id) is None:
            log.debug("Rejecting connection to unknown node %s / %s", source_node_id, target_node_id)
            return None

        edge = make_edge(
            source_node_id, source_field.strip(), target_node_id, target_field.strip(), self.controller.theme
        )
        if self.diagram.has_edge(edge.id):
            log.debug("Edge %s already exists", edge.id)
            return None

        self.diagram.edges.append(edge)
        self.controller.graph_changed()
        return edge

    def remove_edge(self, edge_id: str) -> bool:
        edges = self.diagram.edges
        kept = [e for e in edges if e.id != edge_id]
        if len(kept) == len(edges):
            return False
        edges[:] = kept
        self.controller.graph_changed()
        return True

    def edit_field(self, node_id: str, field_index: int, new_text: str) -> bool:
        node = self.diagram.node(node_id)
        if node is None or not 0 <= field_index < len(node.fields):
            return False
        node.fields[field_index] = new_text
        self.controller.graph_changed()
        return True

    def add_field(self, node_id: str) -> bool:
        node = self.diagram.node(node_id)
        if node is None:
            return False
        node.fields.append(PLACEHOLDER_FIELD)
        self.controller.graph_changed()
        return True

    def move_node(self, node_id: str, x: float, y: float) -> bool:
        return self.controller.node_moved(node_id, x, y)
