"""
SQL 텍스트 ⇄ 다이어그램 동기화 컨트롤러.

두 개의 플래그만으로 재진입을 막는다.
- is_updating_from_text: 한쪽 방향의 반영이 진행 중 (텍스트→그래프 또는 그래프→텍스트)
- is_node_moving: 드래그 중, settle 타이머가 끝날 때까지 텍스트 기반 재빌드를 미룬다
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

from schema_studio.config import settings
from schema_studio.diagram import Diagram, Position, Theme
from schema_studio.graph_builder import build_diagram
from schema_studio.parsers.base import SchemaParser
from schema_studio.parsers.sql_ddl import SqlDdlParser
from schema_studio.scheduling import Handle, Scheduler
from schema_studio.sql_writer import synthesize_sql

log = logging.getLogger(__name__)


class SyncState(str, Enum):
    IDLE = "idle"
    APPLYING_TEXT_TO_GRAPH = "applying_text_to_graph"
    APPLYING_GRAPH_TO_TEXT = "applying_graph_to_text"
    DRAGGING_SETTLING = "dragging_settling"


class SyncController:
    def __init__(
        self,
        scheduler: Scheduler,
        sql: str = "",
        *,
        theme: Theme = Theme.LIGHT,
        on_text_change: Optional[Callable[[str], None]] = None,
        on_diagram_change: Optional[Callable[[Diagram], None]] = None,
        settle_delay: Optional[float] = None,
        parser: Optional[SchemaParser] = None,
    ):
        self._scheduler = scheduler
        self._parser = parser or SqlDdlParser()
        self._theme = Theme(theme)
        self._on_text_change = on_text_change
        self._on_diagram_change = on_diagram_change
        self._settle_delay = settings.drag_settle_seconds if settle_delay is None else settle_delay

        self._text = ""
        self._last_processed: Optional[str] = None
        self._pending_text: Optional[str] = None
        self._diagram = Diagram()
        self._direction = SyncState.IDLE
        self._settle_handle: Optional[Handle] = None
        self._finish_handle: Optional[Handle] = None
        self._graph_dirty = False

        self.is_updating_from_text = False
        self.is_node_moving = False

        if sql:
            self.text_changed(sql)

    @property
    def text(self) -> str:
        return self._text

    @property
    def diagram(self) -> Diagram:
        return self._diagram

    @property
    def theme(self) -> Theme:
        return self._theme

    @property
    def state(self) -> SyncState:
        if self.is_updating_from_text:
            return self._direction
        if self.is_node_moving:
            return SyncState.DRAGGING_SETTLING
        return SyncState.IDLE

    @property
    def has_pending_text(self) -> bool:
        return self._pending_text is not None

    # ----- 텍스트 → 그래프 -----

    def text_changed(self, sql: str) -> bool:
        """텍스트 뷰에서 온 변경. 다이어그램을 다시 만들었으면 True."""
        sql = sql or ""
        if sql == self._last_processed:
            # 되돌려 쓴 경우 보류 중인 텍스트도 무효
            self._text = sql
            self._pending_text = None
            return False

        self._text = sql
        if self.is_node_moving or self.is_updating_from_text:
            log.debug("Deferring text rebuild (state=%s)", self.state.value)
            self._pending_text = sql
            return False

        self._apply_text(sql)
        return True

    def load_text(self, sql: str) -> None:
        """
        뷰 바깥에서 들어온 SQL (생성 결과 등).
        다이어그램을 다시 만들고 텍스트 뷰에도 같은 텍스트를 밀어 넣는다.
        """
        sql = sql or ""
        self._graph_dirty = False
        self._text = sql
        if self.is_node_moving or self.is_updating_from_text:
            self._pending_text = sql
        else:
            self._pending_text = None
            self._apply_text(sql)
        self._write_text(sql)

    def _apply_text(self, sql: str) -> None:
        self.is_updating_from_text = True
        self._direction = SyncState.APPLYING_TEXT_TO_GRAPH
        try:
            tables = self._parser.parse(sql)
            self._diagram = build_diagram(tables, self._diagram.nodes, self._theme)
            self._last_processed = sql
            log.debug("Rebuilt diagram: %d nodes, %d edges", len(self._diagram.nodes), len(self._diagram.edges))
            if self._on_diagram_change is not None:
                self._on_diagram_change(self._diagram)
        finally:
            self.is_updating_from_text = False
            self._direction = SyncState.IDLE
        self._flush_pending()

    # ----- 그래프 → 텍스트 -----

    def graph_changed(self) -> bool:
        """다이어그램 구조 변경(필드 편집/추가, 연결). 텍스트를 새로 썼으면 True."""
        if self.is_updating_from_text:
            if self._direction == SyncState.APPLYING_GRAPH_TO_TEXT:
                # 쓰기 플래그가 내려가는 다음 틱에 다시 합성
                self._graph_dirty = True
            return False

        sql = synthesize_sql(self._diagram)
        if sql == self._text:
            return False

        if self._pending_text is not None:
            log.debug("Graph edit supersedes deferred text change")
            self._pending_text = None

        self._text = sql
        self._last_processed = sql
        self._write_text(sql)
        return True

    def _write_text(self, sql: str) -> None:
        self.is_updating_from_text = True
        self._direction = SyncState.APPLYING_GRAPH_TO_TEXT
        try:
            if self._on_text_change is not None:
                self._on_text_change(sql)
        finally:
            # 텍스트 뷰의 change 이벤트가 같은 틱 안에서 되돌아오므로 다음 틱에 해제
            if self._finish_handle is None:
                self._finish_handle = self._scheduler.call_soon(self._finish_graph_write)

    def _finish_graph_write(self) -> None:
        self._finish_handle = None
        self.is_updating_from_text = False
        self._direction = SyncState.IDLE

        if self._graph_dirty:
            self._graph_dirty = False
            if self.graph_changed():
                return

        # 써 넣은 텍스트를 다시 파싱해서 다이어그램을 맞춘다 (인라인 REFERENCES, 쉼표가 든 필드 등)
        if self._pending_text is None:
            self._pending_text = self._text
        self._flush_pending()

    # ----- 드래그 -----

    def node_moved(self, node_id: str, x: float, y: float) -> bool:
        node = self._diagram.node(node_id)
        if node is None:
            return False

        # 위치는 SQL 모델에 없으므로 합성하지 않는다
        node.position = Position(x, y)
        self.is_node_moving = True
        if self._settle_handle is not None:
            self._settle_handle.cancel()
        self._settle_handle = self._scheduler.call_later(self._settle_delay, self._settle)
        return True

    def _settle(self) -> None:
        self._settle_handle = None
        self.is_node_moving = False
        self._flush_pending()

    def _flush_pending(self) -> None:
        if self._pending_text is None or self.is_node_moving or self.is_updating_from_text:
            return
        sql, self._pending_text = self._pending_text, None
        self._apply_text(sql)

    # ----- 기타 -----

    def set_theme(self, theme: Theme) -> None:
        """현재 텍스트로 다시 빌드해서 색을 바꾼다. 드래그/쓰기 중이면 플래그가 풀린 뒤에."""
        self._theme = Theme(theme)
        if self.is_node_moving or self.is_updating_from_text:
            self._pending_text = self._text
            return
        self._pending_text = None
        self._apply_text(self._text)

    def close(self) -> None:
        for handle in (self._settle_handle, self._finish_handle):
            if handle is not None:
                handle.cancel()
        self._settle_handle = None
        self._finish_handle = None
