from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from schema_studio.llm.schema_generator import SchemaGenerationError, generate_schema
from schema_studio.sync import SyncController

log = logging.getLogger(__name__)


class SchemaSession:
    """
    하나의 스키마 화면: 생성 요청 + 동기화 컨트롤러.
    새 요청을 보내거나 화면을 닫으면 이전 요청의 결과는 버린다.
    """

    def __init__(
        self,
        controller: SyncController,
        generator: Callable[[str], str] = generate_schema,
    ):
        self.controller = controller
        self._generator = generator
        self._generation = 0
        self._closed = False
        self.error: Optional[str] = None
        self.is_loading = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def generate(self, prompt: str) -> Optional[str]:
        self._generation += 1
        token = self._generation
        self.error = None
        self.is_loading = True
        try:
            sql = await asyncio.to_thread(self._generator, prompt)
        except SchemaGenerationError as e:
            if self._is_current(token):
                log.warning("Schema generation failed (%s): %s", e.code, e)
                self.error = str(e)
                self.is_loading = False
            return None

        if not self._is_current(token):
            log.debug("Discarding superseded generation #%d", token)
            return None

        self.is_loading = False
        self.controller.load_text(sql)
        return sql

    def _is_current(self, token: int) -> bool:
        return not self._closed and token == self._generation

    def close(self) -> None:
        self._closed = True
        self.controller.close()
