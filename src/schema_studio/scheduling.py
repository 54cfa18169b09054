from __future__ import annotations

import asyncio
from typing import Callable, Optional, Protocol

__all__ = ["Handle", "Scheduler", "AsyncioScheduler"]


class Handle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """단일 스레드 이벤트 루프에 콜백을 예약하는 최소 인터페이스."""

    def call_soon(self, callback: Callable[[], None]) -> Handle: ...

    def call_later(self, delay: float, callback: Callable[[], None]) -> Handle: ...


class AsyncioScheduler:
    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_soon(self, callback: Callable[[], None]) -> asyncio.Handle:
        return self.loop.call_soon(callback)

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(max(0.0, float(delay)), callback)

    def marshal(self, callback: Callable[..., None]) -> Callable[..., None]:
        # 다른 스레드(watchdog 등)에서 온 이벤트를 루프 스레드로 넘긴다
        loop = self.loop

        def _wrapped(*args) -> None:
            loop.call_soon_threadsafe(callback, *args)

        return _wrapped
