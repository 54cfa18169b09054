from __future__ import annotations
import asyncio
from pathlib import Path
from typing import Callable, Optional

from rich.console import Console
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from schema_studio.diagram import Diagram, Theme
from schema_studio.diagram_io import write_diagram
from schema_studio.docs_writer import write_summary_md
from schema_studio.scheduling import AsyncioScheduler
from schema_studio.sync import SyncController

console = Console()

class SqlFileHandler(FileSystemEventHandler):
    def __init__(self, sql_path: Path, on_text: Callable[[str], None]):
        self.sql_path = sql_path.resolve()
        self.on_text = on_text

    def on_any_event(self, event):
        if event.is_directory:
            return
        # 에디터가 임시 파일 → rename 으로 저장하는 경우 dest_path 쪽이 대상
        paths = [getattr(event, "dest_path", "") or "", event.src_path]
        if not any(p and Path(p).resolve() == self.sql_path for p in paths):
            return
        try:
            text = self.sql_path.read_text(encoding="utf-8", errors="ignore")
        except FileNotFoundError:
            return
        # 같은 내용의 중복 이벤트는 컨트롤러가 걸러낸다
        self.on_text(text)

async def watch_sql(
    sql_path: Path,
    out_dir: Path,
    theme: Theme = Theme.LIGHT,
    stop: Optional[asyncio.Event] = None,
) -> SyncController:
    scheduler = AsyncioScheduler(asyncio.get_running_loop())
    json_path = out_dir / "diagram.json"
    md_path = out_dir / "schema_summary.md"

    def on_diagram(diagram: Diagram) -> None:
        write_diagram(diagram, json_path, theme)
        write_summary_md(diagram, md_path)
        console.print(
            f"[bold green]Diagram:[/bold green] {len(diagram.nodes)} tables, {len(diagram.edges)} relationships → {json_path}"
        )

    controller = SyncController(scheduler, theme=theme, on_diagram_change=on_diagram)
    controller.text_changed(sql_path.read_text(encoding="utf-8", errors="ignore"))

    handler = SqlFileHandler(sql_path, scheduler.marshal(controller.text_changed))
    obs = Observer()
    obs.schedule(handler, str(sql_path.resolve().parent), recursive=False)
    obs.start()
    try:
        if stop is not None:
            await stop.wait()
        else:
            while True:
                await asyncio.sleep(1)
    finally:
        obs.stop()
        obs.join()
        controller.close()
    return controller
