"""다이어그램 문서 생성: SQL 파일 → 다이어그램 JSON + 요약 MD."""
from __future__ import annotations
from pathlib import Path

from rich.console import Console

from schema_studio.config import settings
from schema_studio.diagram import Theme
from schema_studio.diagram_io import load_diagram, write_diagram
from schema_studio.docs_writer import write_summary_md
from schema_studio.graph_builder import build_diagram
from schema_studio.parsers.sql_ddl import parse_sql

console = Console()


def load_text(p: Path) -> str:
    return p.read_text(encoding="utf-8", errors="ignore")


def run_diagram(
    sql_path: Path,
    out_dir: Path | None = None,
    out_json: str = "diagram.json",
    out_md: str = "schema_summary.md",
    theme: Theme = Theme.LIGHT,
    previous: Path | None = None,
) -> tuple[Path, Path]:
    """
    SQL 파일을 파싱해 다이어그램을 만든다.
    previous(이전 diagram.json)가 있으면 같은 테이블의 노드 위치를 유지한다.
    반환: (json_path, md_path)
    """
    base = out_dir or settings.schema_output_dir
    base.mkdir(parents=True, exist_ok=True)
    json_path = base / out_json
    md_path = base / out_md

    tables = parse_sql(load_text(sql_path))
    console.print(f"Found [green]{len(tables)}[/green] tables in {sql_path}")

    previous_nodes = load_diagram(previous).nodes if previous else None
    diagram = build_diagram(tables, previous_nodes, theme)

    write_diagram(diagram, json_path, theme)
    write_summary_md(diagram, md_path)
    console.print(f"[bold green]JSON:[/bold green] {json_path}")
    console.print(f"[bold green]MD:[/bold green]   {md_path}")
    return json_path, md_path
