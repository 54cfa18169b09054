"""
스키마 스튜디오 CLI.
- generate: 자연어 설명 → SQL 파일
- diagram: SQL 파일 → 다이어그램 JSON + 요약 MD
- format: SQL 파일 → 다이어그램을 거쳐 다시 합성한 SQL 출력
- watch: SQL 파일 변경을 감시하며 다이어그램 갱신
"""
from __future__ import annotations
import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from schema_studio.config import settings
from schema_studio.commands.diagram import run_diagram
from schema_studio.commands.generate import run_generate
from schema_studio.diagram import Theme
from schema_studio.graph_builder import build_diagram
from schema_studio.llm.schema_generator import SchemaGenerationError
from schema_studio.parsers.sql_ddl import parse_sql
from schema_studio.sql_writer import synthesize_sql
from schema_studio.watch import watch_sql

console = Console()

app = typer.Typer(
    name="schema-studio",
    add_completion=False,
    help="SQL 스키마 생성/편집 도구: 자연어 → SQL, SQL ⇄ 다이어그램",
)


def _sql_file_arg() -> Path:
    return typer.Argument(..., exists=True, dir_okay=False, readable=True, help="CREATE TABLE 문이 담긴 SQL 파일")


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="로그 레벨 (DEBUG, INFO, ...)"),
):
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command("generate")
def cmd_generate(
    prompt: str = typer.Argument(..., help="만들고 싶은 데이터베이스 설명"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="출력 SQL 파일 (기본: SCHEMA_OUTPUT_DIR/schema.sql)"),
):
    """자연어 설명으로 SQL 스키마를 생성한다."""
    if not prompt.strip():
        raise typer.BadParameter("prompt는 비어 있을 수 없습니다.")
    try:
        run_generate(prompt, out_path=out)
    except SchemaGenerationError as e:
        console.print(f"[bold red]Generation failed ({e.code}):[/bold red] {e}")
        raise typer.Exit(code=1)


@app.command("diagram")
def cmd_diagram(
    sql_file: Path = _sql_file_arg(),
    out_dir: Optional[Path] = typer.Option(None, "--out-dir", help="출력 디렉터리"),
    theme: Theme = typer.Option(Theme.LIGHT, "--theme", help="색상 테마"),
    previous: Optional[Path] = typer.Option(
        None, "--previous", exists=True, dir_okay=False, help="노드 위치를 이어받을 이전 diagram.json"
    ),
):
    """SQL 파일을 다이어그램 JSON과 요약 MD로 변환한다."""
    run_diagram(sql_file, out_dir=out_dir, theme=theme, previous=previous)


@app.command("format")
def cmd_format(sql_file: Path = _sql_file_arg()):
    """SQL → 다이어그램 → SQL 로 정규화한 결과를 출력한다."""
    text = sql_file.read_text(encoding="utf-8", errors="ignore")
    typer.echo(synthesize_sql(build_diagram(parse_sql(text))))


@app.command("watch")
def cmd_watch(
    sql_file: Path = _sql_file_arg(),
    out_dir: Optional[Path] = typer.Option(None, "--out-dir", help="출력 디렉터리"),
    theme: Theme = typer.Option(Theme.LIGHT, "--theme", help="색상 테마"),
):
    """SQL 파일이 바뀔 때마다 다이어그램을 다시 만든다 (Ctrl+C로 종료)."""
    base = out_dir or settings.schema_output_dir
    base.mkdir(parents=True, exist_ok=True)
    console.print(f"[bold]Watching[/bold] {sql_file}")
    try:
        asyncio.run(watch_sql(sql_file, base, theme=theme))
    except KeyboardInterrupt:
        console.print("Stopped.")


if __name__ == "__main__":
    app()
