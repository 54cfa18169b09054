"""스키마 생성: 자연어 설명 → LLM → SQL 파일."""
from __future__ import annotations
from pathlib import Path
from typing import Callable

from rich.console import Console

from schema_studio.config import settings
from schema_studio.llm.schema_generator import generate_schema
from schema_studio.parsers.sql_ddl import parse_sql
from schema_studio.sql_writer import write_sql

console = Console()


def run_generate(
    prompt: str,
    out_path: Path | None = None,
    generator: Callable[[str], str] = generate_schema,
) -> Path:
    out_path = out_path or settings.schema_output_dir / "schema.sql"
    console.print(f"[bold]Prompt:[/bold] {prompt}")

    sql = generator(prompt)
    write_sql(sql, out_path)

    tables = parse_sql(sql)
    console.print(f"Generated [green]{len(tables)}[/green] tables")
    console.print(f"[bold green]SQL:[/bold green] {out_path}")
    return out_path
