"""Tests for diagram export and summary documents."""

import json
from pathlib import Path

from schema_studio.diagram import Theme
from schema_studio.diagram_io import load_diagram, write_diagram
from schema_studio.docs_writer import to_summary_md
from schema_studio.graph_builder import build_diagram
from schema_studio.parsers import parse_sql


def test_written_diagram_loads_back(tmp_path: Path, example_sql: str) -> None:
    diagram = build_diagram(parse_sql(example_sql), theme=Theme.DARK)
    diagram.node("User").position.x = 1234

    path = write_diagram(diagram, tmp_path / "out" / "diagram.json", Theme.DARK)
    data = json.loads(path.read_text(encoding="utf-8"))
    loaded = load_diagram(path)

    assert data["theme"] == "dark"
    assert data["edges"][0]["source_handle"] == "Post.author_id"
    assert loaded.node("User").position.x == 1234
    assert loaded.nodes == diagram.nodes
    assert loaded.edges == diagram.edges


def test_summary_lists_tables_and_relationships(example_sql: str) -> None:
    md = to_summary_md(build_diagram(parse_sql(example_sql)))

    assert "- Tables: 2" in md
    assert "- Relationships: 1" in md
    assert "### Post" in md
    assert "- `email VARCHAR(255)`" in md
    assert "- Post.author_id → User.id" in md
