"""SQL 스키마 ⇄ 다이어그램 양방향 편집기."""
__version__ = "0.1.0"
