from schema_studio.parsers.base import SchemaParser
from schema_studio.parsers.sql_ddl import SqlDdlParser, parse_sql

__all__ = ["SchemaParser", "SqlDdlParser", "parse_sql"]
