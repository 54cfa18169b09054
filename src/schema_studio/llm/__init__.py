from schema_studio.llm.schema_generator import SchemaGenerationError, generate_schema

__all__ = ["SchemaGenerationError", "generate_schema"]
