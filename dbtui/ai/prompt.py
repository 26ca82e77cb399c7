"""System prompt construction for SQL generation."""

from __future__ import annotations

from .provider import FKDef, SchemaContext, TableDef

_INSTRUCTIONS = (
    "You are a PostgreSQL SQL generator. Given a natural language request, "
    "return ONLY a valid PostgreSQL SQL query. No explanations, no markdown, "
    "no code fences. Just the raw SQL.\n\n"
    "Rules:\n"
    "- Return ONLY the SQL query, nothing else\n"
    "- Use proper PostgreSQL syntax\n"
    "- Use double quotes for identifiers with special characters\n"
    "- Use single quotes for string literals\n"
    "- Prefer JOINs over subqueries when referencing related tables\n"
    "- Use table aliases for readability\n\n"
)

_TYPE_ABBREVIATIONS = {
    "timestamp with time zone": "timestamptz",
    "timestamp without time zone": "timestamp",
    "character varying": "varchar",
    "double precision": "float8",
    "integer": "int4",
    "bigint": "int8",
    "smallint": "int2",
    "boolean": "bool",
    "real": "float4",
}


def build_system_prompt(schema: SchemaContext) -> str:
    """Build the system prompt describing the rules and the schema."""
    if not schema.tables:
        return _INSTRUCTIONS

    parts = [_INSTRUCTIONS, "Database schema:\n"]
    parts.extend(format_table_def(table) + "\n" for table in schema.tables)

    if schema.enum_values:
        parts.append("\nEnum types:\n")
        parts.extend(
            f"  {name}: {', '.join(values)}\n"
            for name, values in schema.enum_values.items()
        )

    return "".join(parts)


def abbreviate_type(data_type: str) -> str:
    """Shorten verbose PostgreSQL type names, keeping any suffix."""
    for long_name, short_name in _TYPE_ABBREVIATIONS.items():
        if data_type.startswith(long_name):
            return short_name + data_type[len(long_name):]
    return data_type


def format_table_def(table: TableDef) -> str:
    """Render one table as a compact single line."""
    fk_map = _build_fk_map(table.foreign_keys)
    entries = []
    for col in table.columns:
        flags = []
        if col.is_pk:
            flags.append("PK")
        if col.is_fk and col.name in fk_map:
            flags.append("FK->" + fk_map[col.name])
        entry = f"{col.name}[{abbreviate_type(col.data_type)}"
        if flags:
            entry += "," + ",".join(flags)
        entries.append(entry + "]")
    return f"Table: {table.name} (columns: {', '.join(entries)})"


def _build_fk_map(fks: list[FKDef]) -> dict[str, str]:
    result: dict[str, str] = {}
    for fk in fks:
        for col, ref_col in zip(fk.columns, fk.referenced_columns):
            result[col] = f"{fk.referenced_table}.{ref_col}"
    return result