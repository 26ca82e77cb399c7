"""Data types shared by the SQL-generating AI providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class ProviderError(Exception):
    """Raised when a provider cannot produce a response."""


@dataclass
class TokenUsage:
    """Token accounting for one generation request."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    estimated: bool = False


@dataclass
class ColumnDef:
    """A column as described to the model."""

    name: str
    data_type: str
    is_pk: bool = False
    is_fk: bool = False
    nullable: bool = False


@dataclass
class FKDef:
    """A foreign key from ``columns`` to ``referenced_table``."""

    columns: list[str] = field(default_factory=list)
    referenced_table: str = ""
    referenced_columns: list[str] = field(default_factory=list)


@dataclass
class TableDef:
    """A table with its columns and foreign keys."""

    name: str
    columns: list[ColumnDef] = field(default_factory=list)
    foreign_keys: list[FKDef] = field(default_factory=list)


@dataclass
class SchemaContext:
    """The part of the database schema handed to the model."""

    tables: list[TableDef] = field(default_factory=list)
    enum_values: dict[str, list[str]] = field(default_factory=dict)


@dataclass
class SQLRequest:
    """A natural-language request together with its schema context."""

    prompt: str
    schema: SchemaContext = field(default_factory=SchemaContext)


@dataclass
class SQLResponse:
    """The generated SQL, or a soft error message from the model side."""

    sql: str = ""
    error: str = ""
    usage: TokenUsage = field(default_factory=TokenUsage)


class Provider(ABC):
    """Something that turns a natural-language request into SQL."""

    @abstractmethod
    def generate_sql(self, request: SQLRequest) -> SQLResponse:
        """Generate SQL for ``request``; raise ProviderError on failure."""

    @abstractmethod
    def name(self) -> str:
        """Short identifier of the provider."""