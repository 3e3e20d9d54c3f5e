"""Catalog introspection against the external databases described by stored connections.

Every call builds a throwaway engine for the connection, opens exactly one
connection, runs its ``information_schema`` queries and disposes the engine
before returning. Nothing is pooled or cached between calls and nothing is
retried; any driver failure surfaces as :class:`IntrospectionError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from time import perf_counter
from typing import Any, Callable, Iterable, Optional
from urllib.parse import quote_plus

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool

from config_hub.config import Settings

logger = logging.getLogger(__name__)

EngineFactory = Callable[..., Engine]

DEFAULT_SSL_HOST_MARKERS: tuple[str, ...] = ("neon.tech", "aws", "gcp", "azure")

PLACEHOLDER_SCHEMAS: tuple[str, ...] = ("dbo", "public", "staging")
PLACEHOLDER_TABLES: tuple[str, ...] = ("customers", "orders", "products")

_TEMPORAL_TOKENS = frozenset({"date", "datetime", "timestamp", "time"})


class IntrospectionError(Exception):
    """Raised when a catalog call against an external database fails."""


class EngineKind(str, Enum):
    POSTGRES = "postgresql"
    MYSQL = "mysql"
    UNSUPPORTED = "unsupported"


_ENGINE_ALIASES: dict[str, EngineKind] = {
    "postgresql": EngineKind.POSTGRES,
    "postgres": EngineKind.POSTGRES,
    "mysql": EngineKind.MYSQL,
}

_DRIVERNAMES: dict[EngineKind, str] = {
    EngineKind.POSTGRES: "postgresql+psycopg",
    EngineKind.MYSQL: "mysql+pymysql",
}


def classify_engine(connection_type: Optional[str]) -> EngineKind:
    normalized = "".join((connection_type or "").split()).lower()
    return _ENGINE_ALIASES.get(normalized, EngineKind.UNSUPPORTED)


@dataclass(frozen=True)
class ConnectionDescriptor:
    connection_type: str
    host: Optional[str] = None
    port: Optional[int] = None
    username: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)
    database_name: Optional[str] = None

    @classmethod
    def from_record(cls, record: Any) -> "ConnectionDescriptor":
        return cls(
            connection_type=record.connection_type,
            host=record.host,
            port=record.port,
            username=record.username,
            password=record.password,
            database_name=record.database_name,
        )

    @property
    def kind(self) -> EngineKind:
        return classify_engine(self.connection_type)


@dataclass(frozen=True)
class IntrospectionOptions:
    timeout_seconds: int = 10
    ssl_host_markers: tuple[str, ...] = DEFAULT_SSL_HOST_MARKERS

    @classmethod
    def from_settings(cls, settings: Settings) -> "IntrospectionOptions":
        return cls(
            timeout_seconds=settings.introspection_timeout_seconds,
            ssl_host_markers=tuple(settings.ssl_host_markers),
        )


@dataclass(frozen=True)
class ColumnInfo:
    attribute_name: str
    data_type: str
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    is_primary_key: bool = False
    is_foreign_key: bool = False
    foreign_key_table: Optional[str] = None
    is_not_null: bool = False
    column_description: str = ""


PLACEHOLDER_COLUMNS: tuple[ColumnInfo, ...] = (
    ColumnInfo("id", "integer", precision=32, scale=0, is_primary_key=True, is_not_null=True),
    ColumnInfo("name", "varchar", length=255),
    ColumnInfo("created_at", "timestamp"),
)


def requires_ssl(host: Optional[str], markers: Iterable[str] = DEFAULT_SSL_HOST_MARKERS) -> bool:
    # Hostname heuristic for managed cloud databases; there is no per-connection SSL setting.
    lowered = (host or "").lower()
    return any(marker.lower() in lowered for marker in markers if marker)


def build_connection_url(descriptor: ConnectionDescriptor) -> URL:
    kind = descriptor.kind
    if kind is EngineKind.UNSUPPORTED:
        raise IntrospectionError(
            f"Failed to connect to database: unsupported connection type '{descriptor.connection_type}'"
        )
    return URL.create(
        drivername=_DRIVERNAMES[kind],
        username=descriptor.username or None,
        password=descriptor.password or None,
        host=descriptor.host or None,
        port=descriptor.port,
        database=descriptor.database_name or None,
    )


def build_connect_args(
    descriptor: ConnectionDescriptor, options: IntrospectionOptions
) -> dict[str, Any]:
    kind = descriptor.kind
    connect_args: dict[str, Any] = {"connect_timeout": options.timeout_seconds}
    if kind is EngineKind.POSTGRES:
        connect_args["sslmode"] = (
            "require" if requires_ssl(descriptor.host, options.ssl_host_markers) else "disable"
        )
    return connect_args


def parse_type_filter(raw: Optional[str]) -> list[str]:
    if not raw:
        return []
    return [token.strip().lower() for token in raw.split(",") if token.strip()]


def _is_temporal(data_type: str) -> bool:
    return "date" in data_type or "time" in data_type


def matches_type_filter(data_type: Optional[str], tokens: Iterable[str]) -> bool:
    """Return True when ``data_type`` belongs to any of the requested type families.

    A token matches by substring; temporal tokens (``date``, ``datetime``,
    ``timestamp``, ``time``) additionally match every date/time type so that a
    ``date`` filter also picks up ``timestamptz`` columns.
    """

    requested = list(tokens)
    if not requested:
        return True
    lowered = (data_type or "").lower()
    for token in requested:
        if token in lowered:
            return True
        if token in _TEMPORAL_TOKENS and _is_temporal(lowered):
            return True
    return False


def _redact(message: str, secret: Optional[str]) -> str:
    if not secret:
        return message
    redacted = message.replace(secret, "***")
    encoded = quote_plus(secret)
    if encoded != secret:
        redacted = redacted.replace(encoded, "***")
    return redacted


def _as_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class PlaceholderIntrospector:
    """Canned catalog for connection types without real introspection support."""

    kind = EngineKind.UNSUPPORTED

    def __init__(self, options: IntrospectionOptions, engine_factory: Optional[EngineFactory] = None):
        self.options = options

    def list_schemas(self, descriptor: ConnectionDescriptor) -> list[str]:
        logger.debug("Returning placeholder schemas for %s connection", descriptor.connection_type)
        return list(PLACEHOLDER_SCHEMAS)

    def list_tables(self, descriptor: ConnectionDescriptor, schema: str) -> list[str]:
        logger.debug("Returning placeholder tables for %s connection", descriptor.connection_type)
        return list(PLACEHOLDER_TABLES)

    def list_columns(
        self, descriptor: ConnectionDescriptor, schema: str, table: str
    ) -> list[ColumnInfo]:
        logger.debug("Returning placeholder columns for %s connection", descriptor.connection_type)
        return list(PLACEHOLDER_COLUMNS)

    def check_connection(self, descriptor: ConnectionDescriptor) -> float:
        return 0.0


class SqlIntrospector:
    kind: EngineKind
    schemas_sql: str
    tables_sql: str
    columns_sql: str
    keys_sql: str

    def __init__(self, options: IntrospectionOptions, engine_factory: Optional[EngineFactory] = None):
        self.options = options
        self._engine_factory = engine_factory

    def list_schemas(self, descriptor: ConnectionDescriptor) -> list[str]:
        rows = self._run(descriptor, lambda conn: self._fetch(conn, self.schemas_sql, {}))
        return [row["schema_name"] for row in rows]

    def list_tables(self, descriptor: ConnectionDescriptor, schema: str) -> list[str]:
        params = {"schema": schema}
        rows = self._run(descriptor, lambda conn: self._fetch(conn, self.tables_sql, params))
        return [row["table_name"] for row in rows]

    def list_columns(
        self, descriptor: ConnectionDescriptor, schema: str, table: str
    ) -> list[ColumnInfo]:
        params = {"schema": schema, "table": table}

        def _collect(conn):
            columns = self._fetch(conn, self.columns_sql, params)
            keys = self._fetch(conn, self.keys_sql, params)
            return columns, keys

        column_rows, key_rows = self._run(descriptor, _collect)

        primary_keys: set[str] = set()
        foreign_keys: dict[str, Optional[str]] = {}
        for row in key_rows:
            column_name = row["column_name"]
            constraint_type = (row["constraint_type"] or "").upper()
            if constraint_type == "PRIMARY KEY":
                primary_keys.add(column_name)
            elif constraint_type == "FOREIGN KEY":
                foreign_keys.setdefault(column_name, row["referenced_table"])

        return [
            ColumnInfo(
                attribute_name=row["column_name"],
                data_type=row["data_type"],
                length=_as_int(row["character_maximum_length"]),
                precision=_as_int(row["numeric_precision"]),
                scale=_as_int(row["numeric_scale"]),
                is_primary_key=row["column_name"] in primary_keys,
                is_foreign_key=row["column_name"] in foreign_keys,
                foreign_key_table=foreign_keys.get(row["column_name"]),
                is_not_null=(row["is_nullable"] or "").upper() == "NO",
            )
            for row in column_rows
        ]

    def check_connection(self, descriptor: ConnectionDescriptor) -> float:
        start = perf_counter()
        self._run(descriptor, lambda conn: conn.execute(text("SELECT 1")))
        return (perf_counter() - start) * 1000.0

    @staticmethod
    def _fetch(connection, statement: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        result = connection.execute(text(statement), params)
        return [dict(row) for row in result.mappings()]

    def _create_engine(self, descriptor: ConnectionDescriptor) -> Engine:
        factory = self._engine_factory or create_engine
        return factory(
            build_connection_url(descriptor),
            poolclass=NullPool,
            connect_args=build_connect_args(descriptor, self.options),
        )

    def _run(self, descriptor: ConnectionDescriptor, work: Callable[[Any], Any]) -> Any:
        logger.info(
            "Opening %s introspection connection to %s/%s",
            self.kind.value,
            descriptor.host,
            descriptor.database_name,
        )
        engine = None
        try:
            engine = self._create_engine(descriptor)
            with engine.connect() as connection:
                return work(connection)
        except (SQLAlchemyError, OSError, ImportError) as exc:
            detail = _redact(str(getattr(exc, "orig", None) or exc), descriptor.password)
            logger.warning(
                "Introspection against %s/%s failed: %s",
                descriptor.host,
                descriptor.database_name,
                detail,
            )
            raise IntrospectionError(f"Failed to connect to database: {detail}") from exc
        finally:
            if engine is not None:
                engine.dispose()


class PostgresIntrospector(SqlIntrospector):
    kind = EngineKind.POSTGRES

    schemas_sql = """
        SELECT schema_name
        FROM information_schema.schemata
        WHERE schema_name NOT IN ('information_schema', 'pg_catalog')
          AND schema_name NOT LIKE 'pg_toast%'
          AND schema_name NOT LIKE 'pg_temp%'
        ORDER BY schema_name
    """

    tables_sql = """
        SELECT table_name
        FROM information_schema.tables
        WHERE table_schema = :schema
          AND table_type = 'BASE TABLE'
        ORDER BY table_name
    """

    columns_sql = """
        SELECT column_name,
               data_type,
               character_maximum_length,
               numeric_precision,
               numeric_scale,
               is_nullable
        FROM information_schema.columns
        WHERE table_schema = :schema
          AND table_name = :table
        ORDER BY ordinal_position
    """

    keys_sql = """
        SELECT kcu.column_name,
               tc.constraint_type,
               ccu.table_name AS referenced_table
        FROM information_schema.table_constraints AS tc
        JOIN information_schema.key_column_usage AS kcu
          ON tc.constraint_name = kcu.constraint_name
         AND tc.table_schema = kcu.table_schema
         AND tc.table_name = kcu.table_name
        LEFT JOIN information_schema.constraint_column_usage AS ccu
          ON tc.constraint_type = 'FOREIGN KEY'
         AND ccu.constraint_name = tc.constraint_name
         AND ccu.constraint_schema = tc.constraint_schema
        WHERE tc.table_schema = :schema
          AND tc.table_name = :table
          AND tc.constraint_type IN ('PRIMARY KEY', 'FOREIGN KEY')
    """


class MySQLIntrospector(SqlIntrospector):
    kind = EngineKind.MYSQL

    # MySQL 8 reports information_schema columns in upper case unless aliased.
    schemas_sql = """
        SELECT schema_name AS schema_name
        FROM information_schema.schemata
        WHERE schema_name NOT IN ('information_schema', 'mysql', 'performance_schema', 'sys')
        ORDER BY schema_name
    """

    tables_sql = """
        SELECT table_name AS table_name
        FROM information_schema.tables
        WHERE table_schema = :schema
          AND table_type = 'BASE TABLE'
        ORDER BY table_name
    """

    columns_sql = """
        SELECT column_name AS column_name,
               data_type AS data_type,
               character_maximum_length AS character_maximum_length,
               numeric_precision AS numeric_precision,
               numeric_scale AS numeric_scale,
               is_nullable AS is_nullable
        FROM information_schema.columns
        WHERE table_schema = :schema
          AND table_name = :table
        ORDER BY ordinal_position
    """

    keys_sql = """
        SELECT kcu.column_name AS column_name,
               tc.constraint_type AS constraint_type,
               kcu.referenced_table_name AS referenced_table
        FROM information_schema.table_constraints AS tc
        JOIN information_schema.key_column_usage AS kcu
          ON tc.constraint_name = kcu.constraint_name
         AND tc.table_schema = kcu.table_schema
         AND tc.table_name = kcu.table_name
        WHERE tc.table_schema = :schema
          AND tc.table_name = :table
          AND tc.constraint_type IN ('PRIMARY KEY', 'FOREIGN KEY')
    """


_INTROSPECTORS: dict[EngineKind, type] = {
    EngineKind.POSTGRES: PostgresIntrospector,
    EngineKind.MYSQL: MySQLIntrospector,
    EngineKind.UNSUPPORTED: PlaceholderIntrospector,
}


def get_introspector(
    descriptor: ConnectionDescriptor,
    options: IntrospectionOptions,
    *,
    engine_factory: Optional[EngineFactory] = None,
):
    introspector_cls = _INTROSPECTORS[descriptor.kind]
    return introspector_cls(options, engine_factory)


def list_schemas(
    descriptor: ConnectionDescriptor,
    options: IntrospectionOptions,
    *,
    engine_factory: Optional[EngineFactory] = None,
) -> list[str]:
    return get_introspector(descriptor, options, engine_factory=engine_factory).list_schemas(
        descriptor
    )


def list_tables(
    descriptor: ConnectionDescriptor,
    schema: str,
    options: IntrospectionOptions,
    *,
    engine_factory: Optional[EngineFactory] = None,
) -> list[str]:
    return get_introspector(descriptor, options, engine_factory=engine_factory).list_tables(
        descriptor, schema
    )


def list_columns(
    descriptor: ConnectionDescriptor,
    schema: str,
    table: str,
    options: IntrospectionOptions,
    *,
    engine_factory: Optional[EngineFactory] = None,
) -> list[ColumnInfo]:
    return get_introspector(descriptor, options, engine_factory=engine_factory).list_columns(
        descriptor, schema, table
    )


def list_column_types(
    descriptor: ConnectionDescriptor,
    schema: str,
    table: str,
    options: IntrospectionOptions,
    data_types: Optional[str] = None,
    *,
    engine_factory: Optional[EngineFactory] = None,
) -> list[ColumnInfo]:
    tokens = parse_type_filter(data_types)
    columns = list_columns(descriptor, schema, table, options, engine_factory=engine_factory)
    return [column for column in columns if matches_type_filter(column.data_type, tokens)]


def check_connection(
    descriptor: ConnectionDescriptor,
    options: IntrospectionOptions,
    *,
    engine_factory: Optional[EngineFactory] = None,
) -> float:
    return get_introspector(descriptor, options, engine_factory=engine_factory).check_connection(
        descriptor
    )
