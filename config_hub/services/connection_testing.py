from __future__ import annotations

from typing import Optional

from config_hub.services.introspection import (
    ConnectionDescriptor,
    EngineFactory,
    EngineKind,
    IntrospectionError,
    IntrospectionOptions,
    build_connection_url,
    check_connection,
)


class ConnectionTestError(Exception):
    """Raised when validating or testing a source connection fails."""


class UnsupportedConnectionError(ConnectionTestError):
    """Raised when the connection type cannot be verified against a live database."""


def test_connection(
    descriptor: ConnectionDescriptor,
    options: IntrospectionOptions,
    *,
    engine_factory: Optional[EngineFactory] = None,
) -> tuple[float, str]:
    """Open a transient connection and run a trivial query against it.

    Returns the elapsed time in milliseconds and the connection URL with the
    password hidden. Raises :class:`ConnectionTestError` on failure.
    """

    if descriptor.kind is EngineKind.UNSUPPORTED:
        raise UnsupportedConnectionError(
            f"Connection testing is not supported for {descriptor.connection_type} connections."
        )
    if not descriptor.host:
        raise ConnectionTestError("Connection requires a host.")

    url = build_connection_url(descriptor)
    try:
        elapsed_ms = check_connection(descriptor, options, engine_factory=engine_factory)
    except IntrospectionError as exc:
        raise ConnectionTestError(str(exc)) from exc

    return elapsed_ms, url.render_as_string(hide_password=True)


# Keep pytest from collecting the service function when it is imported into test modules.
test_connection.__test__ = False  # type: ignore[attr-defined]
