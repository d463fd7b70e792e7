"""Exception hierarchy for routedoc.

All exceptions inherit from :class:`RoutedocError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`routedoc.exit_codes`.
The top-level error handler in :func:`routedoc.app.main` catches
``RoutedocError`` and exits with the appropriate code.

Subclass hierarchy::

    RoutedocError (exit 1)
    +-- InvalidUsageError       (exit 2)
    +-- RouteLoadError          (exit 3)
    +-- DocumentLoadError       (exit 4)
    +-- UnsupportedMethodError  (exit 5)
    +-- SchemaCollisionError    (exit 6)
    +-- ConfigError             (exit 1)
"""

from routedoc.exit_codes import (
    EXIT_DOCUMENT_LOAD_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_ROUTE_LOAD_ERROR,
    EXIT_SCHEMA_COLLISION,
    EXIT_UNSUPPORTED_METHOD,
)


class RoutedocError(Exception):
    """Base exception for all routedoc errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`routedoc.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(RoutedocError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class RouteLoadError(RoutedocError):
    """Raised when a ``module:attribute`` route target cannot be loaded."""

    exit_code = EXIT_ROUTE_LOAD_ERROR


class DocumentLoadError(RoutedocError):
    """Raised when a seed document cannot be parsed or fails validation."""

    exit_code = EXIT_DOCUMENT_LOAD_ERROR


class UnsupportedMethodError(RoutedocError):
    """Raised when a route action uses a verb with no slot on a path item.

    Swagger 2.0 path items only hold GET, PUT, POST, DELETE, PATCH and
    OPTIONS operations, so anything else cannot be documented.
    """

    exit_code = EXIT_UNSUPPORTED_METHOD

    def __init__(self, method: str):
        super().__init__(
            f"HTTP method '{method}' cannot be documented; "
            "supported methods are GET, PUT, POST, DELETE, PATCH and OPTIONS"
        )
        self.method = method


class SchemaCollisionError(RoutedocError):
    """Raised in strict mode when distinct types share a schema name.

    Attributes:
        collisions: Mapping of short schema name to the fully-qualified
            type names that claimed it, in registration order.
    """

    exit_code = EXIT_SCHEMA_COLLISION

    def __init__(self, collisions: dict[str, list[str]]):
        details = "; ".join(
            f"{name}: {', '.join(ids)}" for name, ids in collisions.items()
        )
        super().__init__(f"Schema name collision: {details}")
        self.collisions = collisions


class ConfigError(RoutedocError):
    """Raised for configuration problems (unreadable or invalid config files)."""

    exit_code = EXIT_GENERIC_FAILURE
