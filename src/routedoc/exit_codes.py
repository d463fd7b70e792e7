"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~routedoc.exceptions.RoutedocError` subclass.
Build scripts can inspect the exit code to determine the failure class
without parsing stderr.

Example::

    $ routedoc build myapp.routes:ROUTES
    $ echo $?
    5   # EXIT_UNSUPPORTED_METHOD -- a route uses a verb Swagger cannot describe
"""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_ROUTE_LOAD_ERROR = 3
"""The route target could not be imported or did not yield route actions."""

EXIT_DOCUMENT_LOAD_ERROR = 4
"""A previously written document could not be read or validated."""

EXIT_UNSUPPORTED_METHOD = 5
"""A route action declares an HTTP verb outside the documentable set."""

EXIT_SCHEMA_COLLISION = 6
"""Two distinct types share a schema name and strict mode is enabled."""
