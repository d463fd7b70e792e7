"""Typer application and CLI entry point for routedoc.

Commands:

* ``routedoc build TARGET`` -- import route actions from ``module:attribute``
  and write the Swagger document as JSON or YAML.
* ``routedoc inspect TARGET`` -- list the documented operations in a table
  and report schema name collisions.

:func:`main` is the console-script entry point declared in
``pyproject.toml``.  :class:`~routedoc.exceptions.RoutedocError` instances
become a clean error message and the error's exit code.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import typer
from rich.logging import RichHandler

from routedoc import __version__
from routedoc.exceptions import RoutedocError
from routedoc.exit_codes import EXIT_GENERIC_FAILURE
from routedoc.models import OutputFormat

if TYPE_CHECKING:
    from routedoc.models import DocumentConfig
    from routedoc.routing import RouteAction

app = typer.Typer(
    name="routedoc",
    help="Compile route descriptions into Swagger documents.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"routedoc {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Route library log records to stderr through Rich."""
    from routedoc.output import get_output

    handler = RichHandler(
        console=get_output().stderr_console,
        show_time=False,
        show_path=False,
    )
    logger = logging.getLogger("routedoc")
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Project config file (JSON or YAML)."
    ),
) -> None:
    """Set up output and logging, and stash shared options on the context."""
    from routedoc.output import DisplayFormat, OutputManager, set_output

    output = OutputManager(
        format=DisplayFormat.PLAIN if plain_output else DisplayFormat.AUTO,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
    )
    set_output(output)
    _configure_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj["config_file"] = config_file
    ctx.obj["verbose"] = verbose


def _resolve(
    ctx: typer.Context, target: Optional[str], overrides: dict[str, Any]
) -> tuple[DocumentConfig, list[RouteAction]]:
    """Resolve config and load the route actions for *target*."""
    from routedoc.config import resolve_config
    from routedoc.exceptions import InvalidUsageError
    from routedoc.loader import load_routes
    from routedoc.output import debug

    config = resolve_config(overrides, (ctx.obj or {}).get("config_file"))
    target = target or config.routes
    if not target:
        raise InvalidUsageError(
            "No route target given. Pass module:attribute or set 'routes' in routedoc.json"
        )

    debug(f"Loading routes from {target}")
    actions = load_routes(target)
    debug(f"Loaded {len(actions)} route action(s)")
    return config, actions


@app.command("build")
def build_command(
    ctx: typer.Context,
    target: Optional[str] = typer.Argument(
        None, help="Route actions to document, as module:attribute."
    ),
    output_file: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the document here instead of stdout."
    ),
    fmt: Optional[OutputFormat] = typer.Option(
        None, "--format", "-f", help="Document format: json or yaml."
    ),
    merge_into: Optional[Path] = typer.Option(
        None, "--merge-into", help="Extend a previously built document."
    ),
    title: Optional[str] = typer.Option(None, "--title", help="Document title."),
    doc_version: Optional[str] = typer.Option(
        None, "--doc-version", help="Document version string."
    ),
    host: Optional[str] = typer.Option(None, "--host", help="API host."),
    base_path: Optional[str] = typer.Option(None, "--base-path", help="API base path."),
    strict: Optional[bool] = typer.Option(
        None, "--strict/--no-strict", help="Fail on schema name collisions."
    ),
) -> None:
    """Build a Swagger document from route actions.

    Example::

        routedoc build myapp.routes:ROUTES --format yaml -o swagger.yaml
        routedoc build myapp.admin:ROUTES --merge-into swagger.yaml -o swagger.yaml
    """
    from routedoc.builder import build_document
    from routedoc.config import apply_server_overrides, empty_document, make_info
    from routedoc.loader import load_document
    from routedoc.output import error, info, print_data, success
    from routedoc.writer import dump_document, format_for_path, write_document

    overrides = {
        "title": title,
        "version": doc_version,
        "host": host,
        "base_path": base_path,
        "output_format": fmt,
        "strict_schema_names": strict,
    }
    try:
        config, actions = _resolve(ctx, target, overrides)

        if merge_into is not None:
            previous = apply_server_overrides(load_document(merge_into), config)
            doc_info = make_info(config) if title or doc_version else None
        else:
            previous = empty_document(config)
            doc_info = None

        document = build_document(
            actions,
            info=doc_info,
            previous=previous,
            strict=config.strict_schema_names,
        )
    except RoutedocError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    out_format = config.output_format
    if fmt is None and output_file is not None:
        out_format = format_for_path(output_file) or out_format

    if output_file is None:
        print_data(dump_document(document, out_format))
        return

    info(f"Documented {len(actions)} route action(s) as {out_format.value}")
    write_document(document, output_file, out_format)
    success(
        f"Wrote {len(document.paths)} path(s) and {len(document.definitions)} "
        f"definition(s) to {output_file}"
    )


@app.command("inspect")
def inspect_command(
    ctx: typer.Context,
    target: Optional[str] = typer.Argument(
        None, help="Route actions to inspect, as module:attribute."
    ),
) -> None:
    """List documented operations and report schema name collisions.

    Example::

        routedoc inspect myapp.routes:ROUTES
    """
    from routedoc.builder import build_document, find_schema_collisions
    from routedoc.config import empty_document
    from routedoc.output import error, get_output, warning

    try:
        config, actions = _resolve(ctx, target, {})
        document = build_document(actions, previous=empty_document(config))
        collisions = find_schema_collisions(actions)
    except RoutedocError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    rows: list[list[str]] = []
    for path_str, item in document.paths.items():
        for verb, operation in item.operations().items():
            rows.append([
                verb.upper(),
                path_str,
                operation.operation_id or "-",
                operation.summary or "-",
            ])

    get_output().print_table(
        ["Method", "Path", "Operation ID", "Summary"],
        rows,
        title=f"{document.info.title} -- Operations ({len(rows)})",
    )
    for name, ids in collisions.items():
        warning(f"Schema '{name}' is claimed by {', '.join(ids)}; the last one wins")


def main() -> None:
    """CLI entry point invoked by the ``routedoc`` console script."""
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from routedoc.output import error

        if isinstance(exc, RoutedocError):
            error(str(exc))
            sys.exit(exc.exit_code)
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
