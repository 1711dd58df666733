"""CLI application entry point for curvebridge.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from curvebridge import __version__
from curvebridge.cli.output import (
    SYM_OK,
    console,
    print_error,
    print_header,
    print_nothing_to_do,
    print_result,
    print_scene_info,
    print_selection,
    print_step,
    print_success,
)
from curvebridge.config import CurveBridgeSettings, GeometryConfig, LoggingConfig
from curvebridge.core import BooleanOperation, boolean_combine
from curvebridge.exceptions import CurveBridgeError, SceneLoadError, SceneSaveError
from curvebridge.io import SceneReader, SceneWriter, result_path_data, write_svg_document
from curvebridge.utils import OperationLogger, configure_logging

# Create the Typer app
app = typer.Typer(
    name="curvebridge",
    help="Combine vector shapes of a scene with curve-preserving boolean operations.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Curvebridge[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def combine(
    scene_file: Annotated[
        Path,
        typer.Argument(
            help="Path to input JSON scene file",
            show_default=False,
        ),
    ],
    select: Annotated[
        list[str] | None,
        typer.Option(
            "--select",
            "-s",
            help="Id of an object to combine, repeat in fold order (default: all objects)",
        ),
    ] = None,
    operation: Annotated[
        str,
        typer.Option(
            "--operation",
            "-p",
            help="Boolean operation (union|intersection|difference|xor)",
        ),
    ] = "union",
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output scene path (default: {name}-combined.json)",
        ),
    ] = None,
    svg: Annotated[
        Path | None,
        typer.Option(
            "--svg",
            help="Also write the result as an SVG document",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Preview the result without writing any file",
        ),
    ] = False,
    curve_steps: Annotated[
        int,
        typer.Option(
            "--curve-steps",
            help="Samples per curve segment used by the geometry engine (4-1024)",
            min=4,
            max=1024,
        ),
    ] = 64,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Combine selected shapes of a scene into one new path.

    The selected objects are folded left to right with the boolean
    operation. Curves survive the operation wherever it does not cut them.
    The result replaces the selected objects at the draw-order position of
    the first one.

    Example:
        curvebridge scene.json --select a --select b

    This will create scene-combined.json with objects a and b replaced by
    their union.
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    # Validate input file exists
    if not scene_file.exists():
        print_error(
            f"Input file not found: {scene_file}",
            details=f"The file '{scene_file}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not scene_file.is_file():
        print_error(
            f"Input path is not a file: {scene_file}",
            details="Please provide a path to a JSON scene file.",
        )
        raise typer.Exit(code=1)

    # Validate operation argument
    try:
        boolean_op = BooleanOperation(operation.lower())
    except ValueError:
        print_error(
            f"Invalid operation: {operation}",
            details="Valid values: union, intersection, difference, xor",
        )
        raise typer.Exit(code=1)

    try:
        logging_config = LoggingConfig(
            log_file=log_file,
            log_level="DEBUG" if verbose else log_level,
        )
    except ValidationError:
        print_error(
            f"Invalid log level: {log_level}",
            details="Valid values: DEBUG, INFO, WARNING, ERROR, CRITICAL",
        )
        raise typer.Exit(code=1)

    configure_logging(
        log_file=logging_config.log_file,
        console_level=logging_config.log_level,
        file_level=logging_config.file_log_level,
        quiet=quiet,
    )

    # Print header
    if not quiet:
        print_header(__version__)

    try:
        if not quiet:
            print_step("Loading scene")

        reader = SceneReader(scene_file)
        scene = reader.load()

        selected = list(select) if select else scene.ids
        try:
            primitives = scene.select(selected)
        except KeyError as e:
            print_error(
                f"Unknown object id: {e.args[0]}",
                details=f"Objects in scene: {', '.join(scene.ids) or '(none)'}",
            )
            raise typer.Exit(code=1) from None

        if not quiet:
            print_scene_info(str(scene_file), len(scene.objects), selected)
            print_selection(selected, verbose)

        if len(primitives) < 2:
            if not quiet:
                print_nothing_to_do("Fewer than two objects selected")
            raise typer.Exit(code=0)

        settings = CurveBridgeSettings(
            geometry=GeometryConfig(curve_steps=curve_steps),
            view=scene.view_config(),
            logging=logging_config,
        )

        if not quiet:
            print_step(f"Combining ({boolean_op.value})")

        op_logger = OperationLogger()
        result = boolean_combine(
            primitives,
            operation=boolean_op,
            settings=settings,
            operation_logger=op_logger,
        )

        if result is None:
            if not quiet:
                if op_logger.stats.shapes_imported < 2:
                    print_nothing_to_do("Fewer than two convertible objects selected")
                else:
                    print_nothing_to_do("The result is empty")
            raise typer.Exit(code=0)

        if not quiet:
            path_data = result_path_data(result) if (dry_run or verbose) else None
            print_result(result, op_logger.stats, path_data)

        if dry_run:
            if not quiet:
                console.print(f"\n[bold green]{SYM_OK} Dry run complete[/bold green] – no changes made")
            raise typer.Exit(code=0)

        scene.replace_with_result(result.source_ids, result)
        actual_output_path = output or SceneWriter.get_combined_path(scene_file)
        SceneWriter(actual_output_path).save(scene)

        svg_note = None
        if svg is not None:
            try:
                write_svg_document(
                    result.commands,
                    svg,
                    offset=(result.offset_x, result.offset_y),
                    style=result.style,
                    bounds=result.bounds,
                )
            except OSError as e:
                raise SceneSaveError(str(svg), str(e)) from e
            svg_note = f"SVG: {svg}"

        if not quiet:
            print_success(str(actual_output_path), op_logger.stats.duration_ms, svg_note)

    except SceneLoadError as e:
        print_error(f"Could not load scene: {e.reason}")
        raise typer.Exit(code=1)
    except SceneSaveError as e:
        print_error(f"Could not save output: {e.reason}")
        raise typer.Exit(code=1)
    except CurveBridgeError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
