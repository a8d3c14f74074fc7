"""CLI application entry point for typefill.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from typefill import __version__
from typefill.cli.output import (
    console,
    print_error,
    print_header,
    print_input_info,
    print_step,
    print_success,
)
from typefill.config import (
    LayoutConfig,
    LoggingConfig,
    PackingConfig,
    RegionConfig,
    RenderConfig,
    TypefillSettings,
)
from typefill.core import LayoutPipeline
from typefill.domain import ToneClass
from typefill.exceptions import (
    ConfigurationError,
    FontLoadError,
    ImageLoadError,
    TypefillError,
    UnmeasurableCharacterError,
)

# Create the Typer app
app = typer.Typer(
    name="typefill",
    help="Lay out text over the dark or light areas of an image.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Typefill[/bold blue] v{__version__}")
        raise typer.Exit()


def default_output_path(image_path: Path) -> Path:
    """Output path next to the input image: {name}-typefill.png."""
    return image_path.with_name(f"{image_path.stem}-typefill.png")


@app.command()
def typefill(
    image: Annotated[
        Path,
        typer.Argument(
            help="Path to the source image",
            show_default=False,
        ),
    ],
    text_file: Annotated[
        Path,
        typer.Argument(
            help="Path to a UTF-8 text file with the text to lay out",
            show_default=False,
        ),
    ],
    font: Annotated[
        Path,
        typer.Option(
            "--font",
            "-f",
            help="TTF/OTF font used for measuring and drawing",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output image path (default: {name}-typefill.png)",
        ),
    ] = None,
    json_output: Annotated[
        Path | None,
        typer.Option(
            "--json",
            help="Also write slots and placements as JSON",
        ),
    ] = None,
    width: Annotated[
        float,
        typer.Option("--width", "-W", help="Output width", min=1.0),
    ] = 800.0,
    height: Annotated[
        float,
        typer.Option("--height", "-H", help="Output height", min=1.0),
    ] = 800.0,
    font_size: Annotated[
        float,
        typer.Option("--font-size", "-s", help="Font size", min=1.0),
    ] = 12.0,
    line_height: Annotated[
        float | None,
        typer.Option("--line-height", help="Line spacing (default: font size)"),
    ] = None,
    threshold: Annotated[
        float,
        typer.Option(
            "--threshold",
            "-t",
            help="Tone threshold between dark and light (0-1)",
            min=0.0,
            max=1.0,
        ),
    ] = 0.5,
    target: Annotated[
        str,
        typer.Option("--target", help="Tonal class receiving text (dark|light)"),
    ] = "dark",
    buffer: Annotated[
        float,
        typer.Option("--buffer", "-b", help="Grow (+) or shrink (-) the target area"),
    ] = 0.0,
    cell_size: Annotated[
        float,
        typer.Option("--cell-size", help="Raster cell size in output units"),
    ] = 4.0,
    no_justify_spaces: Annotated[
        bool,
        typer.Option("--no-justify-spaces", help="Keep spaces at natural width when justifying"),
    ] = False,
    show_slots: Annotated[
        bool,
        typer.Option("--show-slots", help="Outline slots in the output image"),
    ] = False,
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
    """Lay out the text of TEXT_FILE over the dark (or light) areas of IMAGE.

    The target areas are cut into lines of one line height each, read top to
    bottom and left to right, and the text is poured into them with every
    line justified to its full width.

    Example:
        typefill portrait.png speech.txt --font Lato-Black.ttf
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    for path, kind in ((image, "Image"), (text_file, "Text"), (font, "Font")):
        if not path.is_file():
            print_error(
                f"{kind} file not found: {path}",
                details=f"The file '{path}' does not exist or is not a file.",
            )
            raise typer.Exit(code=1)

    try:
        target_class = ToneClass(target.lower())
    except ValueError:
        print_error(f"Invalid target: {target}", details="Valid values: dark, light")
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    try:
        settings = TypefillSettings(
            region=RegionConfig(
                threshold=threshold,
                target=target_class,
                buffer=buffer,
                cell_size=cell_size,
            ),
            layout=LayoutConfig(
                width=width,
                height=height,
                font_size=font_size,
                line_height=line_height,
            ),
            packing=PackingConfig(justify_spaces=not no_justify_spaces),
            render=RenderConfig(show_slots=show_slots),
            logging=LoggingConfig(
                log_file=log_file,
                log_level="INFO" if verbose else log_level,
            ),
        )
    except ValidationError as e:
        print_error("Invalid configuration", details=str(e))
        raise typer.Exit(code=1)

    output_path = output if output is not None else default_output_path(image)

    try:
        text = text_file.read_text(encoding="utf-8")

        if not quiet:
            print_step("Laying out text")
            print_input_info(str(image), str(font), len(text))

        pipeline = LayoutPipeline(settings, quiet=quiet)
        result = pipeline.run_files(
            image_path=image,
            text=text,
            font_path=font,
            output_path=output_path,
            json_path=json_output,
        )

        if not quiet:
            written = [str(output_path)]
            if json_output is not None:
                written.append(str(json_output))
            print_success(
                output_paths=written,
                total_time_s=result.stats.duration_seconds,
                slots=len(result.slots),
                filled=len(result.pack.filled_slots),
                placed=result.pack.placed_count,
                remaining=len(result.pack.remaining),
            )

    except UnicodeDecodeError as e:
        print_error(f"Could not read text file: {e}")
        raise typer.Exit(code=1)
    except ImageLoadError as e:
        print_error(f"Could not load image: {e.reason}")
        raise typer.Exit(code=1)
    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except UnmeasurableCharacterError as e:
        print_error(str(e), details="Choose a font that covers every character of the text.")
        raise typer.Exit(code=1)
    except ConfigurationError as e:
        print_error(f"Invalid configuration: {e}")
        raise typer.Exit(code=1)
    except TypefillError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
