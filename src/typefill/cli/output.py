"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with formatted step, summary and error messages.
"""

from rich.console import Console
from rich.text import Text

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Typefill[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_input_info(image_path: str, font_path: str, char_count: int) -> None:
    """Print the inputs of a run.

    Args:
        image_path: Path to the source image
        font_path: Path to the font file
        char_count: Number of characters in the text
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(image_path)
    console.print(line1)
    line2 = Text("  ")
    line2.append(font_path)
    line2.append(f" {SYM_DOT} {char_count:,} characters")
    console.print(line2)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(
    output_paths: list[str],
    total_time_s: float,
    slots: int,
    filled: int,
    placed: int,
    remaining: int,
) -> None:
    """Print success message with summary.

    Args:
        output_paths: Files written by the run
        total_time_s: Total run time in seconds
        slots: Number of slots generated
        filled: Number of slots that received text
        placed: Number of characters drawn
        remaining: Number of characters that did not fit
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}")

    for path in output_paths:
        line = Text("  ")
        line.append(path, style="bold")
        console.print(line)

    console.print(f"  {slots} slots {SYM_DOT} {filled} filled {SYM_DOT} {placed:,} characters placed")

    if remaining > 0:
        console.print(f"  [yellow]{remaining:,} characters did not fit[/yellow]")
    else:
        console.print("  [green]all text placed[/green]")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
