"""Command-line interface for light-html."""

from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn

from light_html import __version__
from light_html.config import get_settings
from light_html.core.renderer import FileRenderer, RichtextRenderer
from light_html.formats import SOURCE_EXTENSIONS, get_handler
from light_html.formatting.ir import Placeholder, TruncationMode
from light_html.utils.logger import set_log_level

app = typer.Typer(
    name="light-html",
    help="Render light HTML rich text markup to the terminal or to documents.",
    add_completion=False,
)
console = Console()


class OutputFormat(str, Enum):
    """Export formats selectable with --format."""

    TXT = "txt"
    HTML = "html"
    DOCX = "docx"
    PDF = "pdf"


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"light-html v{__version__}")
        raise typer.Exit()


def generate_output_path(
    input_path: Path,
    fmt: OutputFormat,
    output_dir: Optional[Path] = None,
) -> Path:
    """Generate output path with -rendered suffix."""
    output_name = f"{input_path.stem}-rendered.{fmt.value}"

    if output_dir:
        return output_dir / output_name
    return input_path.parent / output_name


def parse_placeholders(values: Optional[list[str]]) -> list[Placeholder]:
    """Parse NAME=VALUE pairs into placeholders, keeping their order."""
    placeholders: list[Placeholder] = []
    for item in values or []:
        symbol, sep, value = item.partition("=")
        if not sep or not symbol:
            raise typer.BadParameter(
                f"expected NAME=VALUE, got {item!r}",
                param_hint="--placeholder",
            )
        placeholders.append(Placeholder(symbol=symbol, value=value))
    return placeholders


def preview_file(input_path: Path, options: dict, verbose: bool) -> bool:
    """Print a rendered markup file to the terminal. Returns True on success."""
    ext = input_path.suffix.lower()
    if ext not in SOURCE_EXTENSIONS:
        console.print(
            f"[yellow]Skipping:[/yellow] {input_path.name} "
            f"(unsupported format: {ext})"
        )
        return False

    try:
        markup = get_handler(ext)().read(input_path)
        renderer = RichtextRenderer.from_markup(markup, **options)
        console.print(renderer.to_rich())
    except Exception as e:
        console.print(f"[red]Error rendering {input_path.name}:[/red] {escape(str(e))}")
        if verbose:
            console.print_exception()
        return False

    if verbose:
        for diagnostic in renderer.diagnostics:
            console.print(f"[yellow]Note:[/yellow] {escape(str(diagnostic))}")
    return True


def process_file(
    input_path: Path,
    output_path: Path,
    options: dict,
    verbose: bool,
) -> bool:
    """Render a single file to an output document. Returns True on success."""
    ext = input_path.suffix.lower()
    if ext not in SOURCE_EXTENSIONS:
        console.print(
            f"[yellow]Skipping:[/yellow] {input_path.name} "
            f"(unsupported format: {ext})"
        )
        return False

    if verbose:
        console.print(f"[blue]Processing:[/blue] {input_path}")
        console.print(f"[blue]Output:[/blue] {output_path}")

    try:
        document = FileRenderer(**options).render_file(input_path, output_path)
    except Exception as e:
        console.print(f"[red]Error processing {input_path.name}:[/red] {escape(str(e))}")
        if verbose:
            console.print_exception()
        return False

    console.print(f"[green]Success:[/green] {output_path}")
    if verbose:
        for diagnostic in document.diagnostics:
            console.print(f"[yellow]Note:[/yellow] {escape(str(diagnostic))}")
    return True


def process_folder(
    folder_path: Path,
    fmt: OutputFormat,
    options: dict,
    verbose: bool,
    recursive: bool = True,
) -> tuple[int, int]:
    """Render all markup files in a folder. Returns (success_count, fail_count)."""
    if not folder_path.is_dir():
        console.print(f"[red]Error:[/red] Not a directory: {folder_path}")
        return 0, 0

    files: list[Path] = []
    for ext in SOURCE_EXTENSIONS:
        if recursive:
            files.extend(folder_path.rglob(f"*{ext}"))
        else:
            files.extend(folder_path.glob(f"*{ext}"))

    # Skip our own output
    files = sorted(f for f in files if not f.stem.endswith("-rendered"))

    if not files:
        console.print(
            f"[yellow]No markup files found in {folder_path}[/yellow]\n"
            f"Supported formats: {', '.join(SOURCE_EXTENSIONS)}"
        )
        return 0, 0

    console.print(f"[blue]Found {len(files)} file(s) to render[/blue]")

    success_count = 0
    fail_count = 0

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Rendering files...", total=len(files))

        for file_path in files:
            progress.update(task, description=f"Rendering {file_path.name}...")
            if process_file(
                file_path, generate_output_path(file_path, fmt), options, verbose
            ):
                success_count += 1
            else:
                fail_count += 1
            progress.advance(task)

    return success_count, fail_count


@app.command()
def main(
    path: Path = typer.Argument(
        ...,
        help="Markup file or folder to render",
        exists=True,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output path (for single file only); its extension picks the format",
    ),
    fmt: Optional[OutputFormat] = typer.Option(
        None,
        "--format",
        "-f",
        help="Export format. Without --output or --format a file is shown in the terminal.",
    ),
    placeholder: Optional[list[str]] = typer.Option(
        None,
        "--placeholder",
        "-p",
        help="Placeholder as NAME=VALUE (repeatable)",
    ),
    marker: Optional[str] = typer.Option(
        None,
        "--marker",
        help="Placeholder marker (default: $, as in $NAME$)",
    ),
    max_length: Optional[int] = typer.Option(
        None,
        "--max-length",
        "-n",
        min=0,
        help="Truncate runs longer than this many characters",
    ),
    cumulative: bool = typer.Option(
        False,
        "--cumulative",
        help="Apply --max-length to the whole text and drop everything after the cut",
    ),
    font_size: Optional[float] = typer.Option(
        None,
        "--font-size",
        min=0.1,
        help="Font size for text without an explicit size",
    ),
    color: Optional[str] = typer.Option(
        None,
        "--color",
        help="Color for text without an explicit color",
    ),
    label: Optional[str] = typer.Option(
        None,
        "--label",
        help="Caption displayed below the rendered text",
    ),
    no_border: bool = typer.Option(
        False,
        "--no-border",
        help="Do not draw a border around the rendered text",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output and show markup diagnostics",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Render light HTML markup.

    Markup: <b>, <i>, <u>, <span style="color: #c00; font-size: 18px">,
    <p>, <h1>-<h6>, and <br> or newlines for line breaks.

    Examples:

        light-html note.txt

        light-html note.txt -p NAME=World

        light-html note.txt -o note.pdf

        light-html note.txt --format docx --max-length 40

        light-html /path/to/folder --format html
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(2)

    set_log_level("DEBUG" if verbose else settings.log_level)

    truncation = TruncationMode.CUMULATIVE if cumulative else settings.truncation
    if cumulative and max_length is None and settings.max_length is None:
        console.print("[yellow]Warning:[/yellow] --cumulative requires --max-length")

    options = {
        "default_font_size": font_size if font_size is not None else settings.default_font_size,
        "default_color": color or settings.default_color,
        "placeholder_marker": marker if marker is not None else settings.placeholder_marker,
        "placeholders": parse_placeholders(placeholder),
        "max_length": max_length if max_length is not None else settings.max_length,
        "truncation": truncation,
        "label": label,
        "has_border": not no_border,
    }

    if path.is_file():
        if output is not None:
            success = process_file(path, output, options, verbose)
        elif fmt is not None:
            success = process_file(
                path, generate_output_path(path, fmt), options, verbose
            )
        else:
            success = preview_file(path, options, verbose)
        raise typer.Exit(0 if success else 1)
    else:
        if output is not None:
            console.print(
                "[yellow]Warning:[/yellow] --output is ignored in folder mode. "
                "Files will be saved alongside originals with -rendered suffix."
            )

        success, fail = process_folder(
            path, fmt or OutputFormat.HTML, options, verbose
        )
        console.print(
            f"\n[bold]Complete:[/bold] {success} succeeded, {fail} failed"
        )
        raise typer.Exit(0 if fail == 0 else 1)


if __name__ == "__main__":
    app()
