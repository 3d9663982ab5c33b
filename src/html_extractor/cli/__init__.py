from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import AppConfig, load_config
from ..core import ExtractionService
from ..errors import ExtractionError
from ..models import ClassifierPolicy, ExtractionResult, ExtractOptions, RenderStyle

console = Console()

app = typer.Typer(help="Extract text from zipped html files.", add_completion=False)


def _load_config(path: Path | None, log_file: Path | None) -> AppConfig:
    cfg = load_config(path)
    if log_file is not None:
        cfg.runtime.log_file = log_file
    return cfg


def _print_scan(result: ExtractionResult) -> None:
    table = Table(title=f"Entries in {result.options.input_file.name}")
    table.add_column("Entry", no_wrap=True)
    table.add_column("Kind", no_wrap=True)
    table.add_column("Destination", overflow="fold")
    for outcome in result.outcomes:
        destination = str(outcome.destination) if outcome.destination else "-"
        table.add_row(escape(outcome.name), outcome.kind.value, escape(destination))
    console.print(table)


@app.command()
def extract(
    input_file: Path = typer.Option(..., "-i", "--input", help="Input file."),
    output: tuple[Path, Path] = typer.Option(
        (None, None),
        "-o",
        "--output",
        help=(
            "Two output paths. First is the text file for the extracted html, second is "
            "the directory where the rest of the files will be stored. Defaults are "
            "`html_text.txt` and `rest/`."
        ),
    ),
    width: int | None = typer.Option(
        None, "-w", "--width", min=0, help="Wrap the output text to the given width (0 disables wrapping)."
    ),
    artifacts: bool | None = typer.Option(
        None,
        "--artifacts/--no-artifacts",
        "-a/-A",
        help="Mark each snippet in the output text file with the archive entry it came from.",
    ),
    style: RenderStyle | None = typer.Option(
        None, "-f", "--format", help="Render the html as `trivial` (default), `plain` or `rich` text."
    ),
    policy: ClassifierPolicy | None = typer.Option(
        None,
        "-p",
        "--policy",
        help="Recognise html by file `extension` (default) or `sniff` content with the file utility.",
    ),
    keep_blank_lines: bool = typer.Option(
        False, "--keep-blank-lines", help="Write rendered text verbatim, blank lines included."
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="List how entries would be handled and exit."),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
    log_file: Path | None = typer.Option(None, "--log-file", help="Append a JSON line per entry to this file."),
) -> None:
    cfg = _load_config(config, log_file)
    defaults = cfg.defaults
    output_text_file, output_dir = output or (None, None)
    options = ExtractOptions(
        input_file=input_file,
        output_text_file=output_text_file if output_text_file is not None else defaults.output_text_file,
        output_dir=output_dir if output_dir is not None else defaults.output_dir,
        width=width if width is not None else defaults.width,
        artifacts=artifacts if artifacts is not None else defaults.artifacts,
        style=style or defaults.style,
        policy=policy or defaults.policy,
        compact=defaults.compact and not keep_blank_lines,
        dry_run=dry_run,
    )
    service = ExtractionService(cfg)
    try:
        result = service.extract(options)
    except ExtractionError as exc:
        console.print(f"[red]Extraction failed[/red]: {exc.code.value} - {escape(str(exc))}")
        raise typer.Exit(1) from exc
    if dry_run:
        _print_scan(result)
    console.print(f"[green]Success[/green]: {escape(result.summary)}")
    if result.skipped:
        console.print(f"Skipped {len(result.skipped)} entries with unsafe names.")


if __name__ == "__main__":
    app()
