"""Main CLI entry point."""

import logging
import sys
from pathlib import Path
from typing import Any, Callable, Optional, Tuple

import rich.panel
import rich_click as click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from tagjsx import __version__
from tagjsx.compiler.build import BuildSummary, build_project
from tagjsx.compiler.exceptions import JSXCompileError
from tagjsx.compiler.transform import SourceTransformer
from tagjsx.config import TransformOptions, load_options

console = Console()
err_console = Console(stderr=True)

# Astro-like styling configuration (Cyan Theme)
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.STYLE_HELPTEXT_FIRST = True
click.rich_click.STYLE_COMMANDS_TABLE_SHOW_LINES = False
click.rich_click.STYLE_COMMANDS_TABLE_PAD_EDGE = False
click.rich_click.STYLE_COMMANDS_TABLE_BOX = None
click.rich_click.STYLE_OPTIONS_TABLE_EXPAND = False
click.rich_click.STYLE_COMMANDS_TABLE_HEADER = "bold magenta"
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = "Try running 'tagjsx --help' for more information."
click.rich_click.STYLE_OPTIONS_TABLE_BOX = None
click.rich_click.STYLE_COMMANDS_PANEL_BOX = None
click.rich_click.STYLE_OPTIONS_PANEL_BOX = None

# Cyan theme
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_OPTION = "cyan"
click.rich_click.STYLE_SWITCH = "cyan"
click.rich_click.STYLE_METAVAR = "dim white"
click.rich_click.STYLE_USAGE_COMMAND = "cyan"
click.rich_click.STYLE_USAGE = "dim"

click.rich_click.OPTION_GROUPS = {
    "tagjsx": [
        {
            "name": "Global Flags",
            "options": ["--verbose", "--help", "--version"],
        }
    ]
}

click.rich_click.COMMAND_GROUPS = {
    "tagjsx": [
        {
            "name": "Commands",
            "commands": ["compile", "build", "check"],
        }
    ]
}


# Workaround: rich-click wraps tables in Panels which default to expand=True.
# We monkeypatch Panel to default expand=False to allow natural resizing.
original_panel_init = rich.panel.Panel.__init__


def panel_init(self, *args, **kwargs):
    kwargs.setdefault("expand", False)
    original_panel_init(self, *args, **kwargs)


rich.panel.Panel.__init__ = panel_init  # type: ignore[method-assign]


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, markup=False)],
    )


def transform_options(f: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by every command that compiles."""
    f = click.option(
        "--root-accessor/--no-root-accessor",
        default=None,
        help='Address outermost templates as part("root").',
    )(f)
    f = click.option(
        "--no-inject-self",
        "no_inject_self",
        is_flag=True,
        default=False,
        help="Do not declare the receiver in methods that contain JSX.",
    )(f)
    f = click.option(
        "--receiver",
        default=None,
        help="Name of the rendering context variable (default: self).",
    )(f)
    return f


def resolve_options(
    receiver: Optional[str], no_inject_self: bool, root_accessor: Optional[bool]
) -> TransformOptions:
    try:
        options = load_options()
        return options.merged(
            receiver=receiver,
            inject_receiver=False if no_inject_self else None,
            root_accessor=root_accessor,
        )
    except ValueError as e:
        raise click.UsageError(str(e))


def report_error(error: JSXCompileError) -> None:
    err_console.print(
        rich.panel.Panel(
            escape(str(error).rstrip()),
            title="[bold red]JSX compile error[/]",
            border_style="red",
        )
    )


@click.group(
    help=f"""
[bold white on cyan] tagjsx [/] [bold cyan]v{__version__}[/] Compile JSX to tagged templates.

Run [bold cyan]tagjsx compile FILE[/] to print the compiled source.
Run [bold cyan]tagjsx build SRC[/] to compile a whole directory.
"""
)
@click.version_option(__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
def cli(verbose: bool) -> None:
    configure_logging(verbose)


@cli.command(name="compile")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write to this file instead of stdout.",
)
@transform_options
def compile_command(
    file: Path,
    output: Optional[Path],
    receiver: Optional[str],
    no_inject_self: bool,
    root_accessor: Optional[bool],
) -> None:
    """Compile a single file."""
    options = resolve_options(receiver, no_inject_self, root_accessor)
    try:
        code = SourceTransformer(options).transform(
            file.read_text(encoding="utf-8"), str(file)
        )
    except JSXCompileError as e:
        report_error(e)
        sys.exit(1)

    if output is None:
        # plain echo, generated code must not go through rich markup
        click.echo(code, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(code, encoding="utf-8")
    console.print(f"✅ Compiled [cyan]{escape(str(file))}[/] -> {escape(str(output))}")


@cli.command()
@click.argument(
    "src", type=click.Path(exists=True, file_okay=False, path_type=Path)
)
@click.option(
    "--out-dir",
    default="dist",
    type=click.Path(file_okay=False, path_type=Path),
    help="Output directory for compiled files.",
)
@click.option("--watch", is_flag=True, help="Rebuild when source files change.")
@transform_options
def build(
    src: Path,
    out_dir: Path,
    watch: bool,
    receiver: Optional[str],
    no_inject_self: bool,
    root_accessor: Optional[bool],
) -> None:
    """Compile every source file in a directory."""
    options = resolve_options(receiver, no_inject_self, root_accessor)

    console.print(f"🔨 Building [cyan]{escape(str(src))}[/]...")
    summary = _run_build(src, out_dir, options)

    if watch:
        _watch(src, out_dir, options)
    elif not summary.ok:
        sys.exit(1)


@cli.command()
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@transform_options
def check(
    files: Tuple[Path, ...],
    receiver: Optional[str],
    no_inject_self: bool,
    root_accessor: Optional[bool],
) -> None:
    """Compile files without writing output, reporting errors."""
    options = resolve_options(receiver, no_inject_self, root_accessor)
    failures = 0
    for file in files:
        try:
            SourceTransformer(options).transform(file.read_text(encoding="utf-8"), str(file))
        except JSXCompileError as e:
            failures += 1
            report_error(e)
        else:
            console.print(f"[green]✓[/] {escape(str(file))}")

    if failures:
        console.print(f"[bold red]{failures} of {len(files)} files failed[/]")
        sys.exit(1)


def _run_build(src: Path, out_dir: Path, options: TransformOptions) -> BuildSummary:
    summary = build_project(src, out_dir, options)
    for error in summary.errors:
        report_error(error)

    if summary.ok:
        console.print(
            f"✅ Build complete (files={summary.files}, out={escape(str(summary.out_dir))})"
        )
    else:
        console.print(
            f"❌ Build failed (files={summary.files}, errors={len(summary.errors)}, "
            f"out={escape(str(summary.out_dir))})"
        )
    return summary


def _watch(src: Path, out_dir: Path, options: TransformOptions) -> None:
    from watchfiles import watch

    out_root = out_dir.resolve()

    def source_filter(change: Any, path: str) -> bool:
        candidate = Path(path).resolve()
        if candidate == out_root or out_root in candidate.parents:
            return False
        return candidate.suffix in options.extensions

    console.print("👀 Watching for changes, press Ctrl+C to stop")
    for changes in watch(src, watch_filter=source_filter):
        console.print(f"🔄 {len(changes)} file(s) changed, rebuilding...")
        _run_build(src, out_dir, options)


if __name__ == "__main__":
    cli()
