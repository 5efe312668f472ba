"""Typer-based CLI for exploring class and component hierarchies."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__, config, config_manager
from .analyzer import ClassAnalyzer
from .cli_groups import config_grp, tags_grp
from .file_index import ReadFailure
from .graph_export import export_dot, export_json
from .models import HierarchyNode
from .tree_view import HierarchyView, group_usages_by_tag, render_tree

console = Console()

app = typer.Typer(
    help="🌳 ClassTree CLI — class & component hierarchy explorer.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(config_grp, name="config")
app.add_typer(tags_grp, name="tags")

# The tree most recently shown by this process
view = HierarchyView()

ROOT_OPTION = typer.Option(
    Path("."), "--root", "-r", exists=True, file_okay=False, help="Project root to scan."
)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"ClassTree CLI v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Log scan details to stderr."),
):
    """ClassTree CLI: lexical inheritance and composition explorer."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _analyzer(root: Path) -> ClassAnalyzer:
    return ClassAnalyzer(root, config.load_settings())


def _relative(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def _show(root_node: HierarchyNode, as_json: bool, show_paths: bool) -> None:
    view.refresh(root_node)
    if as_json:
        typer.echo(json.dumps(root_node.to_dict(), indent=2))
    else:
        console.print(render_tree(root_node, show_paths=show_paths))


@app.command("hierarchy")
def hierarchy(
    name: str = typer.Argument(..., help="Class or component name to use as the root."),
    root: Path = ROOT_OPTION,
    as_json: bool = typer.Option(False, "--json", help="Print the tree as JSON."),
    show_paths: bool = typer.Option(False, "--paths", "-p", help="Show file paths under entities."),
):
    """Build and display the hierarchy below a class or component."""
    analyzer = _analyzer(root)
    root_node = analyzer.build_hierarchy(name)
    if root_node is None:
        typer.echo(f"❌ Could not build hierarchy for class '{name}'", err=True)
        raise typer.Exit(code=1)
    _show(root_node, as_json, show_paths)


@app.command("locate")
def locate(
    name: str = typer.Argument(..., help="Class or component name."),
    root: Path = ROOT_OPTION,
):
    """Print the file that declares a class or component."""
    found = _analyzer(root).locate(name)
    if found is None:
        typer.echo(f"❌ '{name}' is not declared in any scanned file.", err=True)
        raise typer.Exit(code=1)
    typer.echo(str(found))


@app.command("classes")
def classes(
    folder: Optional[str] = typer.Argument(None, help="Folder name to filter on (default from config)."),
    root: Path = ROOT_OPTION,
):
    """List candidate root classes and components inside a folder."""
    if folder is not None and (not folder.strip() or "/" in folder or "\\" in folder):
        raise typer.BadParameter("Folder must be a single directory name.")
    analyzer = _analyzer(root)
    folder_name = folder or analyzer.settings.default_folder
    entities = analyzer.classes_in_folder(folder_name)
    if not entities:
        typer.echo(f"No classes found in folder '{folder_name}'")
        raise typer.Exit(code=0)

    table = Table(title=f"Classes in '{folder_name}'")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("File", style="dim")
    for entity in entities:
        table.add_row(entity.name, _relative(entity.file_path, analyzer.project_root))
    console.print(table)


@app.command("main-class")
def main_class(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="File open in the editor."),
    selection: Optional[str] = typer.Option(None, "--selection", "-s", help="Selected text to use as the class name."),
    root: Path = ROOT_OPTION,
    as_json: bool = typer.Option(False, "--json", help="Print the tree as JSON."),
):
    """Build the hierarchy for the class declared in (or named after) a file."""
    analyzer = _analyzer(root)
    try:
        tried, root_node = analyzer.build_from_file(file.resolve(), selection)
    except ReadFailure as exc:
        raise typer.BadParameter(str(exc))

    if not tried:
        typer.echo("❌ Could not detect a class in the current file", err=True)
        raise typer.Exit(code=1)
    if root_node is None:
        if selection:
            typer.echo(f"❌ '{selection.strip()}' does not appear to be a valid class", err=True)
        else:
            typer.echo("❌ Could not determine class hierarchy", err=True)
        raise typer.Exit(code=1)
    _show(root_node, as_json, show_paths=False)


@app.command("export")
def export(
    name: str = typer.Argument(..., help="Root class or component name."),
    fmt: str = typer.Option("dot", "--format", "-f", help="Export format: dot or json."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file path."),
    root: Path = ROOT_OPTION,
):
    """Export a hierarchy to Graphviz DOT or JSON."""
    fmt = fmt.lower()
    if fmt not in {"dot", "json"}:
        raise typer.BadParameter("Format must be one of: dot, json")

    analyzer = _analyzer(root)
    root_node = analyzer.build_hierarchy(name)
    if root_node is None:
        typer.echo(f"❌ Could not build hierarchy for class '{name}'", err=True)
        raise typer.Exit(code=1)

    if output is None:
        output = Path.cwd() / f"{name}_hierarchy.{fmt}"

    if fmt == "dot":
        export_dot(root_node, output, project_root=analyzer.project_root)
    else:
        export_json(root_node, output)
    typer.echo(f"Exported hierarchy to {output}")


# ── Tags group ───────────────────────────────────────────────


@tags_grp.command("list")
def tags_list(root: Path = ROOT_OPTION):
    """Summarise every custom tag used in markup files."""
    analyzer = _analyzer(root)
    prefix = analyzer.settings.tag_prefix
    usages = analyzer.all_tag_usages()
    if not usages:
        typer.echo(f"No custom <{prefix}-*> tags found in the workspace")
        raise typer.Exit(code=0)

    table = Table(title=f"Custom <{prefix}-*> tags")
    table.add_column("Tag", style="cyan", no_wrap=True)
    table.add_column("Usages", justify="right")
    table.add_column("Files", justify="right")
    for tag_name, group in group_usages_by_tag(usages).items():
        files = {u.file_path for u in group}
        table.add_row(tag_name, str(len(group)), str(len(files)))
    console.print(table)


@tags_grp.command("show")
def tags_show(
    tag: str = typer.Argument(..., help="Tag name, e.g. 'header', 'c-header' or '<c-header>'."),
    root: Path = ROOT_OPTION,
):
    """Show every usage of one custom tag as path:line locations."""
    analyzer = _analyzer(root)
    prefix = analyzer.settings.tag_prefix
    wanted = tag.strip().strip("<>")
    if wanted.startswith(f"{prefix}-"):
        wanted = wanted[len(prefix) + 1:]

    usages = group_usages_by_tag(analyzer.all_tag_usages()).get(wanted, [])
    if not usages:
        typer.echo(f"No usages of <{prefix}-{wanted}> found")
        raise typer.Exit(code=0)

    for usage in usages:
        location = f"{_relative(usage.file_path, analyzer.project_root)}:{usage.line}"
        typer.echo(f"{location}  {usage.context}")


# ── Config group ─────────────────────────────────────────────


@config_grp.command("show")
def config_show():
    """Show the effective scan configuration."""
    settings = config.load_settings()
    table = Table(title=f"Scan settings ({config_manager.CONFIG_FILE})")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value")
    table.add_row("default_folder", settings.default_folder)
    table.add_row("tag_prefix", settings.tag_prefix)
    table.add_row("import_namespace", settings.import_namespace)
    table.add_row("logic_extensions", " ".join(settings.logic_extensions))
    table.add_row("markup_extensions", " ".join(settings.markup_extensions))
    console.print(table)


@config_grp.command("set-folder")
def config_set_folder(folder: str = typer.Argument(..., help="Default folder for 'ct classes'.")):
    """Set the default folder filter."""
    if not folder.strip() or "/" in folder or "\\" in folder:
        raise typer.BadParameter("Folder must be a single directory name.")
    if not config_manager.save_scan_config(default_folder=folder.strip()):
        typer.echo("❌ Could not save configuration.", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Default folder set to '{folder.strip()}'.")


@config_grp.command("set-prefix")
def config_set_prefix(
    prefix: str = typer.Argument(..., help="Custom tag prefix, e.g. 'c' for <c-*> tags."),
    namespace: Optional[str] = typer.Option(None, "--namespace", help="Import namespace (defaults to the prefix)."),
):
    """Set the custom tag prefix and component import namespace."""
    if not re.fullmatch(r"[A-Za-z][A-Za-z0-9_]*", prefix):
        raise typer.BadParameter("Prefix must be an identifier such as 'c' or 'lightning'.")
    if not config_manager.save_scan_config(tag_prefix=prefix, import_namespace=namespace or prefix):
        typer.echo("❌ Could not save configuration.", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Tag prefix set to '{prefix}'.")


@config_grp.command("reset")
def config_reset():
    """Reset scan settings to defaults."""
    config_manager.clear_scan_config()
    typer.echo("Scan settings reset to defaults.")


if __name__ == "__main__":
    app()
