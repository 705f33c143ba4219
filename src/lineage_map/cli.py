"""Command-line interface for lineage map layout and validation."""

import sys
from typing import Optional, Tuple

import click
from rich.console import Console

from .core.engine import LineageMap
from .core.loader import load_graph
from .core.models import Graph, FieldNode
from .core.validator import validate_transformations
from .core.traversal import related_upstream
from .formatters.json_formatter import JSONFormatter
from .formatters.console_formatter import ConsoleFormatter
from .visualization.visualizer import LineageMapVisualizer
from .utils.validation import GraphDataError
from .utils.logging_config import get_logger


def _load_or_exit(file_path: str, console: Console, logger) -> Graph:
    """Load a graph file, printing the error and exiting with 1 on failure."""
    try:
        return load_graph(file_path)
    except (GraphDataError, OSError) as e:
        logger.error(f"Failed to load graph {file_path}: {str(e)}")
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


@click.group()
@click.version_option(version="1.0.0", prog_name="lineage-map")
def cli():
    """Lineage Map - lay out field-level lineage graphs and check transformations."""
    logger = get_logger('cli')
    logger.info("Lineage Map CLI started")


@cli.command()
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False, readable=True))
@click.option(
    '--collapse', '-c', 'collapsed',
    multiple=True,
    help='Table id to show collapsed (repeatable)'
)
@click.option(
    '--collapse-all',
    is_flag=True,
    help='Show every table collapsed'
)
@click.option(
    '--option', '-O', 'layout_options',
    multiple=True,
    help='Layout option as NAME=VALUE, e.g. tableWidth=250 (repeatable)'
)
@click.option(
    '--output-format', '-o',
    type=click.Choice(['console', 'json', 'compact']),
    default='console',
    help='Output format (default: console)'
)
@click.option(
    '--output-file', '-F',
    type=click.Path(),
    help='Output file path (only for json format)'
)
def layout(
    file_path: str,
    collapsed: Tuple[str, ...],
    collapse_all: bool,
    layout_options: Tuple[str, ...],
    output_format: str,
    output_file: Optional[str]
):
    """Compute levels and positions for a graph file."""
    logger = get_logger('cli.layout')
    console = Console()

    graph = _load_or_exit(file_path, console, logger)

    options = {}
    for item in layout_options:
        name, sep, value = item.partition('=')
        try:
            if not sep:
                raise ValueError(item)
            options[name.strip()] = float(value)
        except ValueError:
            logger.error(f"Invalid layout option: {item}")
            console.print(f"[red]Error:[/red] Layout options must look like NAME=NUMBER, got '{item}'")
            sys.exit(1)

    try:
        lineage_map = LineageMap(options)
    except GraphDataError as e:
        logger.error(f"Invalid layout options: {str(e)}")
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    if not collapse_all:
        lineage_map.expanded_tables.update(
            table.id for table in graph.tables if table.id not in collapsed
        )
    result = lineage_map.render(graph)

    if output_format == 'json':
        formatter = JSONFormatter()
        if output_file:
            try:
                formatter.format_to_file(result, output_file)
                logger.info(f"Results written to file: {output_file}")
                console.print(f"[green]Results written to:[/green] {output_file}")
            except OSError as e:
                logger.error(f"Failed to write output file {output_file}: {str(e)}")
                console.print(f"[red]Error:[/red] Failed to write output file: {e}")
                sys.exit(1)
        else:
            click.echo(formatter.format(result))

    elif output_format == 'compact':
        ConsoleFormatter(console).format_compact(result)

    else:
        ConsoleFormatter(console).format(result)


@cli.command()
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False, readable=True))
@click.option(
    '--output-format', '-o',
    type=click.Choice(['console', 'json']),
    default='console',
    help='Output format (default: console)'
)
def validate(file_path: str, output_format: str):
    """Check field transformations against incoming edges. Exits 1 on discrepancies."""
    logger = get_logger('cli.validate')
    console = Console()

    graph = _load_or_exit(file_path, console, logger)
    report = validate_transformations(graph)

    if output_format == 'json':
        click.echo(JSONFormatter().format_validation_only(report))
    else:
        ConsoleFormatter(console).print_validation(report)

    if report:
        logger.warning(f"Validation found discrepancies in {len(report)} fields")
        sys.exit(1)


@cli.command()
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False, readable=True))
@click.argument('field_id')
@click.option(
    '--output-format', '-o',
    type=click.Choice(['console', 'json']),
    default='console',
    help='Output format (default: console)'
)
def upstream(file_path: str, field_id: str, output_format: str):
    """Show every node feeding into FIELD_ID, transitively."""
    logger = get_logger('cli.upstream')
    console = Console()

    graph = _load_or_exit(file_path, console, logger)
    if not isinstance(graph.get_node(field_id), FieldNode):
        logger.error(f"Unknown field: {field_id}")
        console.print(f"[red]Error:[/red] No field with id '{field_id}'")
        sys.exit(1)

    related = related_upstream(graph, field_id)

    if output_format == 'json':
        click.echo(JSONFormatter().format_upstream(field_id, related))
    else:
        ConsoleFormatter(console).print_upstream(graph, field_id, related)


@cli.command()
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False, readable=True))
@click.option(
    '--output', '-O', 'output_path',
    default='lineage_map',
    help='Output file path without extension (default: lineage_map)'
)
@click.option(
    '--format', '-f', 'output_format',
    type=click.Choice(['png', 'svg', 'pdf', 'jpg', 'jpeg', 'dot']),
    default='png',
    help='Output format (default: png)'
)
@click.option(
    '--highlight', '-H', 'highlight_field',
    help='Field id whose upstream lineage is highlighted'
)
@click.option(
    '--table-edges',
    is_flag=True,
    help='Also draw inferred table relationships'
)
def visualize(
    file_path: str,
    output_path: str,
    output_format: str,
    highlight_field: Optional[str],
    table_edges: bool
):
    """Render a graph file to an image with Graphviz."""
    logger = get_logger('cli.visualize')
    console = Console()

    graph = _load_or_exit(file_path, console, logger)

    lineage_map = LineageMap()
    lineage_map.current_graph = graph
    if highlight_field:
        lineage_map.handle_field_hover(highlight_field)
    result = lineage_map.render_base(graph)

    try:
        output_file = LineageMapVisualizer().render(
            result,
            output_path=output_path,
            output_format=output_format,
            show_table_edges=table_edges
        )
    except Exception as e:
        logger.error(f"Rendering failed: {str(e)}", exc_info=True)
        console.print(f"[red]Error:[/red] Failed to render diagram: {e}")
        sys.exit(1)

    console.print(f"[green]Diagram written to:[/green] {output_file}")


def main():
    """Main entry point."""
    logger = get_logger('main')
    logger.info("Lineage Map starting")
    try:
        cli()
    except Exception as e:
        logger.error(f"Unexpected error in main: {str(e)}", exc_info=True)
        raise
    finally:
        logger.info("Lineage Map session ended")


if __name__ == '__main__':
    main()
