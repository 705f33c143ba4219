"""Rich console output formatter."""

from typing import Dict, List, Optional, Set
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.text import Text
from rich.tree import Tree

from ..core.models import Graph, LayoutResult


class ConsoleFormatter:
    """Formats layout results for rich console output."""
    
    def __init__(self, console: Optional[Console] = None):
        """
        Initialize console formatter.
        
        Args:
            console: Rich console instance (creates new one if None)
        """
        self.console = console or Console()
    
    def format(self, result: LayoutResult) -> None:
        """
        Format and print layout result to console.
        
        Args:
            result: LayoutResult to format
        """
        self.console.print()
        self._print_header(result)
        self._print_table_edges(result)
        self._print_levels(result)
        self._print_positions(result)
        self.print_validation(result.validation_errors)
    
    def _print_header(self, result: LayoutResult) -> None:
        """Print layout header."""
        graph = result.graph
        title = Text("Lineage Map Layout", style="bold blue")
        panel = Panel.fit(
            f"[bold]Tables:[/bold] {len(graph.tables)}   "
            f"[bold]Fields:[/bold] {len(graph.fields)}   "
            f"[bold]Edges:[/bold] {len(graph.edges)}\n"
            f"[bold]Expanded:[/bold] {', '.join(sorted(result.expanded_tables)) or 'none'}",
            title=title,
            border_style="blue"
        )
        self.console.print(panel)
    
    def _print_table_edges(self, result: LayoutResult) -> None:
        """Print inferred table relationships."""
        self.console.print("\n[bold blue]🔗 TABLE RELATIONSHIPS[/bold blue]")
        
        if not result.table_edges:
            self.console.print("  [dim]No table relationships inferred[/dim]")
            return
        
        tree = Tree("📦 Sources")
        nodes = {}
        for edge in result.table_edges:
            if edge.source not in nodes:
                nodes[edge.source] = tree.add(f"[blue]{self._name(result.graph, edge.source)}[/blue]")
            nodes[edge.source].add(f"[green]→ {self._name(result.graph, edge.target)}[/green]")
        self.console.print(tree)
    
    def _print_levels(self, result: LayoutResult) -> None:
        """Print level assignment."""
        self.console.print("\n[bold blue]📊 LEVELS[/bold blue]")
        
        table = Table(show_header=True, header_style="bold")
        table.add_column("Level", justify="right")
        table.add_column("Table")
        table.add_column("Feeds Into")
        
        for table_level in result.levels:
            style = "dim" if table_level.level == 0 else None
            table.add_row(
                str(table_level.level),
                self._name(result.graph, table_level.id),
                ", ".join(table_level.dependencies) or "-",
                style=style
            )
        self.console.print(table)
    
    def _print_positions(self, result: LayoutResult) -> None:
        """Print table positions, with field rows of expanded tables."""
        self.console.print("\n[bold blue]📐 POSITIONS[/bold blue]")
        
        table = Table(show_header=True, header_style="bold")
        table.add_column("Node")
        table.add_column("X", justify="right")
        table.add_column("Y", justify="right")
        
        for table_level in result.levels:
            position = result.positions.get(table_level.id)
            if position is None:
                continue
            table.add_row(f"[bold]{table_level.id}[/bold]", f"{position.x:g}", f"{position.y:g}")
            if table_level.id in result.expanded_tables:
                for field_node in result.graph.fields_of(table_level.id):
                    field_pos = result.positions[field_node.id]
                    table.add_row(f"  {field_node.id}", f"{field_pos.x:g}", f"{field_pos.y:g}")
        self.console.print(table)
    
    def print_validation(self, validation_errors: Dict[str, List[str]]) -> None:
        """Print the transformation validation report."""
        if not validation_errors:
            self.console.print("\n[green]✅ All transformations match their incoming edges[/green]")
            return
        
        lines = []
        for field_id, errors in validation_errors.items():
            lines.append(f"[bold]{field_id}[/bold]")
            lines.extend(f"  • {error}" for error in errors)
        panel = Panel(
            "\n".join(lines),
            title="[yellow]Validation Errors[/yellow]",
            border_style="yellow"
        )
        self.console.print(panel)
    
    def print_upstream(self, graph: Graph, field_id: str, related: Set[str]) -> None:
        """Print the upstream closure of a field."""
        tree = Tree(f"🎯 [green]{self._name(graph, field_id)}[/green] ({field_id})")
        upstream = sorted(node_id for node_id in related if node_id != field_id)
        if not upstream:
            tree.add("[dim]← No upstream fields[/dim]")
        for node_id in upstream:
            tree.add(f"[blue]← {self._name(graph, node_id)}[/blue] ({node_id})")
        self.console.print(tree)
    
    def format_compact(self, result: LayoutResult) -> None:
        """Print one line per level and a validation summary."""
        by_level: Dict[int, List[str]] = {}
        for table_level in result.levels:
            by_level.setdefault(table_level.level, []).append(table_level.id)
        
        for level in sorted(by_level):
            self.console.print(f"[bold]L{level}[/bold]: {', '.join(by_level[level])}")
        
        if result.has_errors():
            self.console.print(f"[yellow]⚠ {len(result.validation_errors)} fields with validation errors[/yellow]")
        else:
            self.console.print("[green]✓ No validation errors[/green]")
    
    def _name(self, graph: Graph, node_id: str) -> str:
        node = graph.get_node(node_id)
        return node.name if node else node_id
