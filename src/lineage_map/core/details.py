"""Pop-up content for fields and tables."""

from typing import Dict, List, Optional
from dataclasses import dataclass, field

from .models import Graph, FieldNode, TableNode
from ..utils.regex_patterns import substitute_field_names
from ..utils.note_utils import extract_sql_blocks, strip_sql_blocks, format_sql


@dataclass
class FieldDetails:
    """What a field pop-up shows."""
    field_id: str
    name: str
    transformation: Optional[str] = None
    note: Optional[str] = None
    errors: List[str] = field(default_factory=list)

    def lines(self) -> List[str]:
        """Unwrapped text lines in display order."""
        lines = []
        if self.transformation:
            lines.append(f"Transformation: {self.transformation}")
            if self.note:
                lines.append("")
        if self.note:
            lines.append(f"Note: {self.note}")
        if self.errors:
            lines.append("")
            lines.append("Validation Errors:")
            lines.extend(f"• {error}" for error in self.errors)
        return lines


@dataclass
class TableDetails:
    """What a table info pop-up shows."""
    table_id: str
    name: str
    note: Optional[str] = None
    sql_blocks: List[str] = field(default_factory=list)

    def lines(self) -> List[str]:
        lines = []
        if self.note:
            lines.append(f"Note: {self.note}")
        for block in self.sql_blocks:
            lines.append("")
            lines.extend(block.splitlines())
        return lines


def describe_field(graph: Graph, field_id: str,
                   validation_errors: Optional[Dict[str, List[str]]] = None) -> Optional[FieldDetails]:
    """
    Build pop-up content for a field.

    Field ids referenced in the transformation are shown by display name.
    Returns None for unknown ids and non-field nodes.
    """
    node = graph.get_node(field_id)
    if not isinstance(node, FieldNode):
        return None

    transformation = substitute_field_names(node.transformation, graph) if node.transformation else None
    return FieldDetails(
        field_id=node.id,
        name=node.name,
        transformation=transformation,
        note=node.note,
        errors=list((validation_errors or {}).get(node.id, []))
    )


def describe_table(graph: Graph, table_id: str, dialect: str = "trino") -> Optional[TableDetails]:
    """Build pop-up content for a table, pretty-printing SQL fenced in its note."""
    node = graph.get_node(table_id)
    if not isinstance(node, TableNode):
        return None

    note = node.note or ""
    return TableDetails(
        table_id=node.id,
        name=node.name,
        note=strip_sql_blocks(note) or None,
        sql_blocks=[format_sql(block, dialect) for block in extract_sql_blocks(note)]
    )
