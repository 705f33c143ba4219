"""Checks field transformations against the edges feeding each field."""

from typing import Dict, List

from .models import Graph, FieldNode
from ..utils.regex_patterns import extract_field_references
from ..utils.logging_config import get_logger

logger = get_logger('validator')


def validate_transformations(graph: Graph) -> Dict[str, List[str]]:
    """
    Compare each field's transformation with its incoming edges.
    
    A field referenced in the transformation without an edge into the field,
    and an edge source never referenced in the transformation, each produce
    one message. Fields without a transformation are not checked.
    
    Args:
        graph: Graph to validate (not modified)
        
    Returns:
        Mapping of field id to messages; fields without problems are absent
    """
    incoming: Dict[str, Dict[str, None]] = {}
    for edge in graph.field_edges:
        incoming.setdefault(edge.target, {})[edge.source] = None
    
    report: Dict[str, List[str]] = {}
    for node in graph.nodes:
        if not isinstance(node, FieldNode) or not node.transformation:
            continue
        
        referenced = extract_field_references(node.transformation)
        sources = incoming.get(node.id, {})
        errors = []
        
        for field_ref in referenced:
            if field_ref not in sources:
                errors.append(
                    f'Field "{field_ref}" is referenced in transformation but no edge connects it to "{node.id}".'
                )
        
        for source in sources:
            if source not in referenced:
                errors.append(f'Field "{source}" has an edge but is not used in the transformation.')
        
        if errors:
            report[node.id] = errors
    
    logger.debug(f"Validated transformations: {len(report)} fields with discrepancies")
    return report
