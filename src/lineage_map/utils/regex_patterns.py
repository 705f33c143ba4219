"""Field reference patterns shared by validation and pop-up text."""

import re
from typing import List, Optional, Pattern

from ..core.models import Graph, FieldNode


# Colon-qualified field id inside transformation text, e.g. "orders:amount2"
FIELD_REFERENCE: Pattern = re.compile(r'[a-zA-Z_]+:[a-zA-Z_]+\d*')


def extract_field_references(text: Optional[str]) -> List[str]:
    """Referenced field ids in order of first appearance, without duplicates."""
    if not text:
        return []
    return list(dict.fromkeys(FIELD_REFERENCE.findall(text)))


def substitute_field_names(text: str, graph: Graph) -> str:
    """Replace each reference that resolves to a field with the field's display name."""
    for field_id in extract_field_references(text):
        node = graph.get_node(field_id)
        if isinstance(node, FieldNode):
            # re.sub treats backslashes in the replacement specially
            text = re.sub(rf'\b{re.escape(field_id)}\b', lambda _match, name=node.name: name, text)
    return text
