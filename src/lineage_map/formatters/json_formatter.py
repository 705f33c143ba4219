"""JSON output formatter."""

import json
from typing import Dict, Optional, List, Set
from ..core.models import LayoutResult


class JSONFormatter:
    """Formats layout results as JSON."""
    
    def __init__(self, indent: Optional[int] = 2):
        """
        Initialize JSON formatter.
        
        Args:
            indent: JSON indentation level (None for compact output)
        """
        self.indent = indent
    
    def _dumps(self, data) -> str:
        return json.dumps(data, indent=self.indent, ensure_ascii=False)
    
    def format(self, result: LayoutResult) -> str:
        """
        Format layout result as JSON string.
        
        Args:
            result: LayoutResult to format
            
        Returns:
            JSON string representation
        """
        return self._dumps(result.to_dict())
    
    def format_to_file(self, result: LayoutResult, file_path: str) -> None:
        """
        Format layout result and write to file.
        
        Args:
            result: LayoutResult to format
            file_path: Output file path
        """
        json_str = self.format(result)
        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(json_str)
    
    def format_levels_only(self, result: LayoutResult) -> str:
        """Format table edges and levels only."""
        data = result.to_dict()
        return self._dumps({"table_edges": data["table_edges"], "levels": data["levels"]})
    
    def format_validation_only(self, validation_errors: Dict[str, List[str]]) -> str:
        """Format a validation report."""
        return self._dumps({
            "valid": not validation_errors,
            "validation_errors": {k: list(v) for k, v in validation_errors.items()}
        })
    
    def format_upstream(self, field_id: str, related: Set[str]) -> str:
        """Format the upstream closure of a field."""
        return self._dumps({
            "field": field_id,
            "upstream": sorted(node_id for node_id in related if node_id != field_id)
        })
