"""Loading graph data from JSON."""

import json
from pathlib import Path
from typing import Union

from .models import Graph
from ..utils.validation import GraphDataError, validate_file_path
from ..utils.logging_config import get_logger

logger = get_logger('loader')


def load_graph_json(text: str) -> Graph:
    """
    Parse a graph from a JSON document.
    
    Raises:
        GraphDataError: If the text is not JSON or not a usable graph
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise GraphDataError(f"Invalid graph JSON: {e}") from e
    return Graph.from_dict(data)


def load_graph(file_path: Union[str, Path]) -> Graph:
    """
    Read a graph from a JSON file.
    
    Raises:
        GraphDataError: If the path is invalid or the content is not a usable graph
        OSError: If the file cannot be read
    """
    error = validate_file_path(str(file_path))
    if error:
        raise GraphDataError(error)
    
    logger.debug(f"Loading graph from {file_path}")
    text = Path(file_path).read_text(encoding='utf-8')
    graph = load_graph_json(text)
    logger.info(f"Loaded graph from {file_path}: {len(graph.nodes)} nodes, {len(graph.edges)} edges")
    return graph
