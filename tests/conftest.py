"""Pytest configuration and fixtures."""

import pytest
from lineage_map import Graph, LineageMap


@pytest.fixture
def sample_graph_data():
    """Graph data in the component prop shape: tables A-D feeding D:D1 and D:D3."""
    return {
        "nodes": [
            {"id": "A", "type": "table", "name": "Table A", "note": "Raw orders"},
            {"id": "A:A1", "type": "field", "name": "Field A1"},
            {"id": "A:A2", "type": "field", "name": "Field A2"},
            {"id": "A:A7", "type": "field", "name": "Field A7"},
            {"id": "A:A9", "type": "field", "name": "Field A9"},
            {"id": "B", "type": "table", "name": "Table B"},
            {"id": "B:B1", "type": "field", "name": "Field B1"},
            {"id": "C", "type": "table", "name": "Table C"},
            {"id": "C:C1", "type": "field", "name": "Field C1"},
            {"id": "D", "type": "table", "name": "Table D"},
            {"id": "D:D1", "type": "field", "name": "Field D1", "transformation": "A:A7 + C:C1"},
            {"id": "D:D3", "type": "field", "name": "Field D3", "transformation": "A:A7 + A:A9"},
        ],
        "edges": [
            {"source": "A:A1", "target": "D:D1"},
            {"source": "B:B1", "target": "D:D1"},
            {"source": "C:C1", "target": "D:D1"},
            {"source": "A:A7", "target": "D:D1"},
            {"source": "A:A7", "target": "D:D3"},
            {"source": "A:A9", "target": "D:D3"},
        ]
    }


@pytest.fixture
def sample_graph(sample_graph_data):
    return Graph.from_dict(sample_graph_data)


@pytest.fixture
def chain_graph():
    """A -> B -> C through one field each, plus an isolated table E without fields."""
    return Graph.from_dict({
        "nodes": [
            {"id": "A", "type": "table", "name": "Orders"},
            {"id": "A:a", "type": "field", "name": "order_id"},
            {"id": "B", "type": "table", "name": "Staging"},
            {"id": "B:b", "type": "field", "name": "order_key", "transformation": "A:a"},
            {"id": "C", "type": "table", "name": "Mart"},
            {"id": "C:c", "type": "field", "name": "order_ref", "transformation": "B:b"},
            {"id": "E", "type": "table", "name": "Lookup"},
        ],
        "edges": [
            {"source": "A:a", "target": "B:b"},
            {"source": "B:b", "target": "C:c"},
        ]
    })


@pytest.fixture
def cyclic_graph():
    """Tables X and Y feeding each other."""
    return Graph.from_dict({
        "nodes": [
            {"id": "X", "type": "table", "name": "X"},
            {"id": "X:x", "type": "field", "name": "x"},
            {"id": "Y", "type": "table", "name": "Y"},
            {"id": "Y:y", "type": "field", "name": "y"},
        ],
        "edges": [
            {"source": "X:x", "target": "Y:y"},
            {"source": "Y:y", "target": "X:x"},
        ]
    })


@pytest.fixture
def lineage_map():
    """Engine with default options."""
    return LineageMap()
