"""Tests for position calculation."""

import pytest
from lineage_map import Graph, LayoutOptions, assign_levels, compute_positions
from lineage_map.core.models import Position, TableLevel
from lineage_map.core.positions import table_height, optimal_incoming_y


def _all_tables(graph):
    return {table.id for table in graph.tables}


@pytest.fixture
def fan_in_graph():
    """A and B each feed D:d from one field."""
    return Graph.from_dict({
        "nodes": [
            {"id": "A", "type": "table", "name": "A"},
            {"id": "A:a", "type": "field", "name": "a"},
            {"id": "B", "type": "table", "name": "B"},
            {"id": "B:b", "type": "field", "name": "b"},
            {"id": "D", "type": "table", "name": "D"},
            {"id": "D:d", "type": "field", "name": "d", "transformation": "A:a + B:b"},
        ],
        "edges": [
            {"source": "A:a", "target": "D:d"},
            {"source": "B:b", "target": "D:d"},
        ]
    })


class TestTableHeight:
    """Test cases for effective table height."""
    
    def test_collapsed(self, sample_graph):
        assert table_height(sample_graph, "A", set(), LayoutOptions()) == 40
    
    def test_expanded_adds_field_rows(self, sample_graph):
        # 4 fields * (20 + 4)
        assert table_height(sample_graph, "A", {"A"}, LayoutOptions()) == 40 + 96


class TestComputePositions:
    """Test cases for compute_positions."""
    
    def test_chain_expanded(self, chain_graph):
        levels = assign_levels(chain_graph)
        positions = compute_positions(chain_graph, levels, _all_tables(chain_graph))
        
        # Isolated E (no fields) is centered against the tallest level
        assert positions["E"] == Position(0, 12)
        assert positions["A"] == Position(250, 0)
        assert positions["A:a"] == Position(250, 40)
        # Single upstream table: anchored to the source field
        assert positions["B"] == Position(500, 40)
        assert positions["B:b"] == Position(500, 80)
        assert positions["C"] == Position(750, 80)
        assert positions["C:c"] == Position(750, 120)
    
    def test_fan_in_uses_average_of_sources(self, fan_in_graph):
        levels = assign_levels(fan_in_graph)
        positions = compute_positions(fan_in_graph, levels, _all_tables(fan_in_graph))
        
        assert positions["A"] == Position(250, 0)
        assert positions["A:a"] == Position(250, 40)
        # Stacked under A: 0 + 64 + 50
        assert positions["B"] == Position(250, 114)
        assert positions["B:b"] == Position(250, 154)
        assert positions["D"] == Position(500, (40 + 154) / 2)
        assert positions["D:d"] == Position(500, 97 + 40)
    
    def test_single_upstream_table_uses_minimum(self):
        graph = Graph.from_dict({
            "nodes": [
                {"id": "A", "type": "table", "name": "A"},
                {"id": "A:a1", "type": "field", "name": "a1"},
                {"id": "A:a2", "type": "field", "name": "a2"},
                {"id": "D", "type": "table", "name": "D"},
                {"id": "D:d", "type": "field", "name": "d"},
            ],
            "edges": [
                {"source": "A:a2", "target": "D:d"},
                {"source": "A:a1", "target": "D:d"},
            ]
        })
        positions = compute_positions(graph, assign_levels(graph), {"A", "D"})
        
        assert positions["A:a1"].y == 40
        assert positions["A:a2"].y == 64
        assert positions["D"].y == 40
    
    def test_collapsed_sources_fall_back_to_cursor(self, fan_in_graph):
        levels = assign_levels(fan_in_graph)
        positions = compute_positions(fan_in_graph, levels, set())
        
        assert positions["A"] == Position(250, 0)
        assert positions["B"] == Position(250, 90)
        # (180 - 90) / 2, no positioned source fields to anchor to
        assert positions["D"] == Position(500, 45)
        assert positions["A:a"] == Position(0, 0)
        assert positions["D:d"] == Position(0, 0)
    
    def test_every_node_positioned(self, sample_graph):
        positions = compute_positions(sample_graph, assign_levels(sample_graph), {"A"})
        
        assert set(positions) == {node.id for node in sample_graph.nodes}
    
    def test_options_change_spacing(self, chain_graph):
        options = LayoutOptions(table_width=200, level_padding=50)
        positions = compute_positions(chain_graph, assign_levels(chain_graph), set(), options)
        
        assert positions["A"].x == 250
        assert positions["C"].x == 750
        
        options = LayoutOptions(table_width=100, level_padding=20)
        positions = compute_positions(chain_graph, assign_levels(chain_graph), set(), options)
        
        assert positions["B"].x == 240
    
    def test_deterministic(self, sample_graph):
        levels = assign_levels(sample_graph)
        expanded = {"A", "D"}
        
        first = compute_positions(sample_graph, levels, expanded)
        second = compute_positions(sample_graph, assign_levels(sample_graph), set(expanded))
        
        assert first == second
    
    def test_unknown_table_in_levels_is_skipped(self, chain_graph):
        levels = assign_levels(chain_graph) + [TableLevel(id="ghost", level=1)]
        positions = compute_positions(chain_graph, levels, set())
        
        assert "ghost" not in positions
        assert positions["A"].x == 250
    
    def test_unresolved_field_defaults_to_origin(self):
        graph = Graph.from_dict({
            "nodes": [
                {"id": "T", "type": "table", "name": "T"},
                {"id": "orphan:f", "type": "field", "name": "f"},
            ]
        })
        positions = compute_positions(graph, assign_levels(graph), {"T"})
        
        assert positions["orphan:f"] == Position(0, 0)
    
    def test_empty_graph(self):
        assert compute_positions(Graph(), [], set()) == {}


class TestOptimalIncomingY:
    """Test cases for the first-table anchor."""
    
    def test_no_incoming_edges(self, chain_graph):
        assert optimal_incoming_y(chain_graph, "A", {}) is None
    
    def test_sources_without_positions(self, chain_graph):
        assert optimal_incoming_y(chain_graph, "B", {}) is None
    
    def test_distinct_sources_counted_once(self, sample_graph):
        positions = {
            "A:A1": Position(0, 10),
            "A:A7": Position(0, 30),
            "A:A9": Position(0, 50),
            "B:B1": Position(0, 100),
        }
        # A:A7 feeds two fields of D but is averaged once
        assert optimal_incoming_y(sample_graph, "D", positions) == pytest.approx((10 + 30 + 50 + 100) / 4)
