"""Tests for the LineageMap engine state machine."""

import pytest
from lineage_map import LineageMap, LayoutOptions, GraphDataError
from lineage_map.core.models import Position


class TestRender:
    """Test cases for layout passes."""
    
    def test_render_base_expands_all_tables(self, lineage_map, chain_graph):
        result = lineage_map.render_base(chain_graph)
        
        assert result.expanded_tables == {"A", "B", "C", "E"}
        assert lineage_map.current_graph is chain_graph
        assert result.positions["A"] == Position(250, 0)
        assert result.positions["C:c"] == Position(750, 120)
        assert len(result.edge_routes) == 2
        assert not result.has_errors()
    
    def test_render_is_deterministic(self, lineage_map, sample_graph):
        first = lineage_map.render_base(sample_graph)
        second = lineage_map.render(sample_graph)
        
        assert first.to_dict() == second.to_dict()
    
    def test_render_records_validation_errors(self, lineage_map, sample_graph):
        result = lineage_map.render_base(sample_graph)
        
        assert set(result.validation_errors) == {"D:D1"}
        assert lineage_map.validation_errors is result.validation_errors
        assert result.level_of("D") == 2
        assert result.level_of("A") == 1
    
    def test_render_does_not_alias_state(self, lineage_map, chain_graph):
        result = lineage_map.render_base(chain_graph)
        lineage_map.expanded_tables.clear()
        
        assert result.expanded_tables == {"A", "B", "C", "E"}
    
    def test_options_from_mapping(self):
        engine = LineageMap({"tableWidth": 200, "levelPadding": 0})
        
        assert engine.options.table_width == 200
        assert engine.options.level_padding == LayoutOptions().level_padding
    
    def test_invalid_options(self):
        with pytest.raises(GraphDataError):
            LineageMap({"tableWidth": -1})


class TestTableExpansion:
    """Test cases for expand/collapse."""
    
    def test_collapse_rerenders(self, lineage_map, chain_graph):
        lineage_map.render_base(chain_graph)
        result = lineage_map.toggle_table_expansion("A")
        
        assert "A" not in result.expanded_tables
        assert result.positions["A"] == Position(250, 12)
        assert result.positions["A:a"] == Position(0, 0)
        # B no longer has a positioned source, so it follows the level cursor
        assert result.positions["B"] == Position(500, 0)
        assert [route.edge_id for route in result.edge_routes] == ["1"]
    
    def test_toggle_twice_restores_layout(self, lineage_map, chain_graph):
        first = lineage_map.render_base(chain_graph)
        lineage_map.toggle_table_expansion("B")
        restored = lineage_map.toggle_table_expansion("B")
        
        assert restored.positions == first.positions
    
    def test_toggle_without_graph(self, lineage_map):
        assert lineage_map.toggle_table_expansion("A") is None
        assert lineage_map.expanded_tables == {"A"}
    
    def test_table_relationships_toggle(self, lineage_map, chain_graph):
        lineage_map.render_base(chain_graph)
        assert [edge.id for edge in lineage_map.visible_edges()] == ["0", "1"]
        
        assert lineage_map.toggle_table_relationships() is True
        edges = lineage_map.visible_edges()
        assert [(edge.source, edge.target) for edge in edges[:2]] == [("A", "B"), ("B", "C")]
        assert len(edges) == 4
        
        assert lineage_map.toggle_table_relationships() is False


class TestInteraction:
    """Test cases for hover and click handling."""
    
    def test_hover_highlights_upstream(self, lineage_map, chain_graph):
        lineage_map.render_base(chain_graph)
        
        assert lineage_map.handle_field_hover("C:c") == {"C:c", "B:b", "A:a"}
        edges = chain_graph.edges
        assert all(lineage_map.is_edge_highlighted(edge) for edge in edges)
        
        lineage_map.handle_field_hover("B:b")
        assert lineage_map.is_edge_highlighted(edges[0])
        assert not lineage_map.is_edge_highlighted(edges[1])
    
    def test_hover_clear(self, lineage_map, chain_graph):
        lineage_map.render_base(chain_graph)
        lineage_map.handle_field_hover("C:c")
        
        assert lineage_map.handle_field_hover(None) == set()
    
    def test_highlight_carried_into_render(self, lineage_map, chain_graph):
        lineage_map.current_graph = chain_graph
        lineage_map.handle_field_hover("B:b")
        result = lineage_map.render_base(chain_graph)
        
        assert result.highlighted_fields == {"A:a", "B:b"}
    
    def test_click_selects_and_deselects(self, lineage_map, sample_graph):
        lineage_map.render_base(sample_graph)
        
        details = lineage_map.handle_field_click("D:D1")
        assert details is not None
        assert details.transformation == "Field A7 + Field C1"
        assert len(details.errors) == 2
        assert lineage_map.selected_field == "D:D1"
        
        assert lineage_map.handle_field_click("D:D1") is None
        assert lineage_map.selected_field is None
    
    def test_click_field_without_content(self, lineage_map, sample_graph):
        lineage_map.render_base(sample_graph)
        
        assert lineage_map.handle_field_click("A:A1") is None
        assert lineage_map.selected_field == "A:A1"
    
    def test_click_table_deselects(self, lineage_map, sample_graph):
        lineage_map.render_base(sample_graph)
        lineage_map.handle_field_click("D:D1")
        
        assert lineage_map.handle_field_click("A") is None
        assert lineage_map.selected_field is None
    
    def test_click_unknown_id_deselects(self, lineage_map, sample_graph):
        lineage_map.render_base(sample_graph)
        lineage_map.handle_field_click("D:D3")
        
        assert lineage_map.handle_field_click("missing") is None
        assert lineage_map.selected_field is None
    
    def test_clear_selection(self, lineage_map, sample_graph):
        lineage_map.render_base(sample_graph)
        lineage_map.handle_field_click("D:D3")
        lineage_map.clear_selection()
        
        assert lineage_map.selected_field is None
    
    def test_describe_table(self, lineage_map, sample_graph):
        lineage_map.render_base(sample_graph)
        
        assert lineage_map.describe_table("A").note == "Raw orders"
        assert lineage_map.describe_table("A:A1") is None


class TestFieldPosition:
    """Test cases for field anchor positions."""
    
    def test_vertical_center(self, lineage_map, chain_graph):
        lineage_map.render_base(chain_graph)
        
        assert lineage_map.get_field_position("A:a") == Position(250, 50)
    
    def test_unknown_field(self, lineage_map, chain_graph):
        lineage_map.render_base(chain_graph)
        
        assert lineage_map.get_field_position("missing") is None


class TestDestroy:
    """Test cases for releasing engine state."""
    
    def test_destroy_clears_state(self, lineage_map, chain_graph):
        lineage_map.render_base(chain_graph)
        lineage_map.handle_field_hover("C:c")
        lineage_map.handle_field_click("B:b")
        lineage_map.destroy()
        
        assert lineage_map.current_graph is None
        assert lineage_map.last_result is None
        assert lineage_map.expanded_tables == set()
        assert lineage_map.highlighted_fields == set()
        assert lineage_map.selected_field is None
        assert lineage_map.positions == {}
        assert lineage_map.visible_edges() == []
