"""Lineage map visualizer using Graphviz, pinned to computed positions."""

import copy
from typing import Dict, Optional, List
from graphviz import Digraph

from ..core.models import LayoutResult, FieldNode
from ..utils.logging_config import get_logger

logger = get_logger('visualizer')

# Graphviz measures node geometry in inches
POINTS_PER_INCH = 72.0

TRANSFORMATION_ICON = 'ƒ'
NOTE_ICON = 'ⓘ'
WARNING_ICON = '⚠'


class LineageMapVisualizer:
    """
    Creates diagrams of a computed lineage map layout.

    Every node is pinned to the position the layout pass produced, so the
    diagram matches what an interactive renderer would draw.
    """

    def __init__(self):
        """Initialize the visualizer."""
        self.default_config = {
            'node_style': {
                'table': {
                    'shape': 'box',
                    'style': 'filled,rounded',
                    'fillcolor': '#F1F5F9',
                    'color': '#E2E8F0',
                    'fontname': 'Arial',
                    'fontsize': '13',
                    'fontcolor': '#1E293B'
                },
                'field': {
                    'shape': 'box',
                    'style': 'filled',
                    'fillcolor': '#ffffff',
                    'color': '#eeeeee',
                    'fontname': 'Arial',
                    'fontsize': '11',
                    'fontcolor': '#666666'
                },
                'field_highlighted': {
                    'fillcolor': '#e3f2fd'
                },
                'field_warning': {
                    'color': '#ff9800',
                    'penwidth': '2'
                }
            },
            'edge_style': {
                'field': {
                    'color': '#bbbbbb',
                    'penwidth': '1',
                    'arrowhead': 'normal'
                },
                'field_highlighted': {
                    'color': '#2196f3',
                    'penwidth': '2'
                },
                'table': {
                    'color': '#94A3B8',
                    'penwidth': '1.5',
                    'style': 'dashed',
                    'arrowhead': 'vee'
                }
            },
            'graph_attributes': {
                'bgcolor': 'white',
                'pad': '0.5',
                'splines': 'true',
                'outputorder': 'edgesfirst'
            }
        }

    def build_digraph(self,
                      result: LayoutResult,
                      config: Optional[Dict] = None,
                      show_table_edges: bool = False) -> Digraph:
        """
        Build a Graphviz digraph from a layout result.

        Args:
            result: Output of a layout pass
            config: Custom configuration merged over the defaults
            show_table_edges: Whether to draw inferred table relationships

        Returns:
            Digraph laid out with the neato engine at pinned positions
        """
        graph_config = copy.deepcopy(self.default_config)
        if config:
            self._merge_config(graph_config, config)

        dot = Digraph(comment="Lineage Map", engine='neato')
        dot.graph_attr.update(graph_config['graph_attributes'])

        names = self._node_names(result)
        self._add_tables(dot, result, names, graph_config['node_style']['table'])
        self._add_fields(dot, result, names, graph_config['node_style'])
        self._add_field_edges(dot, result, names, graph_config['edge_style'])

        if show_table_edges:
            for edge in result.table_edges:
                if edge.source not in names or edge.target not in names:
                    continue
                dot.edge(names[edge.source], names[edge.target], **graph_config['edge_style']['table'])

        return dot

    def render(self,
               result: LayoutResult,
               output_path: str = "lineage_map",
               output_format: str = "png",
               config: Optional[Dict] = None,
               show_table_edges: bool = False) -> str:
        """
        Render a layout result to a file.

        Args:
            result: Output of a layout pass
            output_path: Output file path (without extension)
            output_format: One of get_supported_formats()
            config: Custom configuration dictionary
            show_table_edges: Whether to draw inferred table relationships

        Returns:
            Path to generated diagram file
        """
        if output_format not in self.get_supported_formats():
            raise ValueError(
                f"Unsupported output format '{output_format}'. Supported: {', '.join(self.get_supported_formats())}"
            )

        dot = self.build_digraph(result, config, show_table_edges)
        output_file = dot.render(output_path, format=output_format, cleanup=True)
        logger.info(f"Lineage map written to {output_file}")
        return output_file

    def _pin(self, x: float, y: float, width: float, height: float) -> Dict[str, str]:
        """Node geometry attributes for a box whose top-left corner is (x, y)."""
        # Graphviz y grows upwards
        center_x = (x + width / 2) / POINTS_PER_INCH
        center_y = -(y + height / 2) / POINTS_PER_INCH
        return {
            'pos': f"{center_x:.4f},{center_y:.4f}!",
            'width': f"{width / POINTS_PER_INCH:.4f}",
            'height': f"{height / POINTS_PER_INCH:.4f}",
            'fixedsize': 'true'
        }

    def _node_names(self, result: LayoutResult) -> Dict[str, str]:
        """Graphviz-safe node names; ids may contain ':', which Graphviz reads as a port."""
        return {node.id: f"node_{index}" for index, node in enumerate(result.graph.nodes)}

    def _add_tables(self, dot: Digraph, result: LayoutResult, names: Dict[str, str], style: Dict[str, str]) -> None:
        options = result.options
        for table in result.graph.tables:
            position = result.positions.get(table.id)
            if position is None:
                continue
            label = f"{table.name}  {NOTE_ICON}" if table.note else table.name
            dot.node(
                names[table.id],
                label=label,
                tooltip=table.id,
                **style,
                **self._pin(position.x, position.y, options.table_width, options.table_height)
            )

    def _add_fields(self, dot: Digraph, result: LayoutResult, names: Dict[str, str], node_style: Dict[str, Dict[str, str]]) -> None:
        options = result.options
        for field_node in result.graph.fields:
            if field_node.table_id not in result.expanded_tables:
                continue
            position = result.positions.get(field_node.id)
            if position is None:
                continue

            style = dict(node_style['field'])
            if field_node.id in result.highlighted_fields:
                style.update(node_style['field_highlighted'])
            if field_node.id in result.validation_errors:
                style.update(node_style['field_warning'])

            dot.node(
                names[field_node.id],
                label=self._field_label(field_node, result),
                tooltip=field_node.id,
                **style,
                **self._pin(position.x, position.y, options.table_width, options.field_height)
            )

    def _field_label(self, field_node: FieldNode, result: LayoutResult) -> str:
        icons: List[str] = []
        if field_node.id in result.validation_errors:
            icons.append(WARNING_ICON)
        if field_node.transformation:
            icons.append(TRANSFORMATION_ICON)
        elif field_node.note:
            icons.append(NOTE_ICON)
        if icons:
            return f"{field_node.name}  {' '.join(icons)}"
        return field_node.name

    def _add_field_edges(self, dot: Digraph, result: LayoutResult, names: Dict[str, str], edge_style: Dict[str, Dict[str, str]]) -> None:
        for route in result.edge_routes:
            style = dict(edge_style['field'])
            if route.source in result.highlighted_fields and route.target in result.highlighted_fields:
                style.update(edge_style['field_highlighted'])
            dot.edge(names[route.source], names[route.target], tailport='e', headport='w', **style)

    def _merge_config(self, base_config: Dict, user_config: Dict) -> None:
        """Recursively merge user configuration with default configuration."""
        for key, value in user_config.items():
            if key in base_config and isinstance(base_config[key], dict) and isinstance(value, dict):
                self._merge_config(base_config[key], value)
            else:
                base_config[key] = value

    def get_supported_formats(self) -> List[str]:
        """Get list of supported output formats."""
        return ['png', 'svg', 'pdf', 'jpg', 'jpeg', 'dot']


def create_lineage_map_visualization(result: LayoutResult,
                                     output_path: str = "lineage_map",
                                     output_format: str = "png",
                                     show_table_edges: bool = False) -> str:
    """
    Convenience function to render a layout result.

    Args:
        result: Output of a layout pass
        output_path: Output file path (without extension)
        output_format: Output format ('png', 'svg', 'pdf', 'jpg', 'jpeg', 'dot')
        show_table_edges: Whether to draw inferred table relationships

    Returns:
        Path to generated visualization file
    """
    visualizer = LineageMapVisualizer()
    return visualizer.render(
        result,
        output_path=output_path,
        output_format=output_format,
        show_table_edges=show_table_edges
    )
