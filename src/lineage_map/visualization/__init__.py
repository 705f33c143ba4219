"""Lineage Map Visualization Package."""

from .visualizer import LineageMapVisualizer, create_lineage_map_visualization

__all__ = [
    'LineageMapVisualizer',
    'create_lineage_map_visualization'
]
