"""Utility functions."""

from .validation import GraphDataError, validate_graph_data, validate_layout_option, validate_file_path

__all__ = ["GraphDataError", "validate_graph_data", "validate_layout_option", "validate_file_path"]
