"""Visualization layer: treemap data shapes and the HTML page."""

from .report import generate_report, render_page
from .treemap import (
    build_plotly_trace,
    build_treemap_data,
    render_treemap_script,
    tree_to_records,
    write_tree_json,
    write_treemap_script,
)

__all__ = [
    "generate_report",
    "render_page",
    "build_plotly_trace",
    "build_treemap_data",
    "render_treemap_script",
    "tree_to_records",
    "write_tree_json",
    "write_treemap_script",
]
