"""Site network graph."""

from .graph import build_graph, edges_to_geojson

__all__ = ["build_graph", "edges_to_geojson"]
