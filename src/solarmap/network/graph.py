"""Undirected site connectivity graph derived from neighbor lists."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence, Set

from solarmap.core.models import Edge, MapView, Site
from solarmap.core.registry import site_index


def build_graph(sites: Sequence[Site]) -> List[Edge]:
    """Return one edge per unordered pair of connected sites.

    Edges are emitted in ``sites`` then ``neighbors`` order, but callers should
    treat the result as a set. Neighbor names that do not resolve to a site are
    skipped.
    """
    by_name = site_index(sites)
    seen: Set[str] = set()
    edges: List[Edge] = []
    for site in sites:
        for neighbor_name in site.neighbors:
            neighbor = by_name.get(neighbor_name)
            if neighbor is None:
                continue
            key = Edge.key_for(site.name, neighbor.name)
            if key in seen:
                continue
            seen.add(key)
            edges.append(Edge(a=site.name, b=neighbor.name, geometry=(site.coords, neighbor.coords)))
    return edges


def edges_to_geojson(edges: Iterable[Edge], view: Optional[MapView] = None) -> Dict[str, Any]:
    """FeatureCollection of LineStrings for the map line layer.

    When ``view`` is given it is added as a top-level ``view`` member so the
    map surface can open centered on the network.
    """
    features = [
        {
            "type": "Feature",
            "properties": {"id": edge.key, "a": edge.a, "b": edge.b},
            "geometry": {
                "type": "LineString",
                "coordinates": [list(edge.geometry[0]), list(edge.geometry[1])],
            },
        }
        for edge in edges
    ]
    collection: Dict[str, Any] = {"type": "FeatureCollection", "features": features}
    if view is not None:
        collection["view"] = {"lon": view.lon, "lat": view.lat, "zoom": view.zoom}
    return collection


__all__ = ["build_graph", "edges_to_geojson"]
