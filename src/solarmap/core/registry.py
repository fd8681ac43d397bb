"""Built-in site registry: Indian metro network used when no config is given."""
from __future__ import annotations

from typing import Dict, Iterable, Sequence, Tuple

from .models import Site, ValidationError

DEFAULT_SITES: Tuple[Site, ...] = (
    Site("Mumbai", 19.076, 72.8777, ("Indore", "Hyderabad")),
    Site("Delhi", 28.6139, 77.209, ("Indore", "Jaipur")),
    Site("Bangalore", 12.9716, 77.5946, ("Chennai", "Hyderabad")),
    Site("Chennai", 13.0827, 80.2707, ("Bangalore", "Hyderabad")),
    Site("Kolkata", 22.5726, 88.3639, ("Guwahati",)),
    Site("Hyderabad", 17.385, 78.4867, ("Mumbai", "Chennai", "Bangalore")),
    Site("Indore", 22.7196, 75.8577, ("Mumbai", "Delhi", "Jaipur")),
    Site("Guwahati", 26.1445, 91.7362, ("Kolkata",)),
    Site("Jaipur", 26.9124, 75.7873, ("Delhi", "Indore")),
)


def site_index(sites: Iterable[Site]) -> Dict[str, Site]:
    """Map name -> site, keeping the first occurrence of a repeated name."""
    index: Dict[str, Site] = {}
    for site in sites:
        index.setdefault(site.name, site)
    return index


def validate_unique(sites: Sequence[Site]) -> Tuple[Site, ...]:
    seen = set()
    for site in sites:
        if site.name in seen:
            raise ValidationError(f"Duplicate site name: {site.name}")
        seen.add(site.name)
    return tuple(sites)


__all__ = ["DEFAULT_SITES", "site_index", "validate_unique"]
