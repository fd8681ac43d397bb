"""Engine package fetching and aggregating per-site irradiance."""

from .aggregate import fetch_all, fetch_all_sync

__all__ = ["fetch_all", "fetch_all_sync"]
