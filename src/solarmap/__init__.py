"""Solar irradiance network map: site graph, rolling 24 h fetch and visual encodings."""
