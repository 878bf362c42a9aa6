"""Spatial indexing for collision detection."""

from royale.spatial.grid import SpatialGrid, cell_size_for

__all__ = ["SpatialGrid", "cell_size_for"]
