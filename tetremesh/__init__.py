"""Tetrahedral mesh face adjacency, cell-tuple navigation and local remeshing operations."""

__version__ = "0.1.0"