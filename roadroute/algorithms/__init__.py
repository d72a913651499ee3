"""Routing algorithms over the road graph."""

from roadroute.algorithms.spf import resolve_path, shortest_path, spf

__all__ = ["spf", "resolve_path", "shortest_path"]
