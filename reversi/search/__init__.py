"""Adversarial search."""

from .minimax import INF, SearchConfig, SearchEngine, SearchStats, expand_children

__all__ = ["INF", "SearchConfig", "SearchEngine", "SearchStats", "expand_children"]
