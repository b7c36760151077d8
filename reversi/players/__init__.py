"""Move-selection policies for AI-controlled seats."""

from .policy import Policy, RandomPolicy, SearchPolicy

__all__ = ["Policy", "RandomPolicy", "SearchPolicy"]
