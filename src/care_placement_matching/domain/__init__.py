"""Domain modules for home matching."""

from .matching import HomeMatch, MatchingWeights, compute_matches, evaluate_home

__all__ = ["HomeMatch", "MatchingWeights", "compute_matches", "evaluate_home"]
