"""Engine Layer - Search Relevance Engine

This module provides the search ranking engine:
- SearchEngine: query → ranked results + suggestions
- ScoringPolicy: externally configurable weights and synonym table
- generate_fuzzy_variations: query expansion
- calculate_relevance_score / score_item: max-fold field scoring
"""

from .policy import MatchField, ScoringPolicy, SuggestionWeights, load_scoring_policy
from .result import CatalogItem, CategoryItem, ScoredItem, SearchOutcome
from .scoring import calculate_relevance_score, rank, score_item, suggestion_score
from .search_engine import CatalogStore, SearchEngine
from .variations import generate_fuzzy_variations

__all__ = [
    "SearchEngine",
    "CatalogStore",
    "ScoringPolicy",
    "SuggestionWeights",
    "MatchField",
    "load_scoring_policy",
    "CatalogItem",
    "CategoryItem",
    "ScoredItem",
    "SearchOutcome",
    "calculate_relevance_score",
    "score_item",
    "suggestion_score",
    "rank",
    "generate_fuzzy_variations",
]
