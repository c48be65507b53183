"""Move selection: heuristics, minimax search and difficulty tiers."""

from .heuristics import choose_placement, order_moves, placement_scores, score, tiger_features
from .search import MinimaxSearch, SearchConfig, SearchResult
from .tiers import GreedyPolicy, Policy, RandomPolicy, SearchPolicy, choose_move, make_policy

__all__ = [
    "choose_placement",
    "order_moves",
    "placement_scores",
    "score",
    "tiger_features",
    "MinimaxSearch",
    "SearchConfig",
    "SearchResult",
    "GreedyPolicy",
    "Policy",
    "RandomPolicy",
    "SearchPolicy",
    "choose_move",
    "make_policy",
]
