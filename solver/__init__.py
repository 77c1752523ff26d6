from solver.ordering import AnchorOrdering, ShuffledOrder, fixed_order, ordering_from_config
from solver.search import CloseAttempt, SearchResult, SearchState, SearchStats, run_search, solve
from solver.worker import SolveJob

__all__ = [
    "AnchorOrdering",
    "ShuffledOrder",
    "fixed_order",
    "ordering_from_config",
    "CloseAttempt",
    "SearchResult",
    "SearchState",
    "SearchStats",
    "run_search",
    "solve",
    "SolveJob",
]
