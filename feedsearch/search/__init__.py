from feedsearch.search.orchestrator import DEFAULT_DEBOUNCE_SECONDS, SearchOrchestrator
from feedsearch.search.ordering import (
    from_predicate,
    natural_order,
    newest_first,
    oldest_first,
    sort_items,
)
from feedsearch.search.state import SearchPhase, SearchState

__all__ = [
    "DEFAULT_DEBOUNCE_SECONDS",
    "SearchOrchestrator",
    "SearchPhase",
    "SearchState",
    "from_predicate",
    "natural_order",
    "newest_first",
    "oldest_first",
    "sort_items",
]
