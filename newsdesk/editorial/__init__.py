"""Editorial workflow: article collection, status transitions and views."""

from .filters import ArticleFilter
from .store import ArticleStore
from .transitions import (
    SIDE_EFFECTS,
    TERMINAL_CANCELLED_TRANSITIONS,
    UNRESTRICTED_TRANSITIONS,
    PublicationStamp,
    StateTransition,
    TransitionPolicy,
    apply_transition,
)

__all__ = [
    "ArticleFilter",
    "ArticleStore",
    "PublicationStamp",
    "StateTransition",
    "TransitionPolicy",
    "apply_transition",
    "SIDE_EFFECTS",
    "TERMINAL_CANCELLED_TRANSITIONS",
    "UNRESTRICTED_TRANSITIONS",
]
