"""
Editorial status transitions.

The transition table says which status changes are allowed; the side-effect
table says which fields change when an article enters a status. By default
every status may move to every other status. Entering PUBLISHED stamps the
publication fields, entering anything else clears them:

    DRAFT <-> REVIEW <-> APPROVED <-> PUBLISHED <-> CANCELLED   (all pairs)

Restricting the workflow is a matter of passing a different table to
``TransitionPolicy``.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import AbstractSet, Any, Callable, Dict, Mapping, Optional, Set

import pendulum

from ..errors import TransitionError
from ..models import Article, ArticleStatus

logger = logging.getLogger(__name__)

TransitionTable = Mapping[ArticleStatus, AbstractSet[ArticleStatus]]

UNRESTRICTED_TRANSITIONS: Dict[ArticleStatus, frozenset] = {
    status: frozenset(ArticleStatus) for status in ArticleStatus
}

TERMINAL_CANCELLED_TRANSITIONS: Dict[ArticleStatus, frozenset] = {
    **UNRESTRICTED_TRANSITIONS,
    ArticleStatus.CANCELLED: frozenset(),  # Terminal state
}


@dataclass
class StateTransition:
    """Record of an applied status change."""
    article_id: str
    from_status: ArticleStatus
    to_status: ArticleStatus
    timestamp: datetime
    metadata: Dict[str, Any] = field(default_factory=dict)


class TransitionPolicy:
    """Decides which status changes are allowed."""

    def __init__(self, transitions: Optional[TransitionTable] = None):
        if transitions is None:
            transitions = UNRESTRICTED_TRANSITIONS
        # Each policy owns its table
        self.transitions: Dict[ArticleStatus, Set[ArticleStatus]] = {
            status: set(targets) for status, targets in transitions.items()
        }

    @classmethod
    def unrestricted(cls) -> "TransitionPolicy":
        return cls(UNRESTRICTED_TRANSITIONS)

    @classmethod
    def terminal_cancelled(cls) -> "TransitionPolicy":
        return cls(TERMINAL_CANCELLED_TRANSITIONS)

    def can_transition(self, current: ArticleStatus, target: ArticleStatus) -> bool:
        """Check if a transition is valid. Re-setting the current status always is."""
        if current == target:
            return True
        return target in self.transitions.get(current, set())

    def valid_targets(self, current: ArticleStatus) -> Set[ArticleStatus]:
        return set(self.transitions.get(current, set())) | {current}

    def check(self, current: ArticleStatus, target: ArticleStatus) -> None:
        """
        Raises:
            TransitionError: If the policy forbids the change
        """
        if not self.can_transition(current, target):
            raise TransitionError(
                f"Invalid transition from {current.value} to {target.value}. "
                f"Valid targets: {sorted(s.value for s in self.valid_targets(current))}"
            )


class PublicationStamp:
    """Produces the public URL and timestamp assigned on publication."""

    def __init__(
        self,
        url_template: str = "https://sulnews.example.com/articles/{id}",
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.url_template = url_template
        self.clock = clock or (lambda: pendulum.now("UTC"))

    def url_for(self, article_id: str) -> str:
        return self.url_template.format(id=article_id)

    def now(self) -> datetime:
        return self.clock()


SideEffect = Callable[[Article, PublicationStamp], Dict[str, Any]]


def _enter_published(article: Article, stamp: PublicationStamp) -> Dict[str, Any]:
    # First publication date wins; re-publishing keeps it
    return {
        "published_url": stamp.url_for(article.id),
        "published_at": article.published_at or stamp.now(),
    }


def _clear_publication(article: Article, stamp: PublicationStamp) -> Dict[str, Any]:
    return {"published_url": None, "published_at": None}


SIDE_EFFECTS: Dict[ArticleStatus, SideEffect] = {
    ArticleStatus.DRAFT: _clear_publication,
    ArticleStatus.REVIEW: _clear_publication,
    ArticleStatus.APPROVED: _clear_publication,
    ArticleStatus.PUBLISHED: _enter_published,
    ArticleStatus.CANCELLED: _clear_publication,
}


def apply_transition(
    article: Article,
    target: ArticleStatus,
    policy: TransitionPolicy,
    stamp: PublicationStamp,
) -> Article:
    """
    Return a copy of the article moved to ``target``.

    Raises:
        TransitionError: If the policy forbids the change
    """
    policy.check(article.status, target)

    updates = {"status": target}
    updates.update(SIDE_EFFECTS[target](article, stamp))
    return article.model_copy(update=updates)
