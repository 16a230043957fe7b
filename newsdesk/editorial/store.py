"""In-memory article collection governed by the editorial workflow."""

import logging
from collections import Counter
from datetime import date
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from ..errors import ArticleNotFoundError
from ..models import Article, ArticleStatus, WORKFLOW_ORDER
from .filters import ArticleFilter
from .transitions import PublicationStamp, StateTransition, TransitionPolicy, apply_transition

logger = logging.getLogger(__name__)


class ArticleStore:
    """
    Holds the article collection and applies every mutation to it.

    Articles are immutable; each operation swaps in a replacement record and
    a new collection tuple, so snapshots handed to readers never change under
    them. Nothing is persisted.

    By default, operations on an unknown id are silent no-ops returning
    ``None``. With ``strict=True`` they raise ``ArticleNotFoundError``.
    """

    def __init__(
        self,
        articles: Optional[Iterable[Article]] = None,
        policy: Optional[TransitionPolicy] = None,
        stamp: Optional[PublicationStamp] = None,
        strict: bool = False,
    ) -> None:
        self._articles: Tuple[Article, ...] = ()
        self.policy = policy or TransitionPolicy.unrestricted()
        self.stamp = stamp or PublicationStamp()
        self.strict = strict
        self._history: List[StateTransition] = []

        if articles:
            self.add_batch(articles)

    @classmethod
    def from_config(cls, workflow_config) -> "ArticleStore":
        """Build a store from a ``WorkflowConfig``."""
        policy = (
            TransitionPolicy.terminal_cancelled()
            if workflow_config.terminal_cancelled
            else TransitionPolicy.unrestricted()
        )
        return cls(
            policy=policy,
            stamp=PublicationStamp(workflow_config.published_url_template),
            strict=workflow_config.strict_lookups,
        )

    def __len__(self) -> int:
        return len(self._articles)

    def __iter__(self) -> Iterator[Article]:
        return iter(self._articles)

    def __contains__(self, article_id: object) -> bool:
        return any(a.id == article_id for a in self._articles)

    def all(self) -> Tuple[Article, ...]:
        """Snapshot of the whole collection, in insertion order."""
        return self._articles

    @property
    def history(self) -> List[StateTransition]:
        """Applied status changes, oldest first."""
        return self._history.copy()

    def get(self, article_id: str) -> Optional[Article]:
        for article in self._articles:
            if article.id == article_id:
                return article
        if self.strict:
            raise ArticleNotFoundError(article_id)
        return None

    def add_batch(self, articles: Iterable[Article]) -> List[Article]:
        """
        Append a batch of new articles, all or nothing.

        Raises:
            ValueError: If any id is already taken or repeated in the batch
        """
        batch = list(articles)
        seen = {a.id for a in self._articles}
        for article in batch:
            if article.id in seen:
                raise ValueError(f"Duplicate article id: {article.id}")
            seen.add(article.id)

        self._articles = self._articles + tuple(batch)
        logger.info("Added %d article(s); collection size %d", len(batch), len(self._articles))
        return batch

    def _replace(self, article_id: str, change: Callable[[Article], Article]) -> Optional[Article]:
        """Swap the matching article for ``change(article)``."""
        for index, article in enumerate(self._articles):
            if article.id == article_id:
                updated = change(article)
                self._articles = self._articles[:index] + (updated,) + self._articles[index + 1:]
                return updated

        if self.strict:
            raise ArticleNotFoundError(article_id)
        logger.debug("Ignoring update for unknown article %s", article_id)
        return None

    def edit(self, article_id: str, title: str, content: str) -> Optional[Article]:
        """Replace an article's title and body."""
        return self._replace(
            article_id,
            lambda a: a.model_copy(update={"title": title, "content": content}),
        )

    def set_status(
        self,
        article_id: str,
        status: Union[ArticleStatus, str],
    ) -> Optional[Article]:
        """
        Move an article to a new status, applying the status side effects.

        Raises:
            TransitionError: If the transition policy forbids the change
        """
        if isinstance(status, str) and not isinstance(status, ArticleStatus):
            status = ArticleStatus.from_string(status)

        previous: Dict[str, ArticleStatus] = {}

        def change(article: Article) -> Article:
            previous["status"] = article.status
            return apply_transition(article, status, self.policy, self.stamp)

        updated = self._replace(article_id, change)
        if updated is not None:
            metadata = {}
            if updated.is_published:
                metadata["published_url"] = updated.published_url
            self._history.append(StateTransition(
                article_id=article_id,
                from_status=previous["status"],
                to_status=status,
                timestamp=self.stamp.now(),
                metadata=metadata,
            ))
            logger.info(
                "Article %s transitioned: %s → %s",
                article_id, previous["status"].value, status.value,
            )
        return updated

    def replace_image(self, article_id: str, image_url: str, image_prompt: str) -> Optional[Article]:
        """Overwrite the image and the prompt that produced it, together."""
        return self._replace(
            article_id,
            lambda a: a.model_copy(update={"image_url": image_url, "image_prompt": image_prompt}),
        )

    def filter(
        self,
        status: Union[ArticleStatus, str, None] = None,
        text: Optional[str] = None,
        published_on: Union[date, str, None] = None,
    ) -> List[Article]:
        """Articles matching every given filter."""
        article_filter = ArticleFilter(status=status, text=text, published_on=published_on)
        return article_filter.apply(self._articles)

    def status_counts(self) -> Dict[ArticleStatus, int]:
        """Count of articles per status; every status is present."""
        counts = Counter(a.status for a in self._articles)
        return {status: counts.get(status, 0) for status in WORKFLOW_ORDER}

    def board(self, articles: Optional[Iterable[Article]] = None) -> Dict[ArticleStatus, List[Article]]:
        """Group articles into workflow columns; every column is present."""
        source = self._articles if articles is None else articles
        columns: Dict[ArticleStatus, List[Article]] = {status: [] for status in WORKFLOW_ORDER}
        for article in source:
            columns[article.status].append(article)
        return columns
