"""Exception hierarchy for newsdesk."""

from typing import Optional


class NewsdeskError(Exception):
    """Base class for all newsdesk errors."""


class InvalidRequestError(NewsdeskError):
    """Raised when a request is rejected before any provider call."""


class ProviderError(NewsdeskError):
    """Raised when the content provider call fails."""


class ProviderResponseError(ProviderError):
    """Raised when the provider answers with a payload we cannot parse."""


class GenerationError(NewsdeskError):
    """Raised when a generation batch is aborted."""

    def __init__(
        self,
        message: str,
        topic_index: Optional[int] = None,
        step: Optional[str] = None,
    ):
        super().__init__(message)
        self.topic_index = topic_index
        self.step = step


class ArticleNotFoundError(NewsdeskError):
    """Raised by strict stores when an article id is unknown."""

    def __init__(self, article_id: str):
        super().__init__(f"Article not found: {article_id}")
        self.article_id = article_id


class TransitionError(NewsdeskError):
    """Raised when the transition policy rejects a status change."""
