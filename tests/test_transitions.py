"""Tests for the status transition table and side effects."""

import pytest

from newsdesk.editorial import (
    SIDE_EFFECTS,
    TERMINAL_CANCELLED_TRANSITIONS,
    UNRESTRICTED_TRANSITIONS,
    PublicationStamp,
    TransitionPolicy,
    apply_transition,
)
from newsdesk.errors import TransitionError
from newsdesk.models import ArticleStatus
from tests.conftest import assert_publication_invariant, make_article


class TestTransitionPolicy:
    def test_default_policy_allows_every_pair(self):
        policy = TransitionPolicy()
        for current in ArticleStatus:
            for target in ArticleStatus:
                assert policy.can_transition(current, target)

    def test_terminal_cancelled_blocks_leaving_cancelled(self):
        policy = TransitionPolicy.terminal_cancelled()

        assert not policy.can_transition(ArticleStatus.CANCELLED, ArticleStatus.DRAFT)
        assert policy.can_transition(ArticleStatus.CANCELLED, ArticleStatus.CANCELLED)
        assert policy.can_transition(ArticleStatus.REVIEW, ArticleStatus.CANCELLED)
        with pytest.raises(TransitionError):
            policy.check(ArticleStatus.CANCELLED, ArticleStatus.PUBLISHED)

    def test_custom_table(self):
        policy = TransitionPolicy({ArticleStatus.DRAFT: {ArticleStatus.REVIEW}})

        assert policy.can_transition(ArticleStatus.DRAFT, ArticleStatus.REVIEW)
        assert not policy.can_transition(ArticleStatus.DRAFT, ArticleStatus.PUBLISHED)
        assert policy.valid_targets(ArticleStatus.DRAFT) == {
            ArticleStatus.DRAFT,
            ArticleStatus.REVIEW,
        }

    def test_policies_own_their_tables(self):
        restricted = TransitionPolicy.unrestricted()
        restricted.transitions[ArticleStatus.DRAFT].discard(ArticleStatus.PUBLISHED)
        restricted.transitions[ArticleStatus.REVIEW].clear()

        assert not restricted.can_transition(ArticleStatus.DRAFT, ArticleStatus.PUBLISHED)
        assert TransitionPolicy.unrestricted().can_transition(
            ArticleStatus.DRAFT, ArticleStatus.PUBLISHED
        )
        terminal = TransitionPolicy.terminal_cancelled()
        assert terminal.can_transition(ArticleStatus.REVIEW, ArticleStatus.APPROVED)
        assert ArticleStatus.PUBLISHED in UNRESTRICTED_TRANSITIONS[ArticleStatus.DRAFT]
        assert TERMINAL_CANCELLED_TRANSITIONS[ArticleStatus.REVIEW] == frozenset(ArticleStatus)

    def test_custom_table_is_copied(self):
        table = {ArticleStatus.DRAFT: {ArticleStatus.REVIEW}}
        policy = TransitionPolicy(table)
        table[ArticleStatus.DRAFT].add(ArticleStatus.PUBLISHED)

        assert not policy.can_transition(ArticleStatus.DRAFT, ArticleStatus.PUBLISHED)


class TestApplyTransition:
    def test_every_status_has_a_side_effect(self):
        assert set(SIDE_EFFECTS) == set(ArticleStatus)

    def test_publishing_stamps_url_and_time(self, stamp, clock):
        article = make_article()
        published = apply_transition(article, ArticleStatus.PUBLISHED, TransitionPolicy(), stamp)

        assert published.status == ArticleStatus.PUBLISHED
        assert published.published_url == f"https://news.example/articles/{article.id}"
        assert published.published_at.isoformat() == "2024-05-10T12:00:00+00:00"
        # Original record is untouched
        assert article.status == ArticleStatus.DRAFT
        assert article.published_at is None

    def test_republishing_keeps_first_publication_time(self, stamp):
        policy = TransitionPolicy()
        once = apply_transition(make_article(), ArticleStatus.PUBLISHED, policy, stamp)
        twice = apply_transition(once, ArticleStatus.PUBLISHED, policy, stamp)

        assert twice.published_at == once.published_at

    @pytest.mark.parametrize("target", [
        ArticleStatus.DRAFT,
        ArticleStatus.REVIEW,
        ArticleStatus.APPROVED,
        ArticleStatus.CANCELLED,
    ])
    def test_leaving_published_clears_fields(self, stamp, target):
        policy = TransitionPolicy()
        published = apply_transition(make_article(), ArticleStatus.PUBLISHED, policy, stamp)
        moved = apply_transition(published, target, policy, stamp)

        assert moved.status == target
        assert_publication_invariant(moved)

    def test_rejected_transition_raises(self, stamp):
        policy = TransitionPolicy.terminal_cancelled()
        cancelled = apply_transition(make_article(), ArticleStatus.CANCELLED, policy, stamp)

        with pytest.raises(TransitionError):
            apply_transition(cancelled, ArticleStatus.REVIEW, policy, stamp)

    def test_default_stamp_uses_utc_now(self):
        stamp = PublicationStamp()
        published = apply_transition(make_article(), ArticleStatus.PUBLISHED, TransitionPolicy(), stamp)

        assert published.published_at.tzinfo is not None
        assert published.published_url.endswith(published.id)
