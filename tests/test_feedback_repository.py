"""
Tests for feedback persistence and transaction ownership
"""

import pytest

from bundle_builder.core.database import get_transaction_context
from bundle_builder.core.exceptions import DatabaseQueryError
from bundle_builder.domains.feedback import FeedbackRepository


class TestFeedbackRepository:
    async def test_add_leaves_commit_to_session_owner(self, session_factory):
        async with session_factory() as session:
            record = await FeedbackRepository(session).add("good")
            assert record.id is not None
            await session.rollback()

        async with session_factory() as session:
            assert await FeedbackRepository(session).count() == 0

    async def test_transaction_context_commits(self, session_factory):
        async with get_transaction_context(session_factory) as session:
            await FeedbackRepository(session).add("bad")

        async with session_factory() as session:
            assert await FeedbackRepository(session).count("bad") == 1

    async def test_failed_insert_leaves_session_usable(self, session_factory):
        async with get_transaction_context(session_factory) as session:
            repository = FeedbackRepository(session)

            with pytest.raises(DatabaseQueryError):
                await repository.add(None)

            await repository.add("good")

        async with session_factory() as session:
            assert await FeedbackRepository(session).count() == 1
