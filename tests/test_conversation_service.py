"""Tests for conversation resolution and listing."""

from __future__ import annotations

import unittest
from datetime import datetime, timezone
from unittest import mock

from sqlalchemy import create_engine, delete, func, select, update
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from direct_messages.models.base import Base
from direct_messages.models.conversation import Conversation
from direct_messages.models.direct_message import DirectMessage
from direct_messages.models.user_profile import UserProfile
from direct_messages.services import conversations as conversations_service
from direct_messages.services.conversations import get_or_create_conversation, list_conversations
from direct_messages.services.errors import (
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    UnavailableError,
)
from direct_messages.services.messages import send_message


class ConversationServiceTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.engine = create_engine(
            "sqlite+pysqlite:///:memory:",
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        cls.SessionLocal = sessionmaker(bind=cls.engine, autoflush=False, autocommit=False, future=True)
        Base.metadata.create_all(cls.engine)

    @classmethod
    def tearDownClass(cls) -> None:
        Base.metadata.drop_all(cls.engine)
        cls.engine.dispose()

    def setUp(self) -> None:
        self.db: Session = self.SessionLocal()
        self.db.execute(delete(DirectMessage))
        self.db.execute(delete(Conversation))
        self.db.execute(delete(UserProfile))
        self.db.add_all(
            [
                UserProfile(id="artist-a", display_name="Ada Painter", membership_tier="free"),
                UserProfile(id="artist-b", full_name="Bo Sculptor", membership_tier="pro"),
                UserProfile(id="artist-c", email="cy.printmaker@example.com", membership_tier="founder"),
            ]
        )
        self.db.commit()

    def tearDown(self) -> None:
        self.db.close()

    def _conversation_count(self) -> int:
        return int(self.db.scalar(select(func.count(Conversation.id))) or 0)

    def test_pair_resolves_to_same_conversation_from_both_sides(self) -> None:
        first = get_or_create_conversation(self.db, "artist-a", "artist-b")
        second = get_or_create_conversation(self.db, "artist-b", "artist-a")

        self.assertEqual(first.id, second.id)
        self.assertEqual(second.participant_a, "artist-a")
        self.assertEqual(second.participant_b, "artist-b")
        self.assertEqual(self._conversation_count(), 1)

    def test_self_conversation_is_rejected_without_creating_rows(self) -> None:
        with self.assertRaises(InvalidRequestError):
            get_or_create_conversation(self.db, "artist-a", "artist-a")
        self.assertEqual(self._conversation_count(), 0)

    def test_unknown_other_user_is_not_found(self) -> None:
        with self.assertRaises(NotFoundError):
            get_or_create_conversation(self.db, "artist-a", "ghost")
        self.assertEqual(self._conversation_count(), 0)

    def test_new_conversation_starts_with_matching_timestamps(self) -> None:
        conversation = get_or_create_conversation(self.db, "artist-a", "artist-b")

        self.assertEqual(conversation.created_at, conversation.updated_at)
        self.assertEqual((conversation.user_low_id, conversation.user_high_id), ("artist-a", "artist-b"))

    def test_concurrent_creation_returns_existing_row(self) -> None:
        real_find = conversations_service._find_by_pair
        raced: list[bool] = []

        def racing_find(db: Session, user_low_id: str, user_high_id: str) -> Conversation | None:
            if not raced:
                raced.append(True)
                # The other participant commits first, between our lookup and our insert.
                db.add(
                    Conversation(
                        participant_a="artist-b",
                        participant_b="artist-a",
                        user_low_id=user_low_id,
                        user_high_id=user_high_id,
                    )
                )
                db.commit()
                return None
            return real_find(db, user_low_id, user_high_id)

        with mock.patch.object(conversations_service, "_find_by_pair", side_effect=racing_find):
            conversation = get_or_create_conversation(self.db, "artist-a", "artist-b")

        self.assertEqual(conversation.participant_a, "artist-b")
        self.assertEqual(self._conversation_count(), 1)

    def test_unresolvable_creation_conflict_is_reported_as_unavailable(self) -> None:
        conflict = ConflictError("Conversation for artist-a/artist-b already exists")
        with mock.patch.object(conversations_service, "_find_by_pair", return_value=None), mock.patch.object(
            conversations_service, "_insert_conversation", side_effect=conflict
        ):
            with self.assertRaises(UnavailableError):
                get_or_create_conversation(self.db, "artist-a", "artist-b")
        self.assertEqual(self._conversation_count(), 0)

    def test_list_conversations_is_empty_for_new_user(self) -> None:
        self.assertEqual(list_conversations(self.db, "artist-a"), [])

    def test_list_conversations_ranks_by_latest_activity(self) -> None:
        with_b = get_or_create_conversation(self.db, "artist-a", "artist-b")
        with_c = get_or_create_conversation(self.db, "artist-a", "artist-c")

        send_message(self.db, "artist-b", with_b.id, "Saw your show")
        send_message(self.db, "artist-c", with_c.id, "Open call tomorrow")
        summaries = list_conversations(self.db, "artist-a")
        self.assertEqual([summary.conversation.id for summary in summaries], [with_c.id, with_b.id])
        self.assertGreater(summaries[0].conversation.updated_at, summaries[1].conversation.updated_at)

        send_message(self.db, "artist-a", with_b.id, "Thanks!")
        summaries = list_conversations(self.db, "artist-a")
        self.assertEqual([summary.conversation.id for summary in summaries], [with_b.id, with_c.id])
        self.assertEqual(summaries[0].last_message.content, "Thanks!")

    def test_equal_activity_breaks_ties_by_id(self) -> None:
        older = get_or_create_conversation(self.db, "artist-a", "artist-b")
        newer = get_or_create_conversation(self.db, "artist-a", "artist-c")
        same_time = datetime(2030, 1, 1, tzinfo=timezone.utc)
        self.db.execute(update(Conversation).values(updated_at=same_time))
        self.db.commit()

        ranked = [summary.conversation.id for summary in list_conversations(self.db, "artist-a")]
        self.assertEqual(ranked, [newer.id, older.id])

    def test_summary_carries_other_profile_last_message_and_unread(self) -> None:
        conversation = get_or_create_conversation(self.db, "artist-a", "artist-c")
        send_message(self.db, "artist-c", conversation.id, "First")
        send_message(self.db, "artist-c", conversation.id, "Second")
        send_message(self.db, "artist-a", conversation.id, "Reply")

        summary = list_conversations(self.db, "artist-a")[0]
        self.assertEqual(summary.other_participant.id, "artist-c")
        self.assertEqual(summary.other_participant.name, "cy.printmaker")
        self.assertTrue(summary.other_participant.is_pro)
        self.assertTrue(summary.other_participant.is_founder)
        self.assertEqual(summary.last_message.content, "Reply")
        self.assertEqual(summary.unread_count, 2)

        other_side = list_conversations(self.db, "artist-c")[0]
        self.assertEqual(other_side.other_participant.name, "Ada Painter")
        self.assertFalse(other_side.other_participant.is_pro)
        self.assertEqual(other_side.unread_count, 1)

    def test_summary_without_messages_has_no_last_message(self) -> None:
        get_or_create_conversation(self.db, "artist-b", "artist-a")

        summary = list_conversations(self.db, "artist-a")[0]
        self.assertIsNone(summary.last_message)
        self.assertEqual(summary.unread_count, 0)
        self.assertEqual(summary.other_participant.name, "Bo Sculptor")

    def test_missing_profile_renders_fallback_participant(self) -> None:
        get_or_create_conversation(self.db, "artist-a", "artist-b")
        self.db.execute(delete(UserProfile).where(UserProfile.id == "artist-b"))
        self.db.commit()

        summary = list_conversations(self.db, "artist-a")[0]
        self.assertEqual(summary.other_participant.id, "artist-b")
        self.assertEqual(summary.other_participant.name, "User")
        self.assertEqual(summary.other_participant.membership_tier, "free")


if __name__ == "__main__":
    unittest.main()
