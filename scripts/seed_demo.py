"""Seed demo artist profiles and a short direct-message exchange.

Usage (from repository root):
    python scripts/seed_demo.py
    # or
    python -m scripts.seed_demo
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from sqlalchemy import delete, or_

# Make `direct_messages` imports work without an editable install.
PROJECT_DIR = Path(__file__).resolve().parents[1]
if str(PROJECT_DIR) not in sys.path:
    sys.path.insert(0, str(PROJECT_DIR))

from direct_messages.db.session import SessionLocal
from direct_messages.models.conversation import Conversation
from direct_messages.models.user_profile import UserProfile
from direct_messages.services.conversations import get_or_create_conversation
from direct_messages.services.messages import count_unread, send_message

DEMO_PROFILES = [
    UserProfile(id="demo-ada", display_name="Ada Okafor", membership_tier="founder"),
    UserProfile(id="demo-bo", full_name="Bo Lindqvist", membership_tier="pro"),
    UserProfile(id="demo-cy", email="cy.printmaker@example.com", membership_tier="free"),
]

DEMO_EXCHANGE = [
    ("demo-bo", "Loved the cyanotype series at the meetup last week."),
    ("demo-ada", "Thank you! Are you applying to the spring open call?"),
    ("demo-bo", "Planning to. Would you be up for a joint submission?"),
]


def reset_demo(db) -> None:
    """Remove demo profiles and their conversations."""

    demo_ids = [profile.id for profile in DEMO_PROFILES]
    db.execute(
        delete(Conversation).where(
            or_(Conversation.participant_a.in_(demo_ids), Conversation.participant_b.in_(demo_ids))
        )
    )
    db.execute(delete(UserProfile).where(UserProfile.id.in_(demo_ids)))
    db.commit()


def parse_args() -> argparse.Namespace:
    """Parse script CLI arguments."""

    parser = argparse.ArgumentParser(description="Seed demo artists and a direct-message exchange.")
    parser.add_argument(
        "--no-reset",
        action="store_true",
        help="Do not delete existing demo records before seeding.",
    )
    return parser.parse_args()


def main() -> None:
    """Seed demo data and print a short summary."""

    args = parse_args()

    with SessionLocal() as db:
        if not args.no_reset:
            reset_demo(db)
        for profile in DEMO_PROFILES:
            db.merge(profile)
        db.commit()

        conversation = get_or_create_conversation(db, "demo-ada", "demo-bo")
        for sender_id, content in DEMO_EXCHANGE:
            send_message(db, sender_id, conversation.id, content)
        get_or_create_conversation(db, "demo-cy", "demo-ada")
        unread_for_ada = count_unread(db, conversation.id, "demo-ada")
        conversation_id = conversation.id

    print("Seed complete")
    print(f"conversation_id={conversation_id}")
    print(f"messages_created={len(DEMO_EXCHANGE)}")
    print(f"unread_for_demo-ada={unread_for_ada}")
    print()
    print("Inspect:")
    print("  GET /conversations            (header X-User-Id: demo-ada)")
    print(f"  GET /conversations/{conversation_id}/messages")


if __name__ == "__main__":
    main()
