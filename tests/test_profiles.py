"""Tests for participant profile resolution."""

from __future__ import annotations

import unittest

from direct_messages.models.user_profile import UserProfile
from direct_messages.services.profiles import resolve_display_name, to_participant_profile


class ProfileResolutionTests(unittest.TestCase):
    def test_display_name_fallback_chain(self) -> None:
        cases = [
            (UserProfile(id="u1", display_name="Mira", full_name="Mira Lopez"), "Mira"),
            (UserProfile(id="u2", display_name="  ", full_name="Mira Lopez"), "Mira Lopez"),
            (UserProfile(id="u3", email="mira@example.com"), "mira"),
            (UserProfile(id="u4", email="not-an-email"), "User"),
            (UserProfile(id="u5"), "User"),
        ]
        for profile, expected in cases:
            with self.subTest(profile=profile.id):
                self.assertEqual(resolve_display_name(profile), expected)

    def test_membership_flags(self) -> None:
        free = to_participant_profile(UserProfile(id="u1", membership_tier="free"))
        pro = to_participant_profile(UserProfile(id="u2", membership_tier="pro"))
        founder = to_participant_profile(UserProfile(id="u3", membership_tier="founder"))
        unknown = to_participant_profile(UserProfile(id="u4", membership_tier="legacy"))

        self.assertEqual((free.is_pro, free.is_founder), (False, False))
        self.assertEqual((pro.is_pro, pro.is_founder), (True, False))
        self.assertEqual((founder.is_pro, founder.is_founder), (True, True))
        self.assertEqual(unknown.membership_tier, "free")
        self.assertFalse(unknown.is_pro)


if __name__ == "__main__":
    unittest.main()
