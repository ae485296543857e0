"""Tests for entitlements module models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from modules.entitlements.models import Entitlements, ProfileRecord, RoleKey, Tier


class TestTier:
    def test_ordering(self):
        assert Tier.FREE < Tier.STARTER < Tier.AI_BLUEPRINT < Tier.ACCELERATOR
        assert Tier.ACCELERATOR < Tier.DEEPENING < Tier.FOUNDER

    def test_ordering_is_not_alphabetical(self):
        # "AI_BLUEPRINT" < "FREE" as strings
        assert Tier.AI_BLUEPRINT > Tier.FREE
        assert Tier.DEEPENING >= Tier.ACCELERATOR
        assert Tier.STARTER <= Tier.STARTER

    def test_rank(self):
        assert Tier.FREE.rank == 0
        assert Tier.FOUNDER.rank == 5

    def test_string_value(self):
        assert Tier("STARTER") is Tier.STARTER
        assert Tier.STARTER.value == "STARTER"

    def test_comparison_with_other_types(self):
        with pytest.raises(TypeError):
            Tier.FREE < 1


class TestProfileRecord:
    def test_requires_id(self):
        with pytest.raises(ValidationError):
            ProfileRecord.model_validate({"tier": "STARTER"})

    def test_minimal(self):
        rec = ProfileRecord(id="user-1")
        assert rec.role_keys == frozenset()
        assert rec.membership is None
        assert rec.is_founder is None

    def test_ignores_unknown_columns(self):
        rec = ProfileRecord.model_validate({"id": "user-1", "favourite_colour": "blue"})
        assert not hasattr(rec, "favourite_colour")

    def test_role_keys_tolerant(self):
        rec = ProfileRecord.model_validate({"id": "u", "role_keys": ["explorer", "", 7, None]})
        assert rec.role_keys == frozenset({"explorer"})

    def test_role_keys_wrong_type(self):
        rec = ProfileRecord.model_validate({"id": "u", "role_keys": "explorer"})
        assert rec.role_keys == frozenset()

    def test_membership(self):
        rec = ProfileRecord.model_validate({"id": "u", "membership": {"tier": "STARTER", "since": 1}})
        assert rec.membership.tier == "STARTER"

    def test_membership_tier_wrong_type(self):
        rec = ProfileRecord.model_validate({"id": "u", "membership": {"tier": 3}})
        assert rec.membership.tier is None

    @pytest.mark.parametrize("value", [1, "true", None, []])
    def test_is_founder_only_accepts_bool(self, value):
        rec = ProfileRecord.model_validate({"id": "u", "is_founder": value})
        assert rec.is_founder is None

    def test_string_fields_wrong_type(self):
        rec = ProfileRecord.model_validate({"id": "u", "tier": 3, "role": {"x": 1}, "display_name": 5})
        assert rec.tier is None
        assert rec.role is None
        assert rec.display_name is None

    def test_timestamps(self):
        rec = ProfileRecord.model_validate(
            {"id": "u", "accepted_terms_at": "2024-05-01T12:00:00Z", "tokens_valid_after": "nonsense"}
        )
        assert rec.accepted_terms_at == datetime(2024, 5, 1, 12, tzinfo=timezone.utc)
        assert rec.tokens_valid_after is None

    def test_is_frozen(self):
        rec = ProfileRecord(id="u")
        with pytest.raises(ValidationError):
            rec.tier = "STARTER"


class TestEntitlements:
    def test_defaults(self):
        entitlements = Entitlements()
        assert entitlements.tier is Tier.FREE
        assert entitlements.roles == frozenset({RoleKey.VISITOR.value})
        assert entitlements.is_founder is False

    def test_gating_tier_maps_founder_to_deepening(self):
        entitlements = Entitlements(tier=Tier.FOUNDER, is_founder=True)
        assert entitlements.gating_tier is Tier.DEEPENING

    def test_gating_tier_otherwise_unchanged(self):
        assert Entitlements(tier=Tier.STARTER).gating_tier is Tier.STARTER

    def test_has_role(self):
        entitlements = Entitlements(roles=frozenset({"visitor", "explorer"}))
        assert entitlements.has_role("explorer") is True
        assert entitlements.has_role("mentor") is False

    def test_founder_has_every_role(self):
        entitlements = Entitlements(tier=Tier.FOUNDER, is_founder=True)
        assert entitlements.has_role("explorer") is True
