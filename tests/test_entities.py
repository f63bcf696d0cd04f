"""
Tests for hostiles, the boss and pickups.
"""

import pytest


class TestHostile:
    """Tests for hostile movement and hits."""

    def test_spawning_hostile_not_targetable(self):
        """Test a hostile only becomes targetable once activated."""
        from wordsiege.entities.hostile import Hostile

        hostile = Hostile(id=1, word="fire", x=100.0, y=0.0, speed=100.0,
                          breach_y=620.0, field_width=1280.0)

        assert hostile.is_alive is True
        assert hostile.is_targetable is False
        hostile.activate()
        assert hostile.is_targetable is True

    def test_straight_advance_and_breach(self, make_hostile):
        """Test a hostile moves by speed * time and breaches at the wall."""
        hostile = make_hostile(1, "fire", y=500.0, speed=100.0)

        assert hostile.advance(1000) is False
        assert hostile.y == pytest.approx(600.0)
        assert hostile.advance(200) is True
        assert hostile.is_alive is False

    def test_zigzag_stays_in_field(self):
        """Test zigzag motion keeps x within the field margins."""
        from wordsiege.entities.hostile import Hostile, HostilePath, ZIGZAG_MARGIN

        hostile = Hostile(id=1, word="stronghold", x=130.0, y=0.0, speed=10.0,
                          breach_y=620.0, field_width=1280.0, path=HostilePath.ZIGZAG)
        hostile.activate()

        for _ in range(200):
            hostile.advance(50)
            assert ZIGZAG_MARGIN <= hostile.x <= 1280.0 - ZIGZAG_MARGIN

    def test_danger_zone(self, make_hostile):
        """Test hostiles close to the wall report danger."""
        hostile = make_hostile(1, "fire", y=500.0)

        assert hostile.in_danger_zone is True
        assert make_hostile(2, "fire", y=100.0).in_danger_zone is False

    def test_heavy_survives_first_hit(self, make_hostile):
        """Test heavy hostiles need two completed words."""
        from wordsiege.entities.hostile import HostileArchetype, HitResult

        hostile = make_hostile(1, "barricade", archetype=HostileArchetype.HEAVY)

        assert hostile.hit_by_arrow() == HitResult.DAMAGED
        hostile.replace_word("stronghold")
        assert hostile.typed_count == 0
        assert hostile.hit_by_arrow() == HitResult.ELIMINATED
        assert hostile.hit_by_arrow() == HitResult.IGNORED

    def test_bomb_ignores_hit_points(self, make_hostile):
        """Test a bomb eliminates heavies outright."""
        from wordsiege.entities.hostile import HostileArchetype

        hostile = make_hostile(1, "barricade", archetype=HostileArchetype.HEAVY)

        assert hostile.eliminate_by_bomb() is True
        assert hostile.eliminate_by_bomb() is False

    def test_progress_clamped(self, make_hostile):
        """Test typed progress stays within the word length."""
        hostile = make_hostile(1, "fire")

        hostile.set_progress(10)
        assert hostile.typed_count == 4
        hostile.set_progress(-3)
        assert hostile.typed_count == 0


class TestBoss:
    """Tests for the boss phase."""

    def _boss(self, words, y=0.0):
        from wordsiege.entities.boss import BossPhase

        return BossPhase(id=1, words=words, x=640.0, y=y, speed=100.0,
                         breach_y=620.0, pushback=100.0, retreat_ms=300.0)

    def test_empty_words_rejected(self):
        """Test a boss without words is a configuration error."""
        from wordsiege.core.errors import InvalidStageConfigError

        with pytest.raises(InvalidStageConfigError):
            self._boss([])

    def test_word_completion_pushes_back_and_retreats(self):
        """Test a non-final word pushes the boss back then reveals the next word."""
        from wordsiege.entities.boss import BossState

        boss = self._boss(["shadow", "focus"], y=300.0)

        assert boss.complete_word() is False
        assert boss.y == pytest.approx(200.0)
        assert boss.state == BossState.RETREATING
        assert boss.is_targetable is False

        assert boss.advance(299) is None
        assert boss.advance(1) == "word_changed"
        assert boss.word == "focus"
        assert boss.typed_count == 0

    def test_last_word_defeats(self):
        """Test completing the final word defeats the boss."""
        boss = self._boss(["shadow"])

        assert boss.complete_word() is True
        assert boss.is_defeated is True
        assert boss.words_remaining == 0

    def test_breach_and_recovery(self):
        """Test a breaching boss falls back and keeps its word."""
        boss = self._boss(["shadow", "focus"], y=610.0)
        boss.set_progress(3)

        assert boss.advance(200) == "breached"
        boss.recover_from_breach()

        assert boss.is_targetable is True
        assert boss.y == pytest.approx(520.0)
        assert boss.word == "shadow"
        assert boss.typed_count == 0


class TestPickup:
    """Tests for falling pickups."""

    def test_typed_pickup_requires_word(self):
        """Test bomb-charge pickups must carry a word."""
        from wordsiege.entities.pickup import TypedPickup, PickupKind

        with pytest.raises(ValueError):
            TypedPickup(id=1, resource_kind=PickupKind.BOMB_CHARGE, x=0.0, y=0.0,
                        fall_speed=100.0, ground_y=620.0)

    def test_typed_pickup_missed_on_landing(self):
        """Test an untyped bomb pickup is lost when it lands."""
        from wordsiege.entities.pickup import TypedPickup, PickupKind, PickupState

        pickup = TypedPickup(id=1, resource_kind=PickupKind.BOMB_CHARGE, x=0.0, y=600.0,
                             fall_speed=100.0, ground_y=620.0, word="ring")

        assert pickup.update(100) is None
        assert pickup.update(100) == PickupState.MISSED
        assert pickup.complete_by_typing() is False

    def test_repair_pickup_collected_on_landing(self):
        """Test wall-repair pickups are collected automatically."""
        from wordsiege.entities.pickup import TypedPickup, PickupKind, PickupState

        pickup = TypedPickup(id=1, resource_kind=PickupKind.WALL_REPAIR, x=0.0, y=610.0,
                             fall_speed=100.0, ground_y=620.0)

        assert pickup.is_targetable is False
        assert pickup.update(100) == PickupState.COLLECTED
