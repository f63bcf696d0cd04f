"""
Tests for score, bombs and wall health.
"""

import pytest


class TestScoreTracker:
    """Tests for score, combo and accuracy."""

    def test_accuracy_is_one_without_attempts(self):
        """Test accuracy defaults to 1 before anything was typed."""
        from wordsiege.systems.economy import ScoreTracker

        assert ScoreTracker().accuracy == 1.0

    def test_combo_multiplier_steps(self):
        """Test the multiplier grows by 20% every five combo."""
        from wordsiege.systems.economy import ScoreTracker

        assert ScoreTracker.combo_multiplier(4) == pytest.approx(1.0)
        assert ScoreTracker.combo_multiplier(5) == pytest.approx(1.2)
        assert ScoreTracker.combo_multiplier(12) == pytest.approx(1.4)

    def test_six_letters_at_combo_five(self):
        """Test a 6-letter word completing combo 5 scores 72."""
        from wordsiege.systems.economy import ScoreTracker

        tracker = ScoreTracker()
        tracker.combo = 4

        assert tracker.register_success(6) == 72
        assert tracker.combo == 5

    def test_mistake_then_success_resets_combo(self):
        """Test a mistake drops the combo so the next success starts at 1."""
        from wordsiege.systems.economy import ScoreTracker

        tracker = ScoreTracker()
        for _ in range(3):
            tracker.register_success(4)
        tracker.register_mistake()
        tracker.register_success(4)

        assert tracker.combo == 1
        assert tracker.best_combo == 3

    def test_breach_counts_against_accuracy(self):
        """Test breaches reset combo and count as a mistake."""
        from wordsiege.systems.economy import ScoreTracker

        tracker = ScoreTracker()
        tracker.register_success(3)
        tracker.register_breach()

        assert tracker.combo == 0
        assert tracker.breaches == 1
        assert tracker.accuracy == pytest.approx(3 / 4)

    def test_bomb_clear_scoring(self):
        """Test bomb eliminations score 15 each and count one bomb."""
        from wordsiege.systems.economy import ScoreTracker

        tracker = ScoreTracker()
        tracker.register_bomb_clear(3)
        tracker.register_bomb_clear(0)

        summary = tracker.summary()
        assert summary.score == 45
        assert summary.bombs_used == 1
        assert summary.enemies_defeated == 3


class TestBombState:
    """Tests for bomb charges and cooldown."""

    def test_combo_milestones_grant_charges(self):
        """Test reaching combo 12 with threshold 6 grants two charges."""
        from wordsiege.systems.economy import BombState

        bombs = BombState(initial=0, max_charges=5, cooldown_ms=1000, combo_threshold=6)
        granted = [bombs.register_combo(combo) for combo in range(1, 13)]

        assert granted.count(True) == 2
        assert bombs.charges == 2

    def test_same_milestone_not_granted_twice(self):
        """Test repeating a milestone without a reset grants nothing."""
        from wordsiege.systems.economy import BombState

        bombs = BombState(initial=0, max_charges=5, combo_threshold=6)

        assert bombs.register_combo(6) is True
        assert bombs.register_combo(6) is False
        bombs.register_combo(0)
        assert bombs.register_combo(6) is True

    def test_charges_capped(self):
        """Test charges never exceed the maximum."""
        from wordsiege.systems.economy import BombState

        bombs = BombState(initial=2, max_charges=2)

        assert bombs.add_charge(1) is False
        assert bombs.charges == 2

    def test_cooldown_regenerates_after_last_charge(self):
        """Test spending the last charge starts the regeneration timer."""
        from wordsiege.systems.economy import BombState

        bombs = BombState(initial=1, max_charges=2, cooldown_ms=1000)

        assert bombs.activate() is True
        assert bombs.can_activate() is False
        assert bombs.update(999) is False
        assert bombs.update(1) is True
        assert bombs.charges == 1

    def test_activate_without_charges(self):
        """Test activation fails with no charges."""
        from wordsiege.systems.economy import BombState

        bombs = BombState(initial=0, max_charges=2)

        assert bombs.activate() is False


class TestWall:
    """Tests for wall health."""

    def test_damage_and_repair_clamped(self):
        """Test health stays in [0, max]."""
        from wordsiege.systems.economy import Wall

        wall = Wall(3)
        wall.repair(2)
        assert wall.health == 3

        wall.take_damage(5)
        assert wall.health == 0
        assert wall.is_destroyed is True
        assert wall.status() == {"current": 0, "max": 3}
