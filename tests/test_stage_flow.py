"""
Tests for the stage completion state machine.
"""


def _snapshot(**overrides):
    from wordsiege.systems.stage_flow import StageSnapshot

    values = dict(boss_spawned=True, boss_defeated=True, wave_exhausted=True,
                  live_hostiles=0, wall_health=3)
    values.update(overrides)
    return StageSnapshot(**values)


class TestStageFlow:
    """Tests for StageFlow transitions."""

    def test_won_when_all_conditions_hold(self):
        """Test the stage is won once the boss is down and the field is clear."""
        from wordsiege.systems.stage_flow import StageFlow, StageOutcome

        flow = StageFlow()

        assert flow.evaluate(_snapshot()) == StageOutcome.WON
        assert flow.is_terminal is True

    def test_not_won_with_live_hostiles(self):
        """Test live hostiles keep the stage active."""
        from wordsiege.systems.stage_flow import StageFlow

        flow = StageFlow()

        assert flow.evaluate(_snapshot(live_hostiles=1)) is None
        assert flow.is_active is True

    def test_not_won_before_boss(self):
        """Test the stage cannot be won before the boss appeared."""
        from wordsiege.systems.stage_flow import StageFlow

        flow = StageFlow()

        assert flow.evaluate(_snapshot(boss_spawned=False, boss_defeated=False)) is None

    def test_loss_takes_precedence(self):
        """Test a destroyed wall wins over a cleared field."""
        from wordsiege.systems.stage_flow import StageFlow, StageOutcome

        flow = StageFlow()

        assert flow.evaluate(_snapshot(wall_health=0)) == StageOutcome.LOST

    def test_terminal_state_entered_once(self):
        """Test later transitions are absorbed."""
        from wordsiege.systems.stage_flow import StageFlow, StageOutcome

        flow = StageFlow()
        flow.check_wall(0)

        assert flow.check_wall(0) is None
        assert flow.evaluate(_snapshot()) is None
        assert flow.outcome == StageOutcome.LOST
