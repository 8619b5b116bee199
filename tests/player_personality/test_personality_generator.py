"""
Tests for deterministic personality generation.
"""

import pytest

from player_personality import generator
from player_personality.generator import (
    SLIDER_RANGES,
    generate_personality,
    seed_for,
    seeded_draw,
)
from player_personality.personality import SLIDER_NAMES, PlayerPersonality, TeamPriority


class TestSeededDraw:

    def test_same_pair_same_draw(self):
        assert seeded_draw("p_qb_1", "loyalty") == seeded_draw("p_qb_1", "loyalty")

    def test_salt_changes_draw(self):
        assert seed_for("p_qb_1", "loyalty") != seed_for("p_qb_1", "agent_quality")

    def test_draw_in_unit_interval(self):
        for player_id in ("a", "b", "c", "player-with-a-long-identifier"):
            assert 0.0 <= seeded_draw(player_id, "risk_tolerance") < 1.0


class TestGeneratePersonality:

    def test_deterministic_across_calls(self):
        assert generate_personality("p_wr_1") == generate_personality("p_wr_1")

    def test_different_players_differ(self):
        first = generate_personality("p_wr_1")
        second = generate_personality("p_wr_2")
        assert first.to_dict() != second.to_dict()

    @pytest.mark.parametrize("player_id", ["p1", "p2", "00-0033873", "rookie_2025_17"])
    def test_sliders_within_sub_ranges(self, player_id):
        personality = generate_personality(player_id)
        for name, (low, high) in SLIDER_RANGES.items():
            assert low <= getattr(personality, name) <= high

    def test_empty_id_rejected(self):
        with pytest.raises(ValueError):
            generate_personality("")

    def test_priorities_follow_thresholds(self, monkeypatch):
        """A 0.65 draw clears the role (0.5) and contender (0.6) thresholds but not location (0.7)."""
        monkeypatch.setattr(generator, "seeded_draw", lambda player_id, salt: 0.65)

        personality = generate_personality("p_any")

        assert personality.has_priority("role")
        assert personality.has_priority("contender")
        assert not personality.has_priority("location")
        assert personality.team_priorities[0] == TeamPriority("role", "starter", 0.8)

    def test_low_draw_gives_no_priorities(self, monkeypatch):
        monkeypatch.setattr(generator, "seeded_draw", lambda player_id, salt: 0.0)
        personality = generate_personality("p_any")
        assert personality.team_priorities == ()
        assert personality.risk_tolerance == pytest.approx(0.2)


class TestPlayerPersonality:

    def test_rejects_out_of_range_slider(self, crafted_personality):
        values = {name: getattr(crafted_personality, name) for name in SLIDER_NAMES}
        values["loyalty"] = 1.5
        with pytest.raises(ValueError, match="loyalty"):
            PlayerPersonality(player_id="x", **values)

    def test_dict_round_trip(self):
        personality = generate_personality("p_te_1")
        assert PlayerPersonality.from_dict(personality.to_dict()) == personality
