"""
Player Rating Service

Converts a season of raw statistics into a bounded 50-99 overall rating.

The overall rating blends three components:
- Fantasy rating (60%): fantasy points per game against an elite
  per-position benchmark, plus a small durability bonus
- Position rating (30%): efficiency stats for the player's position family
- Experience rating (10%): experience and age adjustments

All component ratings start from a neutral 70 and are clamped so no single
stat line can push a player outside the 50-99 band.

Usage:
    service = PlayerRatingService()
    context = RatingContext(position=Position.WR, age=26, years_exp=4,
                            fantasy_points_ppr=260.0, games_played=17)
    overall = service.calculate_overall_rating(stats, context)
"""

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple
import logging

from player_valuation.player import MAX_OVERALL, MIN_OVERALL, Position


NEUTRAL_RATING = 70.0
GAMES_PER_SEASON = 17


@dataclass(frozen=True)
class RatingContext:
    """
    Non-stat inputs to a rating calculation.

    Attributes:
        position: Position family being rated
        age: Player age during the season
        years_exp: Completed seasons of experience
        fantasy_points: Standard-scoring fantasy points for the season
        fantasy_points_ppr: PPR fantasy points (preferred when present)
        games_played: Games appeared in
        games_started: Games started
    """

    position: Position
    age: int
    years_exp: int
    fantasy_points: float = 0.0
    fantasy_points_ppr: float = 0.0
    games_played: int = 0
    games_started: int = 0


def _clamp(value: float, low: float = MIN_OVERALL, high: float = MAX_OVERALL) -> float:
    return max(low, min(high, value))


class PlayerRatingService:
    """
    Stateless overall-rating calculator.

    Stats are passed as a dict keyed by snake_case stat names
    (e.g. "passing_yards", "receiving_targets"). Missing stats count as 0.
    """

    FANTASY_WEIGHT = 0.6
    POSITION_WEIGHT = 0.3
    EXPERIENCE_WEIGHT = 0.1

    # Elite season fantasy totals: (ppr, standard)
    ELITE_FANTASY_BENCHMARKS: Dict[Position, Tuple[int, int]] = {
        Position.QB: (400, 350),
        Position.RB: (300, 250),
        Position.WR: (250, 200),
        Position.TE: (200, 150),
        Position.K: (150, 150),
        Position.DEF: (150, 150),
        Position.DL: (100, 100),
        Position.LB: (120, 120),
        Position.DB: (100, 100),
    }

    POSITION_SCARCITY_MULTIPLIERS: Dict[Position, float] = {
        Position.QB: 1.2,
        Position.RB: 1.1,
        Position.WR: 1.0,
        Position.TE: 1.3,
        Position.K: 0.7,
        Position.DEF: 0.9,
        Position.DL: 0.8,
        Position.LB: 0.8,
        Position.DB: 0.8,
    }

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    # ========================================================================
    # OVERALL RATING
    # ========================================================================

    def calculate_overall_rating(self, stats: Mapping[str, float], context: RatingContext) -> int:
        """
        Calculate overall rating from season stats.

        Args:
            stats: Season stat line
            context: Position, age and usage context

        Returns:
            Overall rating clamped to 50-99
        """
        fantasy = self.calculate_fantasy_rating(context)
        position = self.calculate_position_rating(stats, context)
        experience = self.calculate_experience_rating(context)

        overall = round(
            fantasy * self.FANTASY_WEIGHT
            + position * self.POSITION_WEIGHT
            + experience * self.EXPERIENCE_WEIGHT
        )

        self.logger.debug(
            f"{context.position.value} rating: fantasy={fantasy:.1f} "
            f"position={position:.1f} experience={experience:.1f} -> {overall}"
        )

        return int(_clamp(overall))

    def calculate_fantasy_rating(self, context: RatingContext) -> float:
        """
        Rate fantasy production per game against the elite benchmark.

        50 is replacement level and 99 is an elite season. Players appearing
        in 15+ games get +2, and +1 more at 16+.
        """
        benchmark = self.get_elite_benchmark(context.position)
        if benchmark is None:
            return NEUTRAL_RATING

        ppr_benchmark, standard_benchmark = benchmark
        fantasy_points = context.fantasy_points_ppr or context.fantasy_points or 0.0
        games = context.games_played or 1
        points_per_game = fantasy_points / games

        performance = max(
            points_per_game / (ppr_benchmark / GAMES_PER_SEASON),
            points_per_game / (standard_benchmark / GAMES_PER_SEASON),
        )

        rating = 50 + performance * 49

        if games >= 15:
            rating += 2
        if games >= 16:
            rating += 1

        return min(float(MAX_OVERALL), rating)

    def calculate_position_rating(self, stats: Mapping[str, float], context: RatingContext) -> float:
        """Dispatch to the position-family efficiency rating."""
        position = context.position

        if position == Position.QB:
            rating = self._rate_quarterback(stats)
        elif position == Position.RB:
            rating = self._rate_running_back(stats)
        elif position == Position.WR:
            rating = self._rate_wide_receiver(stats)
        elif position == Position.TE:
            rating = self._rate_tight_end(stats)
        elif position == Position.K:
            rating = self._rate_kicker(stats)
        elif position in (Position.DEF, Position.DL, Position.LB, Position.DB):
            rating = self._rate_defense(stats)
        else:
            rating = NEUTRAL_RATING

        return _clamp(rating)

    def calculate_experience_rating(self, context: RatingContext) -> float:
        """Experience and age adjustment around a neutral 70."""
        rating = NEUTRAL_RATING

        if context.years_exp == 0:
            rating -= 5  # rookie
        elif context.years_exp <= 2:
            rating -= 2
        elif context.years_exp >= 8:
            rating -= 3

        if context.age < 22:
            rating -= 3
        if context.age >= 30:
            rating -= 2

        return _clamp(rating)

    # ========================================================================
    # LOOKUPS
    # ========================================================================

    def get_scarcity_multiplier(self, position: Position) -> float:
        return self.POSITION_SCARCITY_MULTIPLIERS.get(position, 1.0)

    def get_elite_benchmark(self, position: Position) -> Optional[Tuple[int, int]]:
        """(ppr, standard) elite season benchmark, or None for an unrated position."""
        return self.ELITE_FANTASY_BENCHMARKS.get(position)

    # ========================================================================
    # POSITION FAMILIES
    # ========================================================================

    def _rate_quarterback(self, stats: Mapping[str, float]) -> float:
        rating = NEUTRAL_RATING
        attempts = _stat(stats, "passing_attempts")

        if attempts > 0:
            rating += _stat(stats, "passing_completions") / attempts * 10
            rating += min(10, _stat(stats, "passing_yards") / attempts * 0.5)
            rating += min(10, _stat(stats, "passing_touchdowns") / attempts * 100)
            rating -= min(10, _stat(stats, "passing_interceptions") / attempts * 100)

        rushing_yards = _stat(stats, "rushing_yards")
        if rushing_yards > 0:
            rating += min(5, rushing_yards / 100)

        return rating

    def _rate_running_back(self, stats: Mapping[str, float]) -> float:
        rating = NEUTRAL_RATING
        carries = _stat(stats, "rushing_attempts")

        if carries > 0:
            rating += min(15, _stat(stats, "rushing_yards") / carries * 3)
            rating += min(10, _stat(stats, "rushing_touchdowns") / carries * 100)

        targets = _stat(stats, "receiving_targets")
        if targets > 0:
            rating += _stat(stats, "receptions") / targets * 5
            receiving_yards = _stat(stats, "receiving_yards")
            if receiving_yards > 0:
                rating += min(5, receiving_yards / 100)

        return rating

    def _rate_wide_receiver(self, stats: Mapping[str, float]) -> float:
        rating = NEUTRAL_RATING
        targets = _stat(stats, "receiving_targets")

        if targets > 0:
            rating += _stat(stats, "receptions") / targets * 10
            receiving_yards = _stat(stats, "receiving_yards")
            if receiving_yards > 0:
                rating += min(15, receiving_yards / targets * 0.3)
            rating += min(10, _stat(stats, "receiving_touchdowns") / targets * 100)

        return rating

    def _rate_tight_end(self, stats: Mapping[str, float]) -> float:
        """Receiving efficiency weighted up for scarcity, plus volume and blocking bonuses."""
        rating = NEUTRAL_RATING
        targets = _stat(stats, "receiving_targets")

        if targets > 0:
            rating += _stat(stats, "receptions") / targets * 12
            receiving_yards = _stat(stats, "receiving_yards")
            if receiving_yards > 0:
                rating += min(18, receiving_yards / targets * 0.35)
            rating += min(12, _stat(stats, "receiving_touchdowns") / targets * 100)

            if targets >= 100:
                rating += 3
            if targets >= 120:
                rating += 2

        rushing_yards = _stat(stats, "rushing_yards")
        if rushing_yards > 0:
            rating += min(3, rushing_yards / 50)

        started = _stat(stats, "games_started")
        if started > 0:
            rating += min(2, started / 8)

        return rating

    def _rate_kicker(self, stats: Mapping[str, float]) -> float:
        rating = NEUTRAL_RATING
        attempts = _stat(stats, "field_goals_attempted")

        if attempts > 0:
            rating += _stat(stats, "field_goals_made") / attempts * 20
            rating += min(10, _stat(stats, "field_goals_made_50_plus") * 2)

        return rating

    def _rate_defense(self, stats: Mapping[str, float]) -> float:
        rating = NEUTRAL_RATING

        tackles = _stat(stats, "solo_tackles") + _stat(stats, "assisted_tackles")
        rating += min(10, tackles / 5)
        rating += min(10, _stat(stats, "sacks") * 2)
        rating += min(10, _stat(stats, "interceptions") * 3)
        rating += min(5, _stat(stats, "passes_defended"))
        rating += min(3, _stat(stats, "tackles_for_loss"))

        return rating


def _stat(stats: Mapping[str, float], key: str) -> float:
    return stats.get(key) or 0


# ============================================================================
# RANK-BASED ESTIMATE
# ============================================================================

_RANK_POSITION_MODIFIERS = {
    Position.QB: 1.05,
    Position.RB: 0.98,
    Position.WR: 1.0,
    Position.TE: 0.95,
    Position.K: 0.9,
    Position.DEF: 0.95,
}


def estimate_overall_from_rank(
    search_rank: Optional[int],
    age: int,
    years_exp: int,
    position: Position
) -> int:
    """
    Estimate an overall rating from a draft/search rank when no stats exist.

    Lower rank means a better player. Prime-age (25-28) players get a boost,
    very young and old players a penalty.

    Returns:
        Rating clamped to 50-99
    """
    base = max(50, 100 - (search_rank or 100))

    if age < 22:
        age_modifier = 0.85
    elif age <= 24:
        age_modifier = 0.9
    elif age <= 28:
        age_modifier = 1.05
    elif age <= 32:
        age_modifier = 1.0
    elif age <= 35:
        age_modifier = 0.9
    else:
        age_modifier = 0.8

    if years_exp == 0:
        experience_modifier = 0.95
    elif years_exp <= 2:
        experience_modifier = 0.98
    elif years_exp <= 4:
        experience_modifier = 1.02
    elif years_exp <= 6:
        experience_modifier = 1.0
    elif years_exp <= 8:
        experience_modifier = 0.98
    else:
        experience_modifier = 0.95

    position_modifier = _RANK_POSITION_MODIFIERS.get(position, 1.0)

    estimate = round(base * age_modifier * experience_modifier * position_modifier)
    return int(_clamp(estimate))
