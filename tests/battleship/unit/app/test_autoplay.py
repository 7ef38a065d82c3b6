from battleship.game.app.services.autoplay import play_computer_match
from battleship.game.core.models import Difficulty, PlayerId
from battleship.game.infra.config import GameSettings


def test_two_pilot_match_runs_to_completion() -> None:
    summary = play_computer_match(GameSettings(ship_count=3, seed=21))

    assert summary.winner is not None
    assert summary.remaining_hits[summary.winner.opponent] == 0
    assert summary.remaining_hits[summary.winner] > 0
    assert summary.shots_fired[PlayerId.PLAYER_1] >= 1


def test_pilot_against_hard_ai_finishes() -> None:
    summary = play_computer_match(GameSettings(difficulty=Difficulty.HARD, seed=5))

    assert summary.winner is not None
    # The oracle never misses, so it sinks all 15 cells in 15 shots.
    if summary.winner is PlayerId.PLAYER_2:
        assert summary.shots_fired[PlayerId.PLAYER_2] == 15


def test_same_seed_gives_same_result() -> None:
    settings = GameSettings(difficulty=Difficulty.MEDIUM, seed=99)
    assert play_computer_match(settings) == play_computer_match(settings)
