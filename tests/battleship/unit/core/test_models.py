from battleship.game.core.models import (
    Coord,
    Orientation,
    PlayerId,
    ShipPlacement,
    ShotState,
    cells_for_placement,
    total_hits_for_fleet,
)


def test_cells_for_placement_horizontal_and_vertical() -> None:
    horizontal = ShipPlacement(3, Coord(2, 4), Orientation.HORIZONTAL)
    vertical = ShipPlacement(2, Coord(7, 1), Orientation.VERTICAL)
    assert cells_for_placement(horizontal) == [Coord(2, 4), Coord(2, 5), Coord(2, 6)]
    assert cells_for_placement(vertical) == [Coord(7, 1), Coord(8, 1)]


def test_orientation_toggles_both_ways() -> None:
    assert Orientation.HORIZONTAL.toggled() is Orientation.VERTICAL
    assert Orientation.VERTICAL.toggled() is Orientation.HORIZONTAL


def test_player_opponent() -> None:
    assert PlayerId.PLAYER_1.opponent is PlayerId.PLAYER_2
    assert PlayerId.PLAYER_2.opponent is PlayerId.PLAYER_1


def test_total_hits_for_fleet_is_triangular() -> None:
    assert [total_hits_for_fleet(n) for n in range(1, 6)] == [1, 3, 6, 10, 15]


def test_shot_state_values_fit_grid_storage() -> None:
    assert (ShotState.UNSHOT, ShotState.MISS, ShotState.HIT) == (0, 1, 2)
