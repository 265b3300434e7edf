import pytest

from tilegame.direction import Direction4
from tilegame.player import (
    RUN_FRAMES,
    WALK_FRAMES,
    Player,
    PlayerSpeeds,
    Run,
    Stand,
    Walk,
)
from tilegame.sheet import SheetCoords
from tilegame.tile import GridPosition


@pytest.mark.parametrize(
    "facing,expected",
    [
        (Direction4.NORTH, SheetCoords(0, 1)),
        (Direction4.EAST, SheetCoords(0, 2)),
        (Direction4.SOUTH, SheetCoords(0, 0)),
        (Direction4.WEST, SheetCoords(0, 2, flip_x=True)),
    ],
)
def test_stand_frames(facing, expected):
    assert Stand(facing).frames() == [expected]
    assert Stand(facing).anim_speed() is None


def test_stand_defaults_to_south():
    assert Stand() == Stand(Direction4.SOUTH)


def test_walk_frames_follow_velocity():
    assert Walk((0.0, 3.0)).frames() == WALK_FRAMES[Direction4.NORTH]
    assert Walk((-3.0, 0.0)).frames() == WALK_FRAMES[Direction4.WEST]
    assert Run((4.0, 0.2)).frames() == RUN_FRAMES[Direction4.EAST]
    assert len(Run((0.0, -4.0)).frames()) == 6


def test_walk_cycle_is_block_ordered():
    south = WALK_FRAMES[Direction4.SOUTH]
    # Three plain frames, then the same three mirrored
    assert [c.flip_x for c in south] == [False] * 3 + [True] * 3
    assert [c.flip_horizontal() for c in south[:3]] == south[3:]


def test_moving_without_velocity_uses_still_frame():
    assert Walk((0.0, 0.0)).frames() == [SheetCoords(0, 0)]
    assert Run((0.0, 0.0)).frames() == [SheetCoords(0, 0)]


def test_moving_kinds_animate():
    assert Walk((1.0, 0.0)).anim_speed() == 8.0
    assert Run((1.0, 0.0)).anim_speed() == 8.0


def test_player_kinds_sample_player_sheet_anchored_at_feet():
    for kind in (Stand(), Walk((1.0, 0.0)), Run((0.0, 1.0))):
        assert kind.atlas_name() == "player-base"
        assert kind.scale_and_anchor() == ((16.0, 16.0), (0.0, 0.5))


def test_direction_fallback():
    assert Walk((0.0, 0.0)).direction(Direction4.EAST) == Direction4.EAST
    assert Walk((0.0, 0.0)).direction() == Direction4.SOUTH
    assert Run((0.0, 1.0)).direction() == Direction4.NORTH


def test_walk_and_run_same_facing_are_continuous():
    assert Walk((3.0, 0.0)).is_continuous_with(Run((4.0, 0.0)))
    assert Run((0.0, 4.0)).is_continuous_with(Walk((0.2, 3.0)))


@pytest.mark.parametrize(
    "before,after",
    [
        (Walk((3.0, 0.0)), Run((0.0, 4.0))),
        (Walk((3.0, 0.0)), Walk((0.0, 3.0))),
        (Walk((3.0, 0.0)), Stand(Direction4.EAST)),
        (Stand(Direction4.EAST), Walk((3.0, 0.0))),
        (Walk((0.0, 0.0)), Run((0.0, 0.0))),
    ],
)
def test_other_transitions_are_not_continuous(before, after):
    assert not before.is_continuous_with(after)


def test_player_spawn_transform():
    player = Player(spawn=GridPosition(0, 0, 1))
    assert player.translation == (0.0, 0.5, 1.0)
    assert player.transform.scale == (1.0 / 16.0, 1.0 / 16.0)
    assert player.status == Stand(Direction4.SOUTH)


def test_accept_input_walk_and_run():
    player = Player(speeds=PlayerSpeeds(walk=3.0, run=4.0))
    player.accept_input((1.0, 0.0), run=False)
    assert player.status == Walk((3.0, 0.0))
    player.accept_input((0.0, -1.0), run=True)
    assert player.status == Run((0.0, -4.0))


def test_accept_input_normalizes_diagonals():
    player = Player(speeds=PlayerSpeeds(walk=2.0, run=4.0))
    player.accept_input((1.0, 1.0), run=False)
    vx, vy = player.status.velocity
    assert vx == pytest.approx(2.0 ** 0.5)
    assert vy == pytest.approx(2.0 ** 0.5)


def test_stopping_keeps_last_facing():
    player = Player()
    player.accept_input((-1.0, 0.0), run=False)
    player.accept_input((0.0, 0.0), run=False)
    assert player.status == Stand(Direction4.WEST)
    player.accept_input((0.0, 0.0), run=True)
    assert player.status == Stand(Direction4.WEST)


def test_apply_movement_integrates_velocity():
    player = Player(speeds=PlayerSpeeds(walk=3.0, run=4.0))
    player.accept_input((1.0, 0.0), run=False)
    player.apply_movement(0.5)
    assert player.translation == pytest.approx((1.5, 0.5, 1.0))


def test_standing_does_not_move():
    player = Player()
    player.apply_movement(1.0)
    assert player.translation == (0.0, 0.5, 1.0)


def test_sprite_animation_keeps_phase_from_walk_to_run():
    player = Player()
    player.accept_input((1.0, 0.0), run=False)
    player.update_sprite(0.0)
    for _ in range(3):
        player.update_sprite(0.1)
    elapsed = player.animation.elapsed_time
    assert elapsed == pytest.approx(0.3)
    player.accept_input((1.0, 0.0), run=True)
    tile = player.update_sprite(0.1)
    assert tile.kind == player.status
    assert player.animation.elapsed_time == pytest.approx(0.4)
    # floor(0.4 * 8) == 3
    assert tile.variant == 3
    assert tile.resolve() == RUN_FRAMES[Direction4.EAST][3]


def test_returned_sprite_tile_is_not_updated_afterwards():
    player = Player()
    player.accept_input((1.0, 0.0), run=False)
    first = player.update_sprite(0.0)
    player.update_sprite(0.5)
    assert first.variant == 0
    assert first.kind == Walk((3.0, 0.0))


def test_sprite_animation_restarts_on_turn():
    player = Player()
    player.accept_input((1.0, 0.0), run=False)
    player.update_sprite(0.0)
    player.update_sprite(0.3)
    player.accept_input((0.0, 1.0), run=False)
    tile = player.update_sprite(0.1)
    assert player.animation.elapsed_time == 0.0
    assert tile.variant == 0
    assert tile.resolve() == WALK_FRAMES[Direction4.NORTH][0]


def test_sprite_animation_restarts_when_stopping():
    player = Player()
    player.accept_input((0.0, -1.0), run=True)
    player.update_sprite(0.0)
    player.update_sprite(0.5)
    player.accept_input((0.0, 0.0), run=False)
    tile = player.update_sprite(0.1)
    assert tile.kind == Stand(Direction4.SOUTH)
    assert tile.resolve() == SheetCoords(0, 0)
    assert player.animation.elapsed_time == 0.0
