import math

import pytest

from tilegame.map_tiles import Flagstone, Grass
from tilegame.sheet import SheetCoords
from tilegame.tile import (
    AnimatedTile,
    GridPosition,
    Tile,
    TileKind,
    advance_animation,
    place,
)


class DummyKind(TileKind):
    """Animated kind with four frames on one row."""

    def __init__(self, speed=4.0, name="a"):
        self.speed = speed
        self.name = name

    def __eq__(self, other):
        return isinstance(other, DummyKind) and other.name == self.name

    def frames(self):
        return [SheetCoords(i, 0) for i in range(4)]

    def atlas_name(self):
        return "dummy"

    def scale_and_anchor(self):
        return (16.0, 8.0), (0.25, 0.5)

    def anim_speed(self):
        return self.speed

    def is_continuous_with(self, other):
        return isinstance(other, DummyKind) and {self.name, other.name} == {"a", "b"}


def test_grass_variant_wraps_around():
    # 4x4 region interleaved with flips: 32 frames
    assert len(Grass().frames()) == 32
    assert Tile(Grass(), 33).resolve() == Tile(Grass(), 1).resolve()
    assert Tile(Grass(), 1).resolve() == SheetCoords(0, 0, flip_x=True)


@pytest.mark.parametrize("variant", [0, 1, 5, 31, 32, 10**9, 2**63 + 7])
def test_resolve_never_fails(variant):
    frames = Flagstone().frames()
    assert Tile(Flagstone(), variant).resolve() == frames[variant % len(frames)]


def test_negative_variant_rejected():
    with pytest.raises(ValueError):
        Tile(Grass(), -1)


def test_new_tile_starts_at_variant_zero():
    tile = Tile(Grass())
    assert tile.variant == 0
    assert tile.resolve() == SheetCoords(0, 0)


def test_abstract_kind_raises():
    kind = TileKind()
    with pytest.raises(NotImplementedError):
        kind.frames()
    with pytest.raises(NotImplementedError):
        kind.atlas_name()
    assert kind.anim_speed() is None
    assert not kind.is_continuous_with(kind)


def test_animated_variant_follows_elapsed_time():
    anim = AnimatedTile(Tile(DummyKind(speed=4.0)))
    assert anim.variant == 0
    anim.tick(0.3)
    # floor(0.3 * 4) == 1
    assert anim.variant == 1
    anim.tick(0.5)
    assert anim.variant == 3
    anim.tick(0.25)
    # 1.05 * 4 = 4.2 -> variant 4 wraps to frame 0
    assert anim.variant == 4
    assert anim.resolve() == SheetCoords(0, 0)


def test_static_kind_stays_on_variant_zero():
    anim = AnimatedTile(Tile(Grass(), 7))
    assert anim.variant == 0
    anim.tick(10.0)
    assert anim.variant == 0
    assert anim.elapsed_time == pytest.approx(10.0)


def test_wrapping_leaves_callers_tile_alone():
    tile = Tile(Grass(), 7)
    anim = AnimatedTile(tile)
    anim.tick(1.0)
    anim.observe(Flagstone(), 0.1)
    assert tile.variant == 7
    assert tile.kind == Grass()


def test_tile_snapshot_does_not_follow_later_ticks():
    anim = AnimatedTile(Tile(DummyKind(speed=4.0)))
    anim.tick(0.3)
    frame = anim.tile
    anim.tick(0.5)
    assert frame.variant == 1
    assert anim.tile.variant == 3
    assert frame is not anim.tile


@pytest.mark.parametrize("dt1,dt2",[(0.1, 0.2), (0.125, 0.125), (1.0, 0.33)])
def test_tick_is_additive(dt1, dt2):
    split = AnimatedTile(Tile(DummyKind()))
    split.tick(dt1)
    split.tick(dt2)
    once = AnimatedTile(Tile(DummyKind()))
    once.tick(dt1 + dt2)
    assert split.variant == once.variant
    assert math.isclose(split.elapsed_time, once.elapsed_time)


def test_negative_dt_is_a_programming_error():
    anim = AnimatedTile(Tile(DummyKind()))
    with pytest.raises(AssertionError):
        anim.tick(-0.1)


def test_observe_same_kind_ticks():
    anim = AnimatedTile(Tile(DummyKind(name="a")))
    anim.observe(DummyKind(name="a"), 0.5)
    assert anim.elapsed_time == pytest.approx(0.5)
    assert anim.variant == 2


def test_observe_continuous_change_keeps_phase():
    anim = AnimatedTile(Tile(DummyKind(name="a")), elapsed_time=0.5)
    anim.observe(DummyKind(name="b"), 0.25)
    assert anim.kind.name == "b"
    assert anim.elapsed_time == pytest.approx(0.75)
    assert anim.variant == 3


def test_observe_other_change_restarts():
    anim = AnimatedTile(Tile(DummyKind(name="a")), elapsed_time=0.5)
    anim.observe(DummyKind(name="c"), 0.25)
    assert anim.kind.name == "c"
    assert anim.elapsed_time == 0.0
    assert anim.variant == 0


def test_advance_animation_attaches_tracker():
    anim = advance_animation(None, DummyKind(), 0.4)
    # A fresh tracker starts at the beginning; the first frame is not ticked
    assert anim.elapsed_time == 0.0
    same = advance_animation(anim, DummyKind(), 0.4)
    assert same is anim
    assert anim.elapsed_time == pytest.approx(0.4)


def test_place_applies_anchor_and_reciprocal_scale():
    t = place(GridPosition(3, -2, 1), DummyKind())
    assert t.translation == (3.25, -1.5, 1.0)
    assert t.scale == (1.0 / 16.0, 1.0 / 8.0)


def test_grid_position_transform_matches_place():
    pos = GridPosition(-4, 7, 0)
    assert pos.transform(Grass()) == place(pos, Grass())
    assert pos.transform(Grass()).translation == (-4.0, 7.0, 0.0)
    assert pos.transform(Grass()).scale == (1.0 / 32.0, 1.0 / 32.0)


def test_grid_positions_are_unique_keys():
    tiles = {}
    tiles[GridPosition(0, 0, 0)] = Tile(Grass())
    tiles[GridPosition(0, 0, 0)] = Tile(Flagstone())
    tiles[GridPosition(0, 0, 1)] = Tile(Grass())
    assert len(tiles) == 2
    assert tiles[GridPosition(0, 0, 0)].kind == Flagstone()
