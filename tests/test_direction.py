import pytest

from tilegame.direction import (
    Direction4,
    Direction8,
    NoOrientation,
    direction4_from_vector,
)

OPPOSITE = {
    Direction4.NORTH: Direction4.SOUTH,
    Direction4.SOUTH: Direction4.NORTH,
    Direction4.EAST: Direction4.WEST,
    Direction4.WEST: Direction4.EAST,
}


@pytest.mark.parametrize(
    "vector,expected",
    [
        ((0.1, 1.0), Direction4.NORTH),
        ((1.0, 0.1), Direction4.EAST),
        ((0.0, -2.0), Direction4.SOUTH),
        ((-3.0, 0.5), Direction4.WEST),
        # 45 degrees: normalized |x| is ~0.707, past the 0.5 threshold
        ((1.0, 1.0), Direction4.EAST),
        ((-1.0, -1.0), Direction4.WEST),
        # Steeper than 60 degrees: |x| under 0.5 stays vertical
        ((0.5, 1.0), Direction4.NORTH),
        ((-0.5, -1.0), Direction4.SOUTH),
    ],
)
def test_classifies_vectors(vector, expected):
    assert direction4_from_vector(vector) == expected


def test_zero_vector_has_no_orientation():
    with pytest.raises(NoOrientation):
        direction4_from_vector((0.0, 0.0))


def test_no_orientation_is_a_value_error():
    # Callers catching ValueError also catch the zero-vector case
    with pytest.raises(ValueError):
        direction4_from_vector((0, 0))


@pytest.mark.parametrize(
    "vector",
    [
        (0.1, 1.0),
        (1.0, 0.1),
        (0.3, -0.9),
        (-0.7, 0.2),
        (1e-6, 0.0),
        (0.0, 5.0),
        (2.0, 2.0),
        (-4.0, 1.5),
    ],
)
def test_negated_vector_faces_the_opposite_way(vector):
    forward = direction4_from_vector(vector)
    backward = direction4_from_vector((-vector[0], -vector[1]))
    assert backward == OPPOSITE[forward]


def test_magnitude_does_not_matter():
    assert direction4_from_vector((0.01, 0.2)) == direction4_from_vector(
        (100.0, 2000.0)
    )


def test_defaults_face_south():
    assert Direction4.default() is Direction4.SOUTH
    assert Direction8.default() is Direction8.SOUTH
    assert len(Direction8) == 8
