import itertools
import math

import pytest

from spatialhashqt import intersects, sign_round
from spatialhashqt._common import _is_np_array, validate_rect

RECTS = [
    (0.0, 0.0, 10.0, 10.0),
    (10.0, 0.0, 10.0, 10.0),
    (5.0, 5.0, 10.0, 10.0),
    (-5.0, -5.0, 2.0, 2.0),
    (2.0, 2.0, 0.0, 0.0),
    (3.0, 3.0, -1.0, -1.0),
    (-100.0, 4.0, 1000.0, 1.0),
]


def test_intersects_overlap_and_disjoint():
    assert intersects((0, 0, 10, 10), (5, 5, 10, 10))
    assert intersects((0, 0, 10, 10), (2, 2, 1, 1))
    assert not intersects((0, 0, 10, 10), (20, 20, 1, 1))


def test_intersects_touching_edges_do_not_count():
    assert not intersects((0, 0, 10, 10), (10, 0, 10, 10))
    assert not intersects((0, 0, 10, 10), (0, 10, 10, 10))
    assert not intersects((0, 0, 10, 10), (10, 10, 5, 5))
    assert intersects((0, 0, 10, 10), (9.999, 0, 10, 10))


def test_intersects_is_symmetric():
    for a, b in itertools.product(RECTS, repeat=2):
        assert intersects(a, b) == intersects(b, a)


def test_intersects_nan_compares_false_everywhere():
    nan = math.nan
    assert intersects((nan, nan, 1.0, 1.0), (0.0, 0.0, 1.0, 1.0))


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0.0, 0),
        (-0.0, 0),
        (0.4, 0),
        (0.5, 1),
        (1.4, 1),
        (1.5, 2),
        (2.5, 3),
        (-0.4, 0),
        (-0.5, -1),
        (-1.5, -2),
        (-2.5, -3),
        (-1.6, -2),
        (0.49999999999999994, 0),
    ],
)
def test_sign_round_ties_away_from_zero(value, expected):
    got = sign_round(value)
    assert got == expected
    assert isinstance(got, int)


def test_sign_round_non_finite_passthrough():
    assert sign_round(math.inf) == math.inf
    assert sign_round(-math.inf) == -math.inf
    assert sign_round(math.nan) is math.nan
    assert sign_round(float("nan")) is math.nan


def test_validate_rect_normalizes_sequences():
    assert validate_rect([1, 2, 3, 4]) == (1, 2, 3, 4)
    r = (1.0, 2.0, -3.0, 4.0)
    assert validate_rect(r) is r


def test_validate_rect_rejects_wrong_length():
    with pytest.raises(ValueError, match="four numeric values"):
        validate_rect((1, 2, 3))


def test_is_np_array_without_numpy_objects():
    assert not _is_np_array([1, 2, 3])
    assert not _is_np_array((1, 2))
