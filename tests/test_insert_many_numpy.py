import numpy as np
import pytest

from spatialhashqt import InsertResult, SpatialHashQuadtree

RECTS = [(10.0, 10.0, 5.0, 5.0), (20.0, 20.0, 5.0, 5.0), (130.0, 30.0, 5.0, 5.0)]


def data(items):
    """Return sorted list of payloads from [Item, ...]."""
    return sorted(it.data for it in items)


def test_insert_many_list_and_numpy_agree():
    idx = SpatialHashQuadtree(cell_size=100.0)
    res = idx.insert_many(RECTS, objs=["a", "b", "c"])
    assert res == InsertResult(count=3, cells_created=2)
    assert res.ok

    idx_np = SpatialHashQuadtree(cell_size=100.0)
    res_np = idx_np.insert_many(np.array(RECTS, dtype=np.float32), objs=["a", "b", "c"])
    assert res_np == res

    q = (0.0, 0.0, 200.0, 100.0)
    assert data(idx.query(q)) == data(idx_np.query(q)) == ["a", "b", "c"]
    assert [it.bounds for it in idx_np.query((0.0, 0.0, 100.0, 100.0))] == RECTS[:2]


def test_insert_many_without_objs():
    idx = SpatialHashQuadtree(cell_size=100.0)
    res = idx.insert_many(RECTS)
    assert res.count == 3
    assert all(it.data is None for it in idx)


def test_insert_many_counts_only_stored_items():
    idx = SpatialHashQuadtree(cell_size=100.0)
    res = idx.insert_many([(10.0, 10.0, 1.0, 1.0), (60.0, 60.0, 1.0, 1.0)])
    assert res == InsertResult(count=1, cells_created=2)
    assert len(idx) == 1


def test_insert_empty_numpy_array():
    idx = SpatialHashQuadtree(cell_size=100.0)
    res = idx.insert_many(np.empty((0, 4), dtype=np.float64))
    assert res == InsertResult(count=0, cells_created=0)
    assert not res.ok
    assert len(idx) == 0


def test_insert_many_numpy_wrong_shape():
    idx = SpatialHashQuadtree(cell_size=100.0)
    with pytest.raises(ValueError, match="shape"):
        idx.insert_many(np.zeros((3, 3)))
    assert len(idx) == 0


def test_insert_many_objs_length_mismatch():
    idx = SpatialHashQuadtree(cell_size=100.0)
    with pytest.raises(ValueError):
        idx.insert_many(RECTS, objs=["only one"])
    with pytest.raises(ValueError):
        idx.insert_many_np(np.array(RECTS), objs=["only one"])
    assert len(idx) == 0


def test_insert_many_np_requires_array():
    idx = SpatialHashQuadtree(cell_size=100.0)
    with pytest.raises(TypeError):
        idx.insert_many_np(RECTS)


def test_query_np():
    idx = SpatialHashQuadtree(cell_size=100.0)
    idx.insert_many(np.array(RECTS), objs=[1, 2, 3])

    coords, objs = idx.query_np((0.0, 0.0, 100.0, 100.0))
    assert coords.dtype == np.float64
    assert coords.shape == (2, 4)
    assert [tuple(row) for row in coords.tolist()] == RECTS[:2]
    assert objs == [1, 2]

    coords, objs = idx.query_np((1000.0, 1000.0, 1.0, 1.0))
    assert coords.shape == (0, 4)
    assert objs == []


def test_empty_numpy_array_with_objs_mismatch():
    idx = SpatialHashQuadtree(cell_size=100.0)
    with pytest.raises(ValueError):
        idx.insert_many(np.empty((0, 4)), objs=["x"])
    assert idx.insert_many(np.empty((0, 4)), objs=[]).count == 0


def test_array_payloads_survive_membership_checks():
    idx = SpatialHashQuadtree(cell_size=100.0)
    payloads = [np.array([1, 2]), np.array([3, 4])]
    idx.insert_many(RECTS[:2], objs=payloads)

    got = idx.query((0.0, 0.0, 100.0, 100.0))
    assert [it.data is p for it, p in zip(got, payloads)] == [True, True]
    assert got[0] in got
    assert len(set(got)) == 2
