import pytest

from spatialhashqt import Quadtree, SpatialHashQuadtree

BOUNDARY = (0.0, 0.0, 100.0, 100.0)


@pytest.fixture
def boundary():
    return BOUNDARY


@pytest.fixture(params=[1, 4, 8])
def capacity(request):
    return request.param


@pytest.fixture
def qt(boundary):
    return Quadtree(boundary, capacity=4)


@pytest.fixture
def index():
    return SpatialHashQuadtree(cell_size=100.0)
