import numpy as np
import pytest

from yankee_swap.utils.random import MAX_UINT32, make_rng, spawn_seeds


def test_make_rng_is_seeded():
    assert make_rng(5).random() == make_rng(5).random()
    assert isinstance(make_rng(), np.random.Generator)


def test_spawn_seeds_deterministic_uint32():
    a = spawn_seeds(100, seed=1)
    b = spawn_seeds(100, seed=1)
    assert a.dtype == np.uint32
    assert np.array_equal(a, b)
    assert a.max() <= MAX_UINT32
    assert not np.array_equal(a, spawn_seeds(100, seed=2))


def test_spawn_seeds_prefix_stable():
    assert np.array_equal(spawn_seeds(10, seed=3), spawn_seeds(20, seed=3)[:10])


def test_spawn_seeds_edges():
    assert len(spawn_seeds(0, seed=0)) == 0
    with pytest.raises(ValueError):
        spawn_seeds(-1)
