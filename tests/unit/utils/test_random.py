from __future__ import annotations

import numpy as np
import pytest

from helpers.rng import SeqGen
from pig.utils.random import DieRoller, make_rng


@pytest.mark.unit
def test_make_rng_is_reproducible():
    a = make_rng(123).integers(0, 1000, size=5)
    b = make_rng(123).integers(0, 1000, size=5)
    assert np.array_equal(a, b)


@pytest.mark.unit
def test_roller_stays_on_the_die():
    roller = DieRoller(6, seed=7)
    faces = {roller.roll() for _ in range(500)}
    assert faces == {1, 2, 3, 4, 5, 6}


@pytest.mark.unit
def test_roller_returns_plain_ints():
    assert type(DieRoller(seed=1).roll()) is int


@pytest.mark.unit
def test_roller_asks_generator_for_inclusive_range():
    gen = SeqGen([3, 1, 6])
    roller = DieRoller(6, rng=gen)
    assert [roller.roll() for _ in range(4)] == [3, 1, 6, 3]
    assert gen.calls[0] == (1, 7)


@pytest.mark.unit
def test_seeded_rollers_agree():
    a = DieRoller(seed=99)
    b = DieRoller(seed=99)
    assert [a.roll() for _ in range(20)] == [b.roll() for _ in range(20)]


@pytest.mark.unit
def test_roller_rejects_faceless_die():
    with pytest.raises(ValueError):
        DieRoller(0)
