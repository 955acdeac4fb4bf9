"""Random number helpers: the die the front end rolls for the engine."""

from __future__ import annotations

import numpy as np

DEFAULT_SIDES = 6


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Return a :class:`numpy.random.Generator` seeded with *seed*."""

    return np.random.default_rng(seed)


class DieRoller:
    """Uniform die over ``1..sides`` backed by a numpy ``Generator``.

    The engine never draws random numbers itself; whoever drives it owns one
    of these and passes each face to :meth:`pig.game.engine.TurnEngine.roll`.
    """

    def __init__(
        self,
        sides: int = DEFAULT_SIDES,
        *,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
    ) -> None:
        if sides < 1:
            raise ValueError(f"a die needs at least one side, got {sides}")
        self.sides = int(sides)
        self.rng = rng if rng is not None else make_rng(seed)

    def roll(self) -> int:
        """Return one face in ``[1, sides]``."""
        return int(self.rng.integers(1, self.sides + 1))

    def __repr__(self) -> str:
        return f"DieRoller(sides={self.sides})"


__all__ = ["DEFAULT_SIDES", "DieRoller", "make_rng"]
