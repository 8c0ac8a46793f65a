"""Gaussian noise from a uniform random source (Box-Muller)."""
from __future__ import annotations

from typing import Optional, Tuple, Union, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


class NormalSampler:
    """
    Draws normally distributed values using only the uniform stream of the
    injected generator, so a seeded generator reproduces a dataset exactly.
    """

    def __init__(self, rng: np.random.Generator) -> None:
        self.rng = rng

    def _uniform_open(self, size: Optional[Union[int, Tuple[int, ...]]]) -> float | npt.NDArray[np.float64]:
        """Uniform draw on (0, 1); exact zeros are redrawn."""
        if size is None:
            u = self.rng.random()
            while u == 0.0:
                u = self.rng.random()
            return u

        u = self.rng.random(size)
        zeros = u == 0.0
        while zeros.any():
            u[zeros] = self.rng.random(int(zeros.sum()))
            zeros = u == 0.0
        return u

    def sample(
        self,
        mean: float = 0.0,
        stddev: float = 1.0,
        size: Optional[Union[int, Tuple[int, ...]]] = None,
    ) -> float | npt.NDArray[np.float64]:
        """
        Draw from N(mean, stddev²).

        Args:
            mean: Distribution mean.
            stddev: Standard deviation.
            size: Output shape. None returns a single float.

        Returns:
            A float, or an array of the requested shape.
        """
        u1 = self._uniform_open(size)
        u2 = self.rng.random(size) if size is not None else self.rng.random()
        z = np.sqrt(-2.0 * np.log(u1)) * np.sin(2.0 * np.pi * u2)
        if size is None:
            return float(mean + stddev * z)
        return mean + stddev * z
