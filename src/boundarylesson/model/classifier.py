"""The user-controlled linear classifier y = weight * x + bias."""
from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassifierParams:
    weight: float = 0.0
    bias: float = 0.0


class ClassifierState:
    """
    Holds the live weight and bias. Directional input is integrated over
    elapsed time; no bounds are enforced on either value.
    """

    def __init__(self) -> None:
        self._params = ClassifierParams()

    @property
    def params(self) -> ClassifierParams:
        return self._params

    @property
    def weight(self) -> float:
        return self._params.weight

    @property
    def bias(self) -> float:
        return self._params.bias

    def integrate(
        self,
        weight_delta: int,
        bias_delta: int,
        dt: float,
        weight_rate: float,
        bias_rate: float,
    ) -> ClassifierParams:
        """
        Move the boundary by `rate * delta * dt` on each axis.

        Args:
            weight_delta: -1, 0 or +1 from the held weight keys.
            bias_delta: -1, 0 or +1 from the held bias keys.
            dt: Seconds since the previous tick.
            weight_rate: Weight units per second.
            bias_rate: Bias units per second.
        """
        if weight_delta or bias_delta:
            self._params = ClassifierParams(
                weight=self._params.weight + weight_rate * weight_delta * dt,
                bias=self._params.bias + bias_rate * bias_delta * dt,
            )
        return self._params

    def set(self, weight: float, bias: float) -> None:
        """Place the boundary directly."""
        self._params = ClassifierParams(weight=float(weight), bias=float(bias))

    def reset(self) -> None:
        self._params = ClassifierParams()
        logger.debug("Classifier reset to weight=0, bias=0.")
