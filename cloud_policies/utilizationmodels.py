"""Utilization models: how much of a resource a cloudlet uses over time."""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional
import numpy as np


class UtilizationModel(ABC):
    """Abstract base class for utilization models.

    Utilization is a fraction in ``[0, 1]`` of the resource requested.
    """

    @abstractmethod
    def get_utilization(self, time: float) -> float:
        pass


class UtilizationModelFull(UtilizationModel):
    """Always uses 100% of the resource."""

    def get_utilization(self, time: float) -> float:
        return 1.0


class UtilizationModelNull(UtilizationModel):
    """Never uses the resource."""

    def get_utilization(self, time: float) -> float:
        return 0.0


class UtilizationModelDynamic(UtilizationModel):
    """Utilization that changes over time through an increment function.

    With no increment function the utilization stays at ``initial_utilization``.
    """

    def __init__(self, initial_utilization: float = 0.0, max_utilization: float = 1.0):
        if not 0.0 <= initial_utilization <= 1.0:
            raise ValueError(f"Initial utilization must be in [0, 1]: {initial_utilization}")
        if not 0.0 <= max_utilization <= 1.0:
            raise ValueError(f"Max utilization must be in [0, 1]: {max_utilization}")

        self.initial_utilization = initial_utilization
        self.max_utilization = max_utilization
        self.increment_function: Optional[Callable[[float, float], float]] = None

    def set_increment_function(self, fn: Callable[[float, float], float]) -> "UtilizationModelDynamic":
        """Set ``fn(initial_utilization, time) -> utilization``."""
        self.increment_function = fn
        return self

    def get_utilization(self, time: float) -> float:
        if self.increment_function is None:
            utilization = self.initial_utilization
        else:
            utilization = self.increment_function(self.initial_utilization, time)
        return float(min(max(utilization, 0.0), self.max_utilization))


class UtilizationModelStochastic(UtilizationModel):
    """Uniformly random utilization, stable for repeated queries at the same time.

    Every queried time is remembered so a repeated query returns the same
    value. ``history_size`` caps how many times are kept, dropping the oldest
    first; the default ``None`` keeps all of them.
    """

    def __init__(self, seed: Optional[int] = None, history_size: Optional[int] = None):
        if history_size is not None and history_size < 1:
            raise ValueError(f"History size must be positive: {history_size}")

        self.rng = np.random.default_rng(seed)
        self.history_size = history_size
        self.history: Dict[float, float] = {}

    def get_utilization(self, time: float) -> float:
        if time not in self.history:
            self.history[time] = float(self.rng.uniform(0.0, 1.0))
            if self.history_size is not None and len(self.history) > self.history_size:
                del self.history[next(iter(self.history))]
        return self.history[time]
