"""Array interface used by the force and integration kernels."""

from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple, Union
import numpy as np


class Backend(ABC):
    """Array operations the physics code needs, and nothing more.

    Forces, integrators and diagnostics only touch state arrays through
    these methods. ``to_numpy`` is the single exit point for reporting
    and file output.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier shown in run headers and accepted by ``get_backend``."""

    @abstractmethod
    def array(self, data: Any, dtype=None) -> Any:
        """Copy ``data`` into a new array (float64 unless ``dtype`` is given)."""

    @abstractmethod
    def zeros(self, shape: Tuple[int, ...], dtype=None) -> Any:
        pass

    @abstractmethod
    def sum(self, array: Any, axis: Union[int, Tuple[int, ...]] = None, keepdims: bool = False) -> Any:
        pass

    # Element-wise arithmetic

    @abstractmethod
    def sqrt(self, array: Any) -> Any:
        pass

    @abstractmethod
    def square(self, array: Any) -> Any:
        pass

    @abstractmethod
    def add(self, a: Any, b: Any) -> Any:
        pass

    @abstractmethod
    def subtract(self, a: Any, b: Any) -> Any:
        pass

    @abstractmethod
    def multiply(self, a: Any, b: Any) -> Any:
        pass

    @abstractmethod
    def divide(self, a: Any, b: Any) -> Any:
        pass

    @abstractmethod
    def maximum(self, a: Any, b: Any) -> Any:
        """Element-wise maximum; used to floor pair distances under "clamp"."""

    @abstractmethod
    def where(self, condition: Any, x: Any, y: Any) -> Any:
        """Masked select; used to zero skipped and self pairs."""

    # Shape helpers

    @abstractmethod
    def reshape(self, array: Any, newshape: Tuple[int, ...]) -> Any:
        pass

    @abstractmethod
    def expand_dims(self, array: Any, axis: int) -> Any:
        pass

    @abstractmethod
    def eye(self, n: int, dtype=None) -> Any:
        """n x n identity; ``dtype=bool`` gives the self-pair mask."""

    @abstractmethod
    def isfinite(self, array: Any) -> Any:
        pass

    @abstractmethod
    def to_numpy(self, array: Any) -> np.ndarray:
        pass

    @abstractmethod
    def random_uniform(
        self,
        shape: Tuple[int, ...],
        low: float = 0.0,
        high: float = 1.0,
        rng: Optional[np.random.Generator] = None,
    ) -> Any:
        """Sample uniformly from [low, high).

        Args:
            shape: Output shape
            low: Inclusive lower bound
            high: Exclusive upper bound
            rng: Generator to draw from; a fresh unseeded one if omitted

        Returns:
            Array of samples
        """
