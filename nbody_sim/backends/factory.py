"""Backend factory for creating compute backends."""

from typing import List, Optional
from nbody_sim.backends.base import Backend
from nbody_sim.backends.numpy_backend import NumPyBackend
from nbody_sim.errors import InvalidArgumentError

_BACKENDS = {
    "numpy": NumPyBackend,
}


def list_available_backends() -> List[str]:
    """List all available backends.

    Returns:
        List of backend names that can be instantiated
    """
    return list(_BACKENDS.keys())


def get_backend(name: Optional[str] = None) -> Backend:
    """Get a backend instance.

    Args:
        name: Backend name. If None, returns the NumPy backend.

    Returns:
        Backend instance

    Raises:
        InvalidArgumentError: If requested backend is not available
    """
    if name is None:
        return NumPyBackend()

    backend_class = _BACKENDS.get(name.lower()) if isinstance(name, str) else None
    if backend_class is None:
        available = list_available_backends()
        raise InvalidArgumentError(f"Unknown backend '{name}'. Available: {available}")
    return backend_class()
