"""Interchangeable executors implementing the pixel filters.

- numpy: vectorised implementation, the default
- jit: Numba-compiled pixel loops
- pillow: native lookup tables for per-channel filters
- fallback: interpreter-only loops sharing the JIT kernels' maths
"""

from __future__ import annotations

import logging

from ...errors import BackendUnavailableError
from .base import FilterExecutor
from .numpy_executor import NumpyExecutor
from .pillow_executor import PillowExecutor

_LOGGER = logging.getLogger(__name__)

BACKENDS = ("numpy", "jit", "pillow", "fallback")


def _load_numba_executor(name: str) -> FilterExecutor:
    try:
        if name == "jit":
            from .jit_executor import JitExecutor

            return JitExecutor()
        from .fallback_executor import FallbackExecutor

        return FallbackExecutor()
    except ImportError as exc:
        raise BackendUnavailableError(f"Backend {name!r} requires numba: {exc}") from exc


def select_backend(name: str | FilterExecutor = "auto") -> FilterExecutor:
    """Return the executor registered under *name*.

    ``"auto"`` resolves to the NumPy executor, which needs no warm-up.
    Executor instances pass through unchanged.
    """

    if isinstance(name, FilterExecutor):
        return name

    key = name.strip().lower()
    if key in ("auto", "numpy"):
        executor: FilterExecutor = NumpyExecutor()
    elif key == "pillow":
        executor = PillowExecutor()
    elif key in ("jit", "fallback"):
        executor = _load_numba_executor(key)
    else:
        raise BackendUnavailableError(
            f"Unknown backend {name!r}; expected one of {', '.join(BACKENDS)} or 'auto'"
        )
    _LOGGER.debug("Selected %s executor for backend %r", executor.name, name)
    return executor


__all__ = ["BACKENDS", "FilterExecutor", "select_backend"]
