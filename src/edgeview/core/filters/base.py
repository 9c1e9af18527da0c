"""Common interface implemented by every filter executor."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from ..filter_kind import FilterKind


class FilterExecutor(ABC):
    """Strategy running one :class:`FilterKind` over an RGBA array.

    Executors receive a read-only ``(height, width, 4)`` ``uint8`` array and
    must return a new array of the same shape.  They never write into their
    input and keep no state between calls, so a single instance can be shared
    by concurrent callers.
    """

    name: str = "unknown"
    """Short identifier used by :func:`select_backend` (e.g. ``"numpy"``)."""

    @classmethod
    def is_available(cls) -> bool:
        """Return ``True`` when the executor's runtime requirements are met."""

        return True

    @abstractmethod
    def apply(self, pixels: np.ndarray, kind: FilterKind) -> np.ndarray:
        """Return *pixels* transformed by *kind*."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"
